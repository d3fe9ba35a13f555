"""Application wiring shared by the CLI and any other front end.

`build_app` constructs the object graph once: one SessionStore owned by the
App, injected into the controllers that need it.
"""

import logging
from dataclasses import dataclass

from .adapters.auth_api import RestAuthAdapter
from .adapters.file_storage import FileSessionStorage
from .adapters.task_api import RestTaskAdapter
from .config import Config, load_config
from .core.tasks import ViewState
from .ports import Navigator
from .session import SessionStore
from .task_form import TaskForm
from .task_list import Confirm, TaskListController

logger = logging.getLogger(__name__)


class LoggingNavigator:
    """Navigator for front ends without views; remembers the last route."""

    def __init__(self):
        self.route: str | None = None

    def navigate(self, route: str) -> None:
        logger.debug(f"Navigate to {route}")
        self.route = route


@dataclass
class App:
    config: Config
    session: SessionStore
    tasks: TaskListController
    navigator: Navigator

    def task_form(self, task_id: int | None = None) -> TaskForm:
        return TaskForm(self.tasks, task_id)


def build_app(
    config: Config | None = None,
    confirm: Confirm | None = None,
    navigator: Navigator | None = None,
) -> App:
    """Wire adapters, session and controllers, and restore the saved session."""
    config = config or load_config()
    navigator = navigator or LoggingNavigator()
    confirm = confirm or (lambda _prompt: True)

    storage = FileSessionStorage(config.session_file)
    auth = RestAuthAdapter(config.api_url, timeout=config.request_timeout)
    session = SessionStore(auth, storage, navigator)
    repo = RestTaskAdapter(
        config.api_url,
        token_provider=lambda: session.token,
        timeout=config.request_timeout,
    )
    tasks = TaskListController(
        repo,
        session,
        navigator,
        confirm,
        default_state=ViewState(sort_field=config.default_sort, sort_order=config.default_order),
    )
    session.restore()
    return App(config=config, session=session, tasks=tasks, navigator=navigator)
