"""Task list controller - fetch, filter, sort and mutate the user's tasks."""

import logging
from dataclasses import replace
from typing import Callable

from taskdesk.core.session import Session
from taskdesk.core.tasks import (
    ALL,
    SortField,
    SortOrder,
    Task,
    TaskDraft,
    TaskStatus,
    ViewState,
    derive_view,
    merge_task,
    remove_task,
)
from taskdesk.errors import ApiError, FetchFailed, MutationFailed, NotAuthenticated
from taskdesk.ports import Navigator, TaskRepository
from taskdesk.ports.navigator import LOGIN, TASKS
from taskdesk.session import SessionStore

logger = logging.getLogger(__name__)

DELETE_PROMPT = "Are you sure you want to delete this task?"

Confirm = Callable[[str], bool]


class TaskListController:
    """
    Owns the fetched task collection and the list's view state.

    The rendered list is always `derive_view(tasks, filter, field, order)`;
    nothing else affects which tasks show or in what order.
    """

    def __init__(
        self,
        repo: TaskRepository,
        session: SessionStore,
        navigator: Navigator,
        confirm: Confirm,
        default_state: ViewState | None = None,
    ):
        self._repo = repo
        self._session = session
        self._navigator = navigator
        self._confirm = confirm
        self._default_state = default_state or ViewState()
        self.state = replace(self._default_state)
        self._tasks: list[Task] = []
        self._unsubscribe: Callable[[], None] | None = None
        # Fetch sequencing: responses older than the last applied one are dropped.
        self._issued_seq = 0
        self._applied_seq = 0
        self._in_flight = 0
        self._was_authenticated = False
        self.is_loading = False
        self.error: str | None = None

    # ----- lifecycle -----

    def open(self) -> list[Task]:
        """Enter the list view: watch the session, and fetch if logged in."""
        if self._unsubscribe is None:
            self._unsubscribe = self._session.subscribe(self._on_session_change)
        self._was_authenticated = self._session.is_authenticated
        if self.guard():
            self.fetch_all()
        return self.view()

    def close(self) -> None:
        """Leave the list view. View state and tasks are dropped."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.state = replace(self._default_state)
        self._tasks = []
        self.error = None

    def guard(self) -> bool:
        """
        True if the view may show tasks.

        Waits (returns False, no redirect) while the session is still being
        restored. Without a session, asks for the login view instead.
        """
        if self._session.is_loading:
            return False
        if not self._session.is_authenticated:
            self._navigator.navigate(LOGIN)
            return False
        return True

    def _on_session_change(self, session: Session) -> None:
        was_authenticated = self._was_authenticated
        self._was_authenticated = session.is_authenticated
        if was_authenticated and not session.is_authenticated:
            # logout already sent the user to the login view
            self._tasks = []
            return
        if not self.guard():
            self._tasks = []
            return
        try:
            self.fetch_all()
        except FetchFailed as e:
            self.error = e.message

    def _require_session(self) -> None:
        if not self._session.is_authenticated:
            self._navigator.navigate(LOGIN)
            raise NotAuthenticated()

    # ----- reads -----

    @property
    def tasks(self) -> list[Task]:
        """The fetched collection, in API order."""
        return list(self._tasks)

    def view(self) -> list[Task]:
        """The filtered and sorted list the user sees."""
        return derive_view(
            self._tasks,
            self.state.filter_status,
            self.state.sort_field,
            self.state.sort_order,
        )

    def fetch_all(self) -> list[Task]:
        """
        Replace the collection with the API's current one.

        On failure the previous collection is kept and FetchFailed is raised.
        A fetch overtaken by a newer one that already landed is ignored,
        whether it succeeds or fails.
        """
        self._require_session()
        self._issued_seq += 1
        seq = self._issued_seq
        self._in_flight += 1
        self.is_loading = True
        try:
            tasks = self._repo.fetch_all()
        except ApiError as e:
            logger.error(f"Error fetching tasks: {e.message}")
            if seq < self._applied_seq:
                return self.tasks
            self.error = e.message_or("Failed to fetch tasks")
            raise FetchFailed(self.error) from e
        finally:
            self._in_flight -= 1
            self.is_loading = self._in_flight > 0

        if seq < self._applied_seq:
            logger.debug(f"Discarding stale task fetch #{seq} (applied #{self._applied_seq})")
            return self.tasks

        self._applied_seq = seq
        self._tasks = list(tasks)
        self.error = None
        logger.debug(f"Fetched {len(tasks)} tasks")
        return self.tasks

    def get(self, task_id: int) -> Task:
        """Fetch one task, e.g. to pre-fill the edit form."""
        self._require_session()
        try:
            return self._repo.fetch(task_id)
        except ApiError as e:
            logger.error(f"Error fetching task {task_id}: {e.message}")
            raise FetchFailed(e.message_or("Failed to fetch task")) from e

    # ----- view state -----

    def set_filter(self, status: TaskStatus | str) -> list[Task]:
        """Show only one status, or "all"."""
        self.state.filter_status = ALL if status == ALL else TaskStatus(status)
        return self.view()

    def set_sort(self, field: SortField | str, order: SortOrder | str | None = None) -> list[Task]:
        self.state.sort_field = SortField(field)
        if order is not None:
            self.state.sort_order = SortOrder(order)
        return self.view()

    def toggle_order(self) -> list[Task]:
        if self.state.sort_order == SortOrder.ASC:
            self.state.sort_order = SortOrder.DESC
        else:
            self.state.sort_order = SortOrder.ASC
        return self.view()

    # ----- mutations -----

    def create(self, draft: TaskDraft) -> Task:
        """Create a task, then head back to the list."""
        self._require_session()
        try:
            task = self._repo.create(draft)
        except ApiError as e:
            logger.error(f"Error creating task: {e.message}")
            raise MutationFailed(e.message_or("Failed to create task")) from e
        self._tasks = merge_task(self._tasks, task)
        logger.info(f"Created task {task.id}")
        self._navigator.navigate(TASKS)
        return task

    def update(self, task_id: int, draft: TaskDraft) -> Task:
        """Save edits to a task, then head back to the list."""
        self._require_session()
        try:
            task = self._repo.update(task_id, draft)
        except ApiError as e:
            logger.error(f"Error updating task {task_id}: {e.message}")
            raise MutationFailed(e.message_or("Failed to update task")) from e
        self._tasks = merge_task(self._tasks, task)
        logger.info(f"Updated task {task_id}")
        self._navigator.navigate(TASKS)
        return task

    def remove(self, task_id: int) -> bool:
        """
        Delete a task after the user confirms.

        Returns False if the user declined. On success exactly that task is
        dropped from the local collection; the rest keep their order.
        """
        self._require_session()
        if not self._confirm(DELETE_PROMPT):
            return False
        try:
            self._repo.delete(task_id)
        except ApiError as e:
            logger.error(f"Error deleting task {task_id}: {e.message}")
            raise MutationFailed(e.message_or("Failed to delete task")) from e
        self._tasks = remove_task(self._tasks, task_id)
        logger.info(f"Deleted task {task_id}")
        return True
