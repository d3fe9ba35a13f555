"""Task REST API adapter - HTTP client for /tasks."""

from typing import Callable

import requests

from taskdesk.adapters.rest import RestClient
from taskdesk.core.tasks import Task, TaskDraft
from taskdesk.errors import ApiError


def _parse_task(data: dict) -> Task:
    try:
        return Task.from_api(data)
    except (KeyError, TypeError, ValueError) as e:
        raise ApiError() from e


class RestTaskAdapter(RestClient):
    """
    REST adapter for the task endpoints.

    Implements TaskRepository protocol. Attaches the current bearer token to
    every call. No business logic - just I/O.
    """

    def __init__(
        self,
        base_url: str,
        token_provider: Callable[[], str | None],
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ):
        super().__init__(base_url, timeout, session)
        self._token_provider = token_provider

    def _headers(self) -> dict[str, str]:
        token = self._token_provider()
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    def fetch_all(self) -> list[Task]:
        """Fetch every task of the current user."""
        data = self._json("GET", "/tasks")
        if not isinstance(data, list):
            raise ApiError()
        return [_parse_task(t) for t in data]

    def fetch(self, task_id: int) -> Task:
        """Fetch a single task."""
        return _parse_task(self._json("GET", f"/tasks/{task_id}"))

    def create(self, draft: TaskDraft) -> Task:
        """Create a task."""
        return _parse_task(self._json("POST", "/tasks", json=draft.to_api()))

    def update(self, task_id: int, draft: TaskDraft) -> Task:
        """Update a task."""
        return _parse_task(self._json("PUT", f"/tasks/{task_id}", json=draft.to_api()))

    def delete(self, task_id: int) -> None:
        """Delete a task."""
        self._request("DELETE", f"/tasks/{task_id}")
