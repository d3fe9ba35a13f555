"""Task repository interface."""

from typing import Protocol

from taskdesk.core.tasks import Task, TaskDraft


class TaskRepository(Protocol):
    """Interface for reading and writing tasks on any backend."""

    def fetch_all(self) -> list[Task]:
        """Fetch every task of the current user."""
        ...

    def fetch(self, task_id: int) -> Task:
        """Fetch a single task."""
        ...

    def create(self, draft: TaskDraft) -> Task:
        """Create a task and return it as stored."""
        ...

    def update(self, task_id: int, draft: TaskDraft) -> Task:
        """Replace a task's editable fields and return it as stored."""
        ...

    def delete(self, task_id: int) -> None:
        """Delete a task."""
        ...
