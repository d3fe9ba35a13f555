"""Create/edit form controller."""

import logging

from taskdesk.core.tasks import Task, TaskDraft
from taskdesk.errors import FetchFailed, MutationFailed, ValidationError
from taskdesk.task_list import TaskListController

logger = logging.getLogger(__name__)


class TaskForm:
    """
    Backs the "new task" and "edit task" screens.

    Without a task_id the form creates; with one it edits. Drafts are
    validated before any request is sent. The last failure is kept in
    `error` for the view to show.
    """

    def __init__(self, tasks: TaskListController, task_id: int | None = None):
        self._tasks = tasks
        self.task_id = task_id
        self.draft = TaskDraft()
        self.error: str | None = None
        self.is_submitting = False

    @property
    def is_edit(self) -> bool:
        return self.task_id is not None

    def load(self) -> TaskDraft:
        """Pre-fill the draft from the task being edited."""
        if self.task_id is None:
            return self.draft
        try:
            task = self._tasks.get(self.task_id)
        except FetchFailed as e:
            self.error = e.message
            raise
        self.draft = TaskDraft.from_task(task)
        return self.draft

    def submit(self, draft: TaskDraft | None = None) -> Task:
        """Validate and save. Raises ValidationError or MutationFailed."""
        if draft is not None:
            self.draft = draft
        self.error = None

        problems = self.draft.validate()
        if problems:
            self.error = "; ".join(problems)
            raise ValidationError(problems)

        self.is_submitting = True
        try:
            if self.task_id is None:
                return self._tasks.create(self.draft)
            return self._tasks.update(self.task_id, self.draft)
        except MutationFailed as e:
            self.error = e.message
            raise
        finally:
            self.is_submitting = False
