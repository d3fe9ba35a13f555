"""Tests for the create/edit form controller."""

from datetime import datetime, timezone

import pytest

from taskdesk.core.tasks import TaskDraft, TaskStatus
from taskdesk.errors import ApiError, FetchFailed, MutationFailed, ValidationError
from taskdesk.ports.navigator import TASKS
from taskdesk.session import SessionStore
from taskdesk.task_form import TaskForm
from taskdesk.task_list import TaskListController

from fakes import (
    FakeAuthService,
    FakeTaskRepository,
    InMemoryStorage,
    RecordingNavigator,
    make_task,
)

DUE = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def navigator():
    return RecordingNavigator()


@pytest.fixture
def repo():
    return FakeTaskRepository([make_task(1, "Existing", TaskStatus.IN_PROGRESS, description="old")])


@pytest.fixture
def tasks(repo, navigator):
    session = SessionStore(FakeAuthService(), InMemoryStorage(), navigator)
    session.restore()
    session.login("ada@example.com", "secret")
    return TaskListController(repo, session, navigator, lambda _p: True)


class TestNewTask:
    def test_starts_blank(self, tasks):
        form = TaskForm(tasks)
        assert form.is_edit is False
        assert form.draft == TaskDraft()
        assert form.draft.status == TaskStatus.TODO

    def test_submit_creates(self, tasks, repo, navigator):
        form = TaskForm(tasks)
        task = form.submit(TaskDraft(title="Write", description="docs", due_date=DUE))
        assert task.title == "Write"
        assert repo.calls[-1][0] == "create"
        assert navigator.last == TASKS
        assert form.error is None
        assert form.is_submitting is False

    def test_invalid_draft_never_sent(self, tasks, repo):
        form = TaskForm(tasks)
        with pytest.raises(ValidationError) as exc:
            form.submit(TaskDraft(title="", description="docs", due_date=DUE))
        assert exc.value.problems == ["Title is required"]
        assert form.error == "Title is required"
        assert not any(c[0] == "create" for c in repo.calls)

    def test_server_error_recorded(self, tasks, repo):
        repo.error = ApiError(status=500)
        form = TaskForm(tasks)
        with pytest.raises(MutationFailed):
            form.submit(TaskDraft(title="a", description="b", due_date=DUE))
        assert form.error == "Failed to create task"
        assert form.is_submitting is False


class TestEditTask:
    def test_load_prefills(self, tasks):
        form = TaskForm(tasks, task_id=1)
        draft = form.load()
        assert form.is_edit is True
        assert draft.title == "Existing"
        assert draft.description == "old"
        assert draft.status == TaskStatus.IN_PROGRESS

    def test_load_failure(self, tasks, repo):
        repo.error = ApiError(status=500)
        form = TaskForm(tasks, task_id=1)
        with pytest.raises(FetchFailed):
            form.load()
        assert form.error == "Failed to fetch task"

    def test_submit_updates(self, tasks, repo):
        form = TaskForm(tasks, task_id=1)
        draft = form.load()
        draft.status = TaskStatus.COMPLETED
        task = form.submit()
        assert task.status == TaskStatus.COMPLETED
        assert repo.calls[-1][0] == "update"
        assert repo.calls[-1][1] == 1

    def test_update_error_uses_server_message(self, tasks, repo):
        form = TaskForm(tasks, task_id=1)
        form.load()
        repo.error = ApiError("status must be one of To Do, In Progress, Completed", status=400)
        with pytest.raises(MutationFailed):
            form.submit()
        assert form.error.startswith("status must be one of")

    def test_load_on_new_form_is_noop(self, tasks, repo):
        form = TaskForm(tasks)
        form.load()
        assert repo.calls == []
