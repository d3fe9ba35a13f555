"""Pure task domain logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable

ALL = "all"


class TaskStatus(str, Enum):
    """Task lifecycle status. Values double as wire values and display labels."""

    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class SortField(str, Enum):
    """Fields the task list can be ordered by."""

    CREATED_AT = "createdAt"
    DUE_DATE = "dueDate"
    TITLE = "title"
    STATUS = "status"


class SortOrder(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp. Naive values are taken as UTC."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: datetime) -> str:
    """Format an instant the way the API expects: UTC, milliseconds, Z suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    utc = value.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def timestamp_ms(value: datetime | None) -> int:
    """Milliseconds since epoch (0 when unset)."""
    if value is None:
        return 0
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp() * 1000)


@dataclass
class Task:
    """A task as held by the client (a transient copy of the API's record)."""

    id: int
    title: str
    description: str
    status: TaskStatus
    due_date: datetime
    user_id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_past_due(self, now: datetime | None = None) -> bool:
        """Due before `now` and not yet completed."""
        return is_past_due(self, now)

    @classmethod
    def from_api(cls, data: dict) -> "Task":
        """Create Task from an API response."""
        created = data.get("createdAt")
        updated = data.get("updatedAt")
        return cls(
            id=int(data["id"]),
            title=data["title"],
            description=data.get("description") or "",
            status=TaskStatus(data["status"]),
            due_date=parse_timestamp(data["dueDate"]),
            user_id=data.get("userId"),
            created_at=parse_timestamp(created) if created else None,
            updated_at=parse_timestamp(updated) if updated else None,
        )

    def to_dict(self) -> dict:
        """Serialize back to the API's JSON shape."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "dueDate": format_timestamp(self.due_date),
            "userId": self.user_id,
            "createdAt": format_timestamp(self.created_at) if self.created_at else None,
            "updatedAt": format_timestamp(self.updated_at) if self.updated_at else None,
        }


@dataclass
class TaskDraft:
    """Fields a user submits when creating or editing a task."""

    title: str = ""
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    due_date: datetime | None = None

    def validate(self) -> list[str]:
        """Return the problems that keep this draft from being submitted."""
        problems = []
        if not self.title.strip():
            problems.append("Title is required")
        if not self.description.strip():
            problems.append("Description is required")
        if self.due_date is None:
            problems.append("Due date is required")
        return problems

    def to_api(self) -> dict:
        """Request body for POST /tasks and PUT /tasks/{id}."""
        if self.due_date is None:
            raise ValueError("Due date is required")
        return {
            "title": self.title,
            "description": self.description,
            "status": TaskStatus(self.status).value,
            "dueDate": format_timestamp(self.due_date),
        }

    @classmethod
    def from_task(cls, task: Task) -> "TaskDraft":
        """Pre-fill a draft for editing an existing task."""
        return cls(
            title=task.title,
            description=task.description,
            status=task.status,
            due_date=task.due_date,
        )


@dataclass
class ViewState:
    """Filter and sort settings of the task list."""

    filter_status: TaskStatus | str = ALL
    sort_field: SortField = SortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC


# Each sort field maps to a typed key. Textual fields compare lower-cased.
SORT_KEYS: dict[SortField, Callable[[Task], int | str]] = {
    SortField.CREATED_AT: lambda t: timestamp_ms(t.created_at),
    SortField.DUE_DATE: lambda t: timestamp_ms(t.due_date),
    SortField.TITLE: lambda t: t.title.lower(),
    SortField.STATUS: lambda t: TaskStatus(t.status).value.lower(),
}


def filter_by_status(tasks: list[Task], status: TaskStatus | str) -> list[Task]:
    """Keep tasks with the given status; "all" keeps everything."""
    if status == ALL:
        return list(tasks)
    wanted = TaskStatus(status)
    return [t for t in tasks if t.status == wanted]


def sort_tasks(
    tasks: list[Task],
    field: SortField | str = SortField.CREATED_AT,
    order: SortOrder | str = SortOrder.DESC,
) -> list[Task]:
    """
    Sort tasks by one field.

    Stable in both directions: tasks with equal keys keep their input order.
    Pure function - returns a new list.
    """
    key = SORT_KEYS[SortField(field)]
    return sorted(tasks, key=key, reverse=SortOrder(order) == SortOrder.DESC)


def derive_view(
    tasks: list[Task],
    filter_status: TaskStatus | str = ALL,
    sort_field: SortField | str = SortField.CREATED_AT,
    sort_order: SortOrder | str = SortOrder.DESC,
) -> list[Task]:
    """
    The list the user sees: filter by status, then sort.

    Pure function - the input list is never modified.
    """
    return sort_tasks(filter_by_status(tasks, filter_status), sort_field, sort_order)


def is_past_due(task: Task, now: datetime | None = None) -> bool:
    """Past due iff the due date is strictly before `now` and the task isn't completed."""
    now = now or datetime.now(timezone.utc)
    if task.status == TaskStatus.COMPLETED:
        return False
    return timestamp_ms(task.due_date) < timestamp_ms(now)


def merge_task(tasks: list[Task], task: Task) -> list[Task]:
    """Replace the task with the same id, or append it. Returns a new list."""
    merged = [task if t.id == task.id else t for t in tasks]
    if not any(t.id == task.id for t in tasks):
        merged.append(task)
    return merged


def remove_task(tasks: list[Task], task_id: int) -> list[Task]:
    """Drop the task with the given id, keeping the others in order."""
    return [t for t in tasks if t.id != task_id]
