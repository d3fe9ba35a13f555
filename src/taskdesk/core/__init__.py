"""Functional core - pure business logic with no I/O."""

from .tasks import (
    ALL,
    SortField,
    SortOrder,
    Task,
    TaskDraft,
    TaskStatus,
    ViewState,
    derive_view,
    filter_by_status,
    is_past_due,
    sort_tasks,
)
from .session import Session, User

__all__ = [
    # Tasks
    "ALL",
    "SortField",
    "SortOrder",
    "Task",
    "TaskDraft",
    "TaskStatus",
    "ViewState",
    "derive_view",
    "filter_by_status",
    "is_past_due",
    "sort_tasks",
    # Session
    "Session",
    "User",
]
