"""Ports - interfaces/protocols for external dependencies."""

from .task_repo import TaskRepository
from .auth_service import AuthService
from .session_storage import SessionStorage
from .navigator import Navigator

__all__ = [
    "TaskRepository",
    "AuthService",
    "SessionStorage",
    "Navigator",
]
