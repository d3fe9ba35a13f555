"""Adapters - I/O implementations of ports."""

from .task_api import RestTaskAdapter
from .auth_api import RestAuthAdapter
from .file_storage import FileSessionStorage

__all__ = [
    "RestTaskAdapter",
    "RestAuthAdapter",
    "FileSessionStorage",
]
