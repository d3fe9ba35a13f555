"""Durable key/value storage interface for session state."""

from typing import Protocol


class SessionStorage(Protocol):
    """String key/value storage that survives restarts."""

    def get_item(self, key: str) -> str | None:
        """Read a value. Returns None if not found."""
        ...

    def set_items(self, items: dict[str, str]) -> None:
        """Write several values in one operation."""
        ...

    def remove_items(self, *keys: str) -> None:
        """Remove several values in one operation. Missing keys are ignored."""
        ...
