"""File-based session storage adapter."""

import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class FileSessionStorage:
    """
    Key/value storage in a single JSON file.

    Implements SessionStorage protocol. Every write replaces the whole file
    atomically, so values written together land together.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError, OSError):
            logger.warning(f"Ignoring unreadable session file {self.path}")
            return {}
        if not isinstance(data, dict):
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _save(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps(data), encoding="utf-8")
        tmp.chmod(0o600)
        os.replace(tmp, self.path)

    def get_item(self, key: str) -> str | None:
        """Read a value. Returns None if not found."""
        return self._load().get(key)

    def set_items(self, items: dict[str, str]) -> None:
        """Write several values in one file replace."""
        data = self._load()
        data.update(items)
        self._save(data)

    def remove_items(self, *keys: str) -> None:
        """Remove several values in one file replace."""
        data = self._load()
        if not any(k in data for k in keys):
            return
        for key in keys:
            data.pop(key, None)
        self._save(data)
