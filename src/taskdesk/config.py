"""Configuration management for taskdesk."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from taskdesk.core.tasks import SortField, SortOrder

logger = logging.getLogger(__name__)

TASKDESK_HOME = Path(os.environ.get("TASKDESK_HOME", Path.home() / ".taskdesk"))
CONFIG_FILE = TASKDESK_HOME / "config" / "taskdesk.conf"
SESSION_FILE = TASKDESK_HOME / "config" / ".session.json"


@dataclass
class Config:
    """taskdesk configuration."""

    api_url: str = "http://localhost:3001"
    request_timeout: float = 10.0
    date_format: str = "%b %d, %Y %I:%M %p"
    default_sort: SortField = SortField.CREATED_AT
    default_order: SortOrder = SortOrder.DESC
    session_file: Path = SESSION_FILE


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    # Handle quoted values with inline comments: "value" # comment
    if value.startswith('"'):
        end_quote = value.find('"', 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if value.startswith("'"):
        end_quote = value.find("'", 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from taskdesk.conf, then apply environment overrides."""
    config = Config()
    config_file = config_file or CONFIG_FILE

    if config_file.exists():
        _apply_file(config, config_file)

    if os.environ.get("TASKDESK_API_URL"):
        config.api_url = os.environ["TASKDESK_API_URL"]

    config.api_url = config.api_url.rstrip("/")
    return config


def _apply_file(config: Config, config_file: Path) -> None:
    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "api_url":
                config.api_url = value
            case "request_timeout":
                try:
                    config.request_timeout = float(value)
                except ValueError:
                    logger.warning(f"Invalid REQUEST_TIMEOUT: {value}")
            case "date_format":
                config.date_format = value
            case "default_sort":
                try:
                    config.default_sort = SortField(value)
                except ValueError:
                    logger.warning(f"Invalid DEFAULT_SORT: {value}")
            case "default_order":
                try:
                    config.default_order = SortOrder(value.upper())
                except ValueError:
                    logger.warning(f"Invalid DEFAULT_ORDER: {value}")
            case "session_file":
                config.session_file = Path(value).expanduser()
