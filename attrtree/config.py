"""Persistent JSON config helpers.

Stores the default selection mode and log level for the CLI adapter.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from .store.state import SelectionMode

APP_NAME = "attrtree"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

logger = logging.getLogger(__name__)


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem/serialization errors are logged and otherwise ignored so a
    read-only config directory never breaks a command.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError) as exc:
        logger.debug("could not write config %s: %s", CONFIG_PATH, exc)


def load_selection_mode() -> SelectionMode:
    """Return persisted default selection mode, ``multi`` when unset/invalid."""
    value = load_config().get("selection_mode")
    if not isinstance(value, str):
        return SelectionMode.MULTI
    try:
        return SelectionMode(value.strip().lower())
    except ValueError:
        return SelectionMode.MULTI


def save_selection_mode(mode: SelectionMode | str) -> None:
    """Persist default selection mode; unknown values are ignored."""
    try:
        normalized = SelectionMode(mode)
    except ValueError:
        return
    config = load_config()
    config["selection_mode"] = normalized.value
    save_config(config)


def load_log_level() -> str:
    """Load persisted log level name, ``WARNING`` when unset/invalid."""
    value = load_config().get("log_level")
    if not isinstance(value, str):
        return "WARNING"
    normalized = value.strip().upper()
    return normalized if normalized in LOG_LEVELS else "WARNING"


def save_log_level(level: str) -> None:
    """Persist log level name; unknown names are ignored."""
    normalized = str(level).strip().upper()
    if normalized not in LOG_LEVELS:
        return
    config = load_config()
    config["log_level"] = normalized
    save_config(config)


__all__ = [
    "CONFIG_PATH",
    "load_config",
    "save_config",
    "load_selection_mode",
    "save_selection_mode",
    "load_log_level",
    "save_log_level",
]
