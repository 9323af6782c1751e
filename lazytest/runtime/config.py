"""Persistent JSON config helpers.

Stores the UI theme, the result filter applied at startup, and the log
level. All access is defensive: malformed or missing config falls back to
defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from ..events import TestResult

APP_NAME = "lazytest"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_LOG_LEVEL = "WARNING"

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

    Filesystem errors are ignored so a read-only config directory never
    breaks a session.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.debug("config not saved to %s: %s", CONFIG_PATH, exc)


def _load_text(key: str) -> str | None:
    """Return the stripped string stored under ``key``, if any."""
    value = load_config().get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def load_theme_name() -> str | None:
    return _load_text("theme")


def save_theme_name(theme_name: str) -> None:
    """Remember ``theme_name`` for later sessions, keeping other keys."""
    name = theme_name.strip()
    if name:
        save_config({**load_config(), "theme": name})


def load_default_filter() -> set[TestResult]:
    """Load result kinds enabled at startup; unknown names are dropped."""
    value = load_config().get("default_filter")
    if not isinstance(value, list):
        return set()
    enabled: set[TestResult] = set()
    for name in value:
        if not isinstance(name, str):
            continue
        try:
            enabled.add(TestResult(name.strip().lower()))
        except ValueError:
            continue
    return enabled


def load_log_level() -> str:
    """Return a valid ``logging`` level name, defaulting to ``WARNING``."""
    candidate = (_load_text("log_level") or DEFAULT_LOG_LEVEL).upper()
    if isinstance(logging.getLevelName(candidate), int):
        return candidate
    return DEFAULT_LOG_LEVEL


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_LOG_LEVEL",
    "load_config",
    "load_default_filter",
    "load_log_level",
    "load_theme_name",
    "save_config",
    "save_theme_name",
]
