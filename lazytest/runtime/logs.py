"""Diagnostic logging setup for interactive sessions.

The TUI owns the terminal, so records go to a file under the user log
directory instead of stderr.
"""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME

LOG_FILENAME = "lazytest.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def default_log_path() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def configure_logging(level: str, log_file: Path | None = None) -> Path | None:
    """Attach a file handler to the package logger and return its path.

    Returns ``None`` when the log file cannot be opened; logging then stays
    silent for the session.
    """
    path = log_file if log_file is not None else default_log_path()
    package_logger = logging.getLogger("lazytest")
    package_logger.setLevel(level)
    package_logger.propagate = False
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        package_logger.addHandler(logging.NullHandler())
        return None
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    return path


__all__ = [
    "LOG_FILENAME",
    "configure_logging",
    "default_log_path",
]
