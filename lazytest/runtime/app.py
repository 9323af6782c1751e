"""Session bootstrap: wire config, theme, event stream, and terminal."""

from __future__ import annotations

import logging
import os
import shutil
import sys

from ..coordinator import ReportScreen, ViewCoordinator
from ..report.filtering import ResultFilter
from ..report.navigation import ReportView
from ..ui_theme import resolve_theme
from .config import load_default_filter, load_theme_name
from .loop import drain_stream, render_static_report, run_main_loop
from .stream import EventStream
from .terminal import TerminalController

logger = logging.getLogger(__name__)

TTY_PATH = "/dev/tty"


def build_coordinator(theme_name: str | None, no_color: bool) -> ViewCoordinator:
    """Create the initial coordinator from persisted preferences."""
    report = ReportView(result_filter=ResultFilter(load_default_filter()))
    theme = resolve_theme(theme_name or load_theme_name(), no_color=no_color)
    return ViewCoordinator(theme=theme, screen=ReportScreen(report))


def _open_key_fd(stream: EventStream) -> tuple[int, bool]:
    """Return ``(fd, owned)`` for reading keys.

    Keys come from stdin unless stdin carries the event stream or is not a
    terminal, in which case the controlling tty is opened.
    """
    stdin_fd = sys.stdin.fileno()
    if stream.fd != stdin_fd and os.isatty(stdin_fd):
        return stdin_fd, False
    return os.open(TTY_PATH, os.O_RDONLY), True


def run_session(stream: EventStream, theme_name: str | None, no_color: bool, nopager: bool) -> None:
    """Run the interactive report over ``stream``, or print it once with ``nopager``."""
    stdout_fd = sys.stdout.fileno()
    interactive = not nopager and os.isatty(stdout_fd)
    coordinator = build_coordinator(theme_name, no_color or not os.isatty(stdout_fd))

    try:
        if not interactive:
            drain_stream(coordinator, stream)
            columns = shutil.get_terminal_size((80, 24)).columns
            sys.stdout.write(render_static_report(coordinator, columns))
            return

        key_fd, owns_key_fd = _open_key_fd(stream)
        try:
            terminal = TerminalController(key_fd, stdout_fd)
            logger.info("interactive session started")
            run_main_loop(coordinator, terminal, key_fd, stream)
        finally:
            if owns_key_fd:
                os.close(key_fd)
    finally:
        stream.close()
