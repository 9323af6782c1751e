"""Main interactive event loop for the terminal UI.

Multiplexes the key fd and the event stream with ``select`` and hands each
key or stream line to the coordinator, one at a time. Rendering happens
only when the coordinator reports itself dirty.
"""

from __future__ import annotations

import logging
import os
import select
import shutil
from collections.abc import Callable, Iterable

from ..coordinator import ViewCoordinator
from ..errors import ProtocolError
from ..input import _PENDING_BYTES, read_key
from ..report.rendering import render_report
from .stream import EventStream
from .terminal import TerminalController

logger = logging.getLogger(__name__)

IDLE_TIMEOUT_SECONDS = 0.12


def feed_lines(coordinator: ViewCoordinator, lines: Iterable[str]) -> int:
    """Apply stream lines and return how many changed the tree.

    Events with missing required fields are reported and skipped; a line
    that is not JSON propagates and ends the session.
    """
    changed = 0
    for line in lines:
        try:
            if coordinator.handle_payload(line):
                changed += 1
        except ProtocolError as exc:
            logger.warning("malformed test event skipped: %s", exc)
    return changed


def run_main_loop(
    coordinator: ViewCoordinator,
    terminal: TerminalController,
    key_fd: int,
    stream: EventStream | None,
    *,
    get_terminal_size: Callable[[tuple[int, int]], os.terminal_size] = shutil.get_terminal_size,
    idle_timeout: float = IDLE_TIMEOUT_SECONDS,
) -> None:
    """Run until a quit key arrives.

    The stream may close long before the user quits; the report stays
    browsable after EOF.
    """
    with terminal.raw_mode():
        while True:
            term = get_terminal_size((80, 24))
            coordinator.resize(term.lines, term.columns)
            if coordinator.dirty:
                terminal.write_frame(coordinator.render())
                coordinator.dirty = False

            watched = [key_fd]
            if stream is not None and not stream.closed:
                watched.append(stream.fd)
            if _PENDING_BYTES:
                ready = [key_fd]
            else:
                ready, _, _ = select.select(watched, [], [], idle_timeout)

            if stream is not None and stream.fd in ready and not stream.closed:
                feed_lines(coordinator, stream.read_lines())
            if key_fd in ready:
                key = read_key(key_fd, timeout_ms=0)
                if key and coordinator.handle_key(key):
                    break


def drain_stream(coordinator: ViewCoordinator, stream: EventStream) -> None:
    """Read ``stream`` to EOF, applying every line."""
    while not stream.closed:
        feed_lines(coordinator, stream.read_lines())


def render_static_report(coordinator: ViewCoordinator, cols: int) -> str:
    """Render the whole report once, tall enough to show every row."""
    report = coordinator.report
    rows = len(report.items(coordinator.run)) + 2
    frame = render_report(coordinator.run, report, rows, cols, coordinator.theme, show_selection=False)
    return "\n".join(frame) + "\n"


__all__ = [
    "IDLE_TIMEOUT_SECONDS",
    "drain_stream",
    "feed_lines",
    "render_static_report",
    "run_main_loop",
]
