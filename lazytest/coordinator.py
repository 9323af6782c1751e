"""Top-level screen state machine.

The coordinator is either on the report screen or on a log screen opened
from it. A log screen keeps the report state it was opened from, so going
back restores selection, filter, and scroll exactly. Every host event is
handled to completion before the next one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .aggregator import TestRun
from .events import parse_event_line
from .input.key_logs import LogKeyContext, handle_log_key
from .input.key_report import ReportKeyContext, handle_report_key
from .logs.rendering import log_body_rows, render_log
from .logs.view import LogView
from .report.navigation import ReportView
from .report.rendering import render_report, report_body_rows
from .ui_theme import DEFAULT_THEME, UITheme

logger = logging.getLogger(__name__)

QUIT_KEYS = frozenset({"CTRL_C"})
REPORT_QUIT_KEYS = frozenset({"q"})


@dataclass
class ReportScreen:
    report: ReportView


@dataclass
class LogScreen:
    parent: ReportView
    log: LogView


Screen = ReportScreen | LogScreen


@dataclass
class ViewCoordinator:
    run: TestRun = field(default_factory=TestRun)
    theme: UITheme = DEFAULT_THEME
    rows: int = 24
    cols: int = 80
    screen: Screen = field(default_factory=lambda: ReportScreen(ReportView()))
    dirty: bool = True

    @property
    def report(self) -> ReportView:
        if isinstance(self.screen, LogScreen):
            return self.screen.parent
        return self.screen.report

    def resize(self, rows: int, cols: int) -> None:
        rows = max(1, rows)
        cols = max(1, cols)
        if (rows, cols) != (self.rows, self.cols):
            self.rows = rows
            self.cols = cols
            self.dirty = True

    def handle_payload(self, line: str) -> bool:
        """Apply one stream line; return whether a re-render is warranted.

        ``PayloadDecodeError`` and ``ProtocolError`` propagate to the host
        without touching state built from earlier lines.
        """
        event = parse_event_line(line)
        if event is None:
            return False
        if not self.run.apply(event):
            return False
        # Results arriving can shrink a filtered list under the selection.
        self.report.clamp_selection(self.run)
        self.dirty = True
        return True

    def handle_key(self, key: str) -> bool:
        """Route one key to the active screen; return ``True`` to quit."""
        if key in QUIT_KEYS:
            return True
        screen = self.screen
        if isinstance(screen, LogScreen):
            context = LogKeyContext(
                view=screen.log,
                page_rows=lambda: log_body_rows(self.rows),
                close_logs=self.close_logs,
            )
            if handle_log_key(key, context):
                self.dirty = True
            return False

        if key in REPORT_QUIT_KEYS:
            return True
        context = ReportKeyContext(
            run=self.run,
            view=screen.report,
            page_rows=lambda: report_body_rows(self.rows),
            open_logs=self.open_logs,
        )
        if handle_report_key(key, context):
            self.dirty = True
        return False

    def open_logs(self, title: str, lines: tuple[str, ...]) -> None:
        if isinstance(self.screen, LogScreen):
            return
        logger.debug("opening log view for %s (%d lines)", title, len(lines))
        self.screen = LogScreen(parent=self.screen.report, log=LogView(title=title, lines=lines))
        self.dirty = True

    def close_logs(self) -> None:
        if isinstance(self.screen, ReportScreen):
            return
        self.screen = ReportScreen(self.screen.parent)
        self.dirty = True

    def render(self, rows: int | None = None, cols: int | None = None) -> list[str]:
        """Project the active screen into frame lines.

        Only the report auto-scroll offset may change here, and repeated
        renders of the same state leave it where it is.
        """
        rows = self.rows if rows is None else max(1, rows)
        cols = self.cols if cols is None else max(1, cols)
        screen = self.screen
        if isinstance(screen, LogScreen):
            return render_log(screen.log, rows, cols, self.theme)
        screen.report.follow_selection(report_body_rows(rows))
        return render_report(self.run, screen.report, rows, cols, self.theme)


__all__ = [
    "LogScreen",
    "ReportScreen",
    "ViewCoordinator",
]
