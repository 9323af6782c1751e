"""Report-screen keyboard handling."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..aggregator import TestRun
from ..events import TestResult
from ..report.filtering import FILTER_KEYS
from ..report.navigation import ReportView
from .key_registry import KeyBinding, KeyMap


@dataclass(frozen=True)
class ReportKeyContext:
    """State and bound operations required for report key handling."""

    run: TestRun
    view: ReportView
    page_rows: Callable[[], int]
    open_logs: Callable[[str, tuple[str, ...]], None]


REPORT_KEYS: KeyMap[ReportKeyContext] = KeyMap("report")


@REPORT_KEYS.bind("DOWN", "j")
def _move_down(ctx: ReportKeyContext) -> bool:
    return ctx.view.move_down(ctx.run)


@REPORT_KEYS.bind("UP", "k")
def _move_up(ctx: ReportKeyContext) -> bool:
    return ctx.view.move_up(ctx.run)


@REPORT_KEYS.bind("LEFT", "h")
def _scroll_left(ctx: ReportKeyContext) -> bool:
    return ctx.view.move_left()


@REPORT_KEYS.bind("RIGHT", "l")
def _scroll_right(ctx: ReportKeyContext) -> bool:
    return ctx.view.move_right()


@REPORT_KEYS.bind("PAGE_DOWN", "d")
def _page_down(ctx: ReportKeyContext) -> bool:
    return ctx.view.move_page_down(ctx.run, ctx.page_rows())


@REPORT_KEYS.bind("PAGE_UP", "u")
def _page_up(ctx: ReportKeyContext) -> bool:
    return ctx.view.move_page_up(ctx.run, ctx.page_rows())


@REPORT_KEYS.bind("HOME", "g")
def _move_top(ctx: ReportKeyContext) -> bool:
    return ctx.view.move_top()


@REPORT_KEYS.bind("END", "G")
def _move_bottom(ctx: ReportKeyContext) -> bool:
    return ctx.view.move_bottom(ctx.run)


@REPORT_KEYS.bind("ENTER")
def _activate(ctx: ReportKeyContext) -> bool:
    target = ctx.view.activate(ctx.run)
    if target is None:
        return False
    title, lines = target
    ctx.open_logs(title, lines)
    return True


def _toggle_action(result: TestResult) -> Callable[[ReportKeyContext], bool]:
    def toggle(ctx: ReportKeyContext) -> bool:
        ctx.view.toggle_filter(ctx.run, result)
        return True

    return toggle


for _filter_key, _result in FILTER_KEYS.items():
    REPORT_KEYS.add(KeyBinding((_filter_key,), _toggle_action(_result)))


def handle_report_key(key: str, context: ReportKeyContext) -> bool:
    """Handle one report key and return ``True`` when it changed the screen."""
    return bool(REPORT_KEYS.dispatch(key, context))


__all__ = [
    "REPORT_KEYS",
    "ReportKeyContext",
    "handle_report_key",
]
