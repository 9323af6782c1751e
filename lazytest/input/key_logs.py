"""Log-screen keyboard handling for browsing and search-entry modes."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..logs.view import HORIZONTAL_SCROLL_STEP, LogView
from .key_registry import KeyMap


@dataclass(frozen=True)
class LogKeyContext:
    """State and bound operations required for log key handling."""

    view: LogView
    page_rows: Callable[[], int]
    close_logs: Callable[[], None]

    def page(self) -> int:
        return max(1, self.page_rows())

    def half_page(self) -> int:
        return self.page() // 2 or 1


LOG_KEYS: KeyMap[LogKeyContext] = KeyMap("logs")


def _is_printable(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


def handle_search_entry_key(key: str, view: LogView) -> bool:
    """Edit the live query; Esc and Enter both keep it and leave entry mode."""
    if key in {"ESC", "ENTER"}:
        view.commit_search()
        return True
    if key == "BACKSPACE":
        view.backspace()
        return True
    if _is_printable(key):
        view.type_char(key)
        return True
    return False


@LOG_KEYS.bind("ESC")
def _close(ctx: LogKeyContext) -> bool:
    ctx.close_logs()
    return True


@LOG_KEYS.bind("DOWN", "j")
def _line_down(ctx: LogKeyContext) -> bool:
    return ctx.view.scroll_by(1)


@LOG_KEYS.bind("UP", "k")
def _line_up(ctx: LogKeyContext) -> bool:
    return ctx.view.scroll_by(-1)


@LOG_KEYS.bind("LEFT", "h")
def _scroll_left(ctx: LogKeyContext) -> bool:
    return ctx.view.scroll_horizontal(-HORIZONTAL_SCROLL_STEP)


@LOG_KEYS.bind("RIGHT", "l")
def _scroll_right(ctx: LogKeyContext) -> bool:
    return ctx.view.scroll_horizontal(HORIZONTAL_SCROLL_STEP)


@LOG_KEYS.bind("PAGE_DOWN", "d")
def _half_page_down(ctx: LogKeyContext) -> bool:
    return ctx.view.scroll_by(ctx.half_page())


@LOG_KEYS.bind("PAGE_UP", "u")
def _half_page_up(ctx: LogKeyContext) -> bool:
    return ctx.view.scroll_by(-ctx.half_page())


@LOG_KEYS.bind("f")
def _page_down(ctx: LogKeyContext) -> bool:
    return ctx.view.scroll_by(ctx.page())


@LOG_KEYS.bind("b")
def _page_up(ctx: LogKeyContext) -> bool:
    return ctx.view.scroll_by(-ctx.page())


@LOG_KEYS.bind("HOME", "g")
def _top(ctx: LogKeyContext) -> bool:
    return ctx.view.scroll_to_line(0)


@LOG_KEYS.bind("END", "G")
def _bottom(ctx: LogKeyContext) -> bool:
    return ctx.view.scroll_to_line(ctx.view.max_scroll_y)


@LOG_KEYS.bind("/")
def _begin_search(ctx: LogKeyContext) -> bool:
    ctx.view.begin_search()
    return True


@LOG_KEYS.bind("n")
def _next_match(ctx: LogKeyContext) -> bool:
    return ctx.view.next_match()


@LOG_KEYS.bind("N")
def _prev_match(ctx: LogKeyContext) -> bool:
    return ctx.view.prev_match()


def handle_log_key(key: str, context: LogKeyContext) -> bool:
    """Handle one log-screen key and return ``True`` when it changed the screen."""
    if context.view.searching:
        return handle_search_entry_key(key, context.view)
    return bool(LOG_KEYS.dispatch(key, context))


__all__ = [
    "LOG_KEYS",
    "LogKeyContext",
    "handle_log_key",
    "handle_search_entry_key",
]
