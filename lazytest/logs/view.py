"""Log screen state: scrolling and the browsing/search-entry sub-mode.

The log lines are a snapshot taken when the screen opened; output that
arrives later is not shown until the screen is reopened.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..ansi import display_width, strip_line_terminator
from .search import LogSearch

HORIZONTAL_SCROLL_STEP = 4


class LogMode(Enum):
    BROWSING = "browsing"
    SEARCH_ENTRY = "search_entry"


@dataclass
class LogView:
    title: str
    lines: tuple[str, ...]
    mode: LogMode = LogMode.BROWSING
    scroll_x: int = 0
    scroll_y: int = 0
    search: LogSearch = field(init=False)
    max_scroll_x: int = field(init=False)

    def __post_init__(self) -> None:
        self.lines = tuple(self.lines)
        self.search = LogSearch(self.lines)
        widest = max((display_width(strip_line_terminator(line)) for line in self.lines), default=0)
        self.max_scroll_x = max(0, widest - 1)

    @property
    def max_scroll_y(self) -> int:
        return max(0, len(self.lines) - 1)

    @property
    def searching(self) -> bool:
        return self.mode is LogMode.SEARCH_ENTRY

    def scroll_to_line(self, line: int | None) -> bool:
        if line is None:
            return False
        target = max(0, min(line, self.max_scroll_y))
        if target == self.scroll_y:
            return False
        self.scroll_y = target
        return True

    def scroll_by(self, delta: int) -> bool:
        return self.scroll_to_line(self.scroll_y + delta)

    def scroll_horizontal(self, delta: int) -> bool:
        target = max(0, min(self.scroll_x + delta, self.max_scroll_x))
        if target == self.scroll_x:
            return False
        self.scroll_x = target
        return True

    def begin_search(self) -> None:
        self.mode = LogMode.SEARCH_ENTRY
        self.search.begin()

    def type_char(self, ch: str) -> None:
        self.scroll_to_line(self.search.push_char(ch))

    def backspace(self) -> None:
        self.scroll_to_line(self.search.pop_char())

    def commit_search(self) -> None:
        self.search.commit()
        self.mode = LogMode.BROWSING

    def cancel_search(self) -> None:
        self.search.cancel()
        self.mode = LogMode.BROWSING

    def next_match(self) -> bool:
        if not self.search.has_results:
            return False
        self.scroll_to_line(self.search.next_match())
        return True

    def prev_match(self) -> bool:
        if not self.search.has_results:
            return False
        self.scroll_to_line(self.search.prev_match())
        return True


__all__ = [
    "HORIZONTAL_SCROLL_STEP",
    "LogMode",
    "LogView",
]
