"""Selection, scrolling, and filter toggling for the report list.

Every operation saturates at the list bounds instead of raising. The
flattened list is rebuilt on demand, so a filter toggle or a result arriving
can re-point the selection at a different item after clamping.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..aggregator import TestRun
from ..events import TestResult
from .filtering import ListItem, ResultFilter, flatten

REPORT_COLUMNS: tuple[str, ...] = ("package", "result", "elapsed")
REPORT_MAX_SCROLL_X = len(REPORT_COLUMNS) - 1


@dataclass
class ReportView:
    result_filter: ResultFilter = field(default_factory=ResultFilter)
    selected_index: int = 0
    scroll_x: int = 0
    scroll_y: int = 0

    def items(self, run: TestRun) -> list[ListItem]:
        return flatten(run, self.result_filter)

    def selected_item(self, run: TestRun) -> ListItem | None:
        items = self.items(run)
        if 0 <= self.selected_index < len(items):
            return items[self.selected_index]
        return None

    def clamp_selection(self, run: TestRun) -> bool:
        """Pull ``selected_index`` back into the current list; return whether it moved."""
        count = len(self.items(run))
        clamped = max(0, min(self.selected_index, count - 1))
        if clamped == self.selected_index:
            return False
        self.selected_index = clamped
        return True

    def move_by(self, run: TestRun, delta: int) -> bool:
        count = len(self.items(run))
        target = max(0, min(self.selected_index + delta, count - 1))
        if target == self.selected_index:
            return False
        self.selected_index = target
        return True

    def move_down(self, run: TestRun) -> bool:
        return self.move_by(run, 1)

    def move_up(self, run: TestRun) -> bool:
        return self.move_by(run, -1)

    def move_page_down(self, run: TestRun, page_rows: int) -> bool:
        return self.move_by(run, max(1, page_rows))

    def move_page_up(self, run: TestRun, page_rows: int) -> bool:
        return self.move_by(run, -max(1, page_rows))

    def move_top(self) -> bool:
        if self.selected_index == 0:
            return False
        self.selected_index = 0
        return True

    def move_bottom(self, run: TestRun) -> bool:
        return self.move_by(run, len(self.items(run)))

    def move_left(self) -> bool:
        if self.scroll_x == 0:
            return False
        self.scroll_x -= 1
        return True

    def move_right(self) -> bool:
        if self.scroll_x >= REPORT_MAX_SCROLL_X:
            return False
        self.scroll_x += 1
        return True

    def toggle_filter(self, run: TestRun, result: TestResult) -> None:
        self.result_filter.toggle(result)
        self.clamp_selection(run)

    def activate(self, run: TestRun) -> tuple[str, tuple[str, ...]] | None:
        """Return ``(title, log snapshot)`` for the selected row, if any."""
        item = self.selected_item(run)
        if item is None:
            return None
        package = item.package(run)
        entity = item.resolve(run)
        title = package.name if item.is_package else f"{package.name} {entity.name}"
        return title, tuple(entity.log)

    def follow_selection(self, body_rows: int) -> None:
        """Scroll the minimum amount that keeps the selection on screen."""
        body_rows = max(1, body_rows)
        bottom_index = self.scroll_y + body_rows - 1
        if self.selected_index > bottom_index:
            self.scroll_y += self.selected_index - bottom_index
        elif self.selected_index < self.scroll_y:
            self.scroll_y -= self.scroll_y - self.selected_index


__all__ = [
    "REPORT_COLUMNS",
    "REPORT_MAX_SCROLL_X",
    "ReportView",
]
