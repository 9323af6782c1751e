"""Report table projection.

Builds the frame lines for the report screen from the tree, the flattened
list, and the navigation state. Nothing here mutates state; the caller runs
``ReportView.follow_selection`` before projecting.
"""

from __future__ import annotations

from ..aggregator import RunCounts, TestRun
from ..ansi import clip_ansi_line, display_width, pad_ansi_line
from ..events import TestResult
from ..ui_theme import UITheme
from .filtering import ListItem
from .navigation import REPORT_COLUMNS, ReportView

REPORT_RESERVED_ROWS = 2  # header + status bar
COLUMN_GAP = "  "

_RESULT_MARKERS = {
    TestResult.PASS: "✅",
    TestResult.FAIL: "❎",
}


def report_body_rows(rows: int) -> int:
    return max(1, rows - REPORT_RESERVED_ROWS)


def format_elapsed(elapsed: float | None) -> str:
    if elapsed is None:
        return ""
    return f"{elapsed:g}s"


def _result_style(result: TestResult | None, theme: UITheme) -> str:
    if result is TestResult.PASS:
        return theme.result_pass
    if result is TestResult.FAIL:
        return theme.result_fail
    if result is TestResult.SKIP:
        return theme.result_skip
    return ""


def _is_last_visible_test(items: list[ListItem], idx: int) -> bool:
    nxt = idx + 1
    return nxt >= len(items) or items[nxt].package_index != items[idx].package_index


def build_table_rows(run: TestRun, items: list[ListItem]) -> list[tuple[str, str, str]]:
    """Return plain ``(name, result, elapsed)`` cells for each list item."""
    rows: list[tuple[str, str, str]] = []
    for idx, item in enumerate(items):
        entity = item.resolve(run)
        result = entity.result.label if entity.result is not None else ""
        if item.is_package:
            name = entity.name
        else:
            border = "└" if _is_last_visible_test(items, idx) else "├"
            marker = _RESULT_MARKERS.get(entity.result, "  ")
            name = f"{border} {marker} {entity.name}"
        rows.append((name, result, format_elapsed(entity.elapsed)))
    return rows


def _column_widths(cells: list[tuple[str, ...]]) -> list[int]:
    widths = [display_width(header) for header in REPORT_COLUMNS]
    for row in cells:
        for col, text in enumerate(row):
            widths[col] = max(widths[col], display_width(text))
    return widths


def _styled(style: str, text: str, theme: UITheme) -> str:
    return f"{style}{text}{theme.reset}" if style and text else text


def _style_cell(col: int, text: str, item: ListItem, run: TestRun, theme: UITheme) -> str:
    if col == 0:
        if item.is_package:
            return _styled(theme.package_name, text, theme)
        return _styled(theme.tree_border, text[:1], theme) + text[1:]
    if col == 1:
        return _styled(_result_style(item.resolve(run).result, theme), text, theme)
    return _styled(theme.elapsed, text, theme)


def _join_cells(cells: list[str], widths: list[int]) -> str:
    parts: list[str] = []
    for idx, (text, width) in enumerate(zip(cells, widths)):
        if idx == len(cells) - 1:
            parts.append(text)
        else:
            parts.append(pad_ansi_line(text, width))
    return COLUMN_GAP.join(parts)


def build_report_status(counts: RunCounts, filter_label: str, width: int, theme: UITheme) -> str:
    left = (
        f"{counts.packages} packages  {counts.tests} tests  "
        f"pass {counts.by_result[TestResult.PASS]}  "
        f"fail {counts.by_result[TestResult.FAIL]}  "
        f"skip {counts.by_result[TestResult.SKIP]}  "
        f"running {counts.running}"
    )
    right = f"filter: {filter_label} │ 1 pass 2 fail 3 skip"
    usable = max(1, width)
    if usable <= len(right):
        line = right[-usable:]
    else:
        left = left[: max(0, usable - len(right) - 1)]
        line = f"{left}{' ' * (usable - len(left) - len(right))}{right}"
    if theme.status_bar:
        return f"{theme.status_bar}{line}{theme.reset}"
    return line


def render_report(
    run: TestRun,
    view: ReportView,
    rows: int,
    cols: int,
    theme: UITheme,
    *,
    show_selection: bool = True,
) -> list[str]:
    """Project the report screen into exactly ``rows`` frame lines."""
    rows = max(1, rows)
    cols = max(1, cols)
    items = view.items(run)
    cells = build_table_rows(run, items)
    widths = _column_widths(cells)
    skip = view.scroll_x

    header = _join_cells(list(REPORT_COLUMNS[skip:]), widths[skip:])
    frame: list[str] = [_styled(theme.header, clip_ansi_line(header, cols), theme)]

    body_rows = report_body_rows(rows)
    window = range(view.scroll_y, min(len(items), view.scroll_y + body_rows))
    for idx in window:
        row_cells = cells[idx]
        if show_selection and idx == view.selected_index:
            plain = _join_cells(list(row_cells[skip:]), widths[skip:])
            frame.append(f"{theme.selected}{pad_ansi_line(plain, cols)}{theme.reset}")
            continue
        styled = [
            _style_cell(col, text, items[idx], run, theme)
            for col, text in enumerate(row_cells)
        ][skip:]
        line = clip_ansi_line(_join_cells(styled, widths[skip:]), cols)
        frame.append(line + theme.reset if "\x1b" in line else line)
    while len(frame) < rows - 1:
        frame.append("")

    if rows > 1:
        frame.append(build_report_status(run.counts(), view.result_filter.label(), cols, theme))
    return frame[:rows]


__all__ = [
    "REPORT_RESERVED_ROWS",
    "build_report_status",
    "build_table_rows",
    "format_elapsed",
    "render_report",
    "report_body_rows",
]
