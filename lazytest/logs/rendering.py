"""Log screen projection: visible lines with search highlights and a query bar."""

from __future__ import annotations

from ..ansi import display_width, slice_ansi_line, strip_line_terminator
from ..ui_theme import UITheme
from .search import LogSearch
from .view import LogView

LOG_RESERVED_ROWS = 1  # status/query bar


def log_body_rows(rows: int) -> int:
    return max(1, rows - LOG_RESERVED_ROWS)


def highlight_line(line: str, line_idx: int, search: LogSearch, theme: UITheme) -> str:
    """Wrap every match on ``line_idx`` in highlight styling."""
    hits = search.matches_on_line(line_idx)
    if not hits:
        return line
    encoded = line.encode("utf-8")
    out: list[str] = []
    cursor = 0
    for match_idx, match in hits:
        start = min(match.start, len(encoded))
        end = min(match.end, len(encoded))
        out.append(encoded[cursor:start].decode("utf-8", errors="replace"))
        style = theme.search_current if match_idx == search.current else theme.search_hit
        out.append(f"{style}{encoded[start:end].decode('utf-8', errors='replace')}{theme.reset}")
        cursor = end
    out.append(encoded[cursor:].decode("utf-8", errors="replace"))
    return "".join(out)


def build_log_status(view: LogView, width: int, theme: UITheme) -> str:
    search = view.search
    if view.searching:
        left = f"{theme.query}/{search.query}{theme.reset}" if theme.query else f"/{search.query}"
    elif search.query:
        left = f"/{search.query}"
    else:
        left = ":"

    if search.query:
        if search.current is None:
            counter = "no matches"
        else:
            counter = f"match {search.current + 1}/{len(search.matches)}"
    else:
        counter = ""
    position = f"{min(view.scroll_y + 1, len(view.lines))}/{len(view.lines)}"
    right = "  ".join(part for part in (counter, view.title, position) if part)

    usable = max(1, width)
    left_width = display_width(left)
    room = usable - left_width - 1
    if display_width(right) > room:
        right = right[-room:] if room > 0 else ""
    gap = " " * max(0, usable - left_width - display_width(right))
    line = slice_ansi_line(f"{left}{gap}{right}", 0, usable)
    if theme.status_bar and not view.searching:
        return f"{theme.status_bar}{line}{theme.reset}"
    return line


def render_log(view: LogView, rows: int, cols: int, theme: UITheme) -> list[str]:
    """Project the log screen into exactly ``rows`` frame lines."""
    rows = max(1, rows)
    cols = max(1, cols)
    frame: list[str] = []
    body_rows = log_body_rows(rows) if rows > 1 else 0
    end = min(len(view.lines), view.scroll_y + body_rows)
    for line_idx in range(view.scroll_y, end):
        line = strip_line_terminator(view.lines[line_idx])
        styled = highlight_line(line, line_idx, view.search, theme)
        visible = slice_ansi_line(styled, view.scroll_x, cols)
        frame.append(visible + theme.reset if "\x1b" in visible else visible)
    while len(frame) < body_rows:
        frame.append("")
    frame.append(build_log_status(view, cols, theme))
    return frame


__all__ = [
    "LOG_RESERVED_ROWS",
    "build_log_status",
    "highlight_line",
    "log_body_rows",
    "render_log",
]
