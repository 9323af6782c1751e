"""ANSI-aware text measurement and viewport slicing.

Report cells and log lines are measured in terminal columns, so wide
characters and tabs line up. Escape sequences pass through without
consuming width.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``."""
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    """Width of ``text`` in terminal columns, ignoring escape sequences."""
    col = 0
    for ch in strip_ansi(text):
        col += char_display_width(ch, col)
    return col


def strip_line_terminator(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n") or line.endswith("\r"):
        return line[:-1]
    return line


def slice_ansi_line(text: str, start_cols: int, max_cols: int) -> str:
    """Return up to ``max_cols`` columns of ``text`` starting at ``start_cols``.

    When the viewport begins past a style sequence, the last pending SGR
    sequence is re-emitted so visible text keeps its styling.
    """
    if max_cols <= 0 or not text:
        return ""
    start_cols = max(0, start_cols)

    out: list[str] = []
    col = 0
    shown = 0
    i = 0
    pending_sgr = ""
    while i < len(text) and shown < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                seq = match.group(0)
                if col >= start_cols:
                    out.append(seq)
                elif seq.endswith("m"):
                    pending_sgr = seq
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        i += 1
        if col + w <= start_cols:
            col += w
            continue
        if pending_sgr:
            out.append(pending_sgr)
            pending_sgr = ""
        if ch == "\t":
            # A tab straddling the viewport edge only shows its visible part.
            visible = min(w, col + w - start_cols, max_cols - shown)
            out.append(" " * visible)
            shown += visible
            col += w
            continue
        if col < start_cols:
            # Wide character cut by the left viewport edge.
            col += w
            continue
        if shown + w > max_cols:
            break
        out.append(ch)
        shown += w
        col += w

    return "".join(out)


def clip_ansi_line(text: str, max_cols: int) -> str:
    return slice_ansi_line(text, 0, max_cols)


def pad_ansi_line(text: str, width: int) -> str:
    """Clip or right-pad ``text`` to exactly ``width`` columns."""
    clipped = clip_ansi_line(text, width)
    return clipped + " " * max(0, width - display_width(clipped))


__all__ = [
    "ANSI_ESCAPE_RE",
    "char_display_width",
    "clip_ansi_line",
    "display_width",
    "pad_ansi_line",
    "slice_ansi_line",
    "strip_ansi",
    "strip_line_terminator",
]
