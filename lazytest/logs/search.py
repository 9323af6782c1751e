"""Incremental substring search over a captured log snapshot.

Matches are recomputed from scratch on every query edit. Offsets are UTF-8
byte offsets into the line; occurrences never overlap because scanning
resumes at the end of each hit.
"""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class SearchMatch:
    line: int
    start: int
    end: int

    @property
    def span(self) -> range:
        return range(self.start, self.end)


def _match_line(match: SearchMatch) -> int:
    return match.line


def find_matches(lines: Sequence[str], query: str) -> list[SearchMatch]:
    """Return every non-overlapping occurrence of ``query``, by line then offset."""
    if not query:
        return []
    needle = query.encode("utf-8")
    matches: list[SearchMatch] = []
    for line_idx, line in enumerate(lines):
        haystack = line.encode("utf-8")
        pos = haystack.find(needle)
        while pos != -1:
            end = pos + len(needle)
            matches.append(SearchMatch(line_idx, pos, end))
            pos = haystack.find(needle, end)
    return matches


class LogSearch:
    """Query, match list, and current-match cursor for one log snapshot.

    Mutators return the line index the viewport should scroll to, or
    ``None`` when no scroll is requested.
    """

    def __init__(self, lines: Sequence[str]) -> None:
        self.lines = tuple(lines)
        self.query = ""
        self.matches: list[SearchMatch] = []
        self.current: int | None = None

    @property
    def has_results(self) -> bool:
        return self.current is not None

    def _recompute(self) -> int | None:
        self.matches = find_matches(self.lines, self.query)
        if not self.matches:
            self.current = None
            return None
        self.current = 0
        return self.matches[0].line

    def begin(self) -> None:
        """Start a fresh query."""
        self.query = ""
        self._recompute()

    def push_char(self, ch: str) -> int | None:
        self.query += ch
        return self._recompute()

    def pop_char(self) -> int | None:
        if not self.query:
            return None
        self.query = self.query[:-1]
        return self._recompute()

    def next_match(self) -> int | None:
        if self.current is None:
            return None
        self.current = min(self.current + 1, len(self.matches) - 1)
        return self.matches[self.current].line

    def prev_match(self) -> int | None:
        if self.current is None:
            return None
        self.current = max(self.current - 1, 0)
        return self.matches[self.current].line

    def commit(self) -> None:
        """Leave query entry keeping the query and its matches navigable."""

    def cancel(self) -> None:
        """Leave query entry discarding the query and its matches."""
        self.query = ""
        self.matches = []
        self.current = None

    def matches_on_line(self, line_idx: int) -> list[tuple[int, SearchMatch]]:
        """Return ``(match index, match)`` pairs located on ``line_idx``."""
        lo = bisect_left(self.matches, line_idx, key=_match_line)
        hi = bisect_right(self.matches, line_idx, key=_match_line)
        return [(idx, self.matches[idx]) for idx in range(lo, hi)]


__all__ = [
    "LogSearch",
    "SearchMatch",
    "find_matches",
]
