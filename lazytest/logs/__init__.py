"""Log screen: snapshot browsing with incremental search."""

from .rendering import render_log
from .search import LogSearch, SearchMatch, find_matches
from .view import LogMode, LogView

__all__ = [
    "LogMode",
    "LogSearch",
    "LogView",
    "SearchMatch",
    "find_matches",
    "render_log",
]
