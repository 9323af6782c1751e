"""Report screen: result filtering, list navigation, and table projection."""

from .filtering import FILTER_KEYS, ListItem, ResultFilter, flatten
from .navigation import REPORT_COLUMNS, REPORT_MAX_SCROLL_X, ReportView
from .rendering import render_report, report_body_rows

__all__ = [
    "FILTER_KEYS",
    "ListItem",
    "REPORT_COLUMNS",
    "REPORT_MAX_SCROLL_X",
    "ReportView",
    "ResultFilter",
    "flatten",
    "render_report",
    "report_body_rows",
]
