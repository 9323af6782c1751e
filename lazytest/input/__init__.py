"""Input-layer public API for key decoding and per-screen key handlers.

``read_key`` turns raw terminal bytes into key tokens; the handlers map those
tokens onto report and log screen operations.
"""

from .key_logs import LOG_KEYS, LogKeyContext, handle_log_key, handle_search_entry_key
from .key_registry import KeyBinding, KeyMap
from .key_report import REPORT_KEYS, ReportKeyContext, handle_report_key
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyBinding",
    "KeyMap",
    "LOG_KEYS",
    "LogKeyContext",
    "REPORT_KEYS",
    "ReportKeyContext",
    "handle_log_key",
    "handle_report_key",
    "handle_search_entry_key",
]
