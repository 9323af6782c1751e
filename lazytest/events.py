"""Test-event schema and JSON line decoding.

One stream line holds one ``go test -json`` style object. Keys are accepted
in either PascalCase (as test2json emits them) or lowercase.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum

from .errors import PayloadDecodeError


class TestResult(Enum):
    PASS = "pass"
    FAIL = "fail"
    SKIP = "skip"

    @property
    def label(self) -> str:
        return self.value


class EventKind(Enum):
    START = "start"
    RUN = "run"
    OUTPUT = "output"
    PASS = "pass"
    FAIL = "fail"
    SKIP = "skip"

    @property
    def result(self) -> TestResult | None:
        """Result a terminal kind finalizes, ``None`` for non-terminal kinds."""
        return _TERMINAL_RESULTS.get(self)

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL_RESULTS


_TERMINAL_RESULTS = {
    EventKind.PASS: TestResult.PASS,
    EventKind.FAIL: TestResult.FAIL,
    EventKind.SKIP: TestResult.SKIP,
}


@dataclass(frozen=True)
class TestEvent:
    __test__ = False

    kind: EventKind
    package: str | None = None
    test: str | None = None
    output: str | None = None
    elapsed: float | None = None


def _field(payload: dict[str, object], name: str) -> object:
    if name in payload:
        return payload[name]
    return payload.get(name.capitalize())


def _optional_str(value: object) -> str | None:
    return value if isinstance(value, str) else None


def _optional_float(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def parse_event_line(line: str) -> TestEvent | None:
    """Decode one stream line into a ``TestEvent``.

    Returns ``None`` for blank lines and for actions outside the six known
    kinds (``pause``, ``cont``, ``bench`` ...). Raises ``PayloadDecodeError``
    when the line is not a JSON object.
    """
    text = line.strip()
    if not text:
        return None
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise PayloadDecodeError(f"malformed event line: {exc}") from exc
    if not isinstance(payload, dict):
        raise PayloadDecodeError(f"event line is not a JSON object: {text[:80]!r}")

    action = _field(payload, "action")
    if not isinstance(action, str):
        return None
    try:
        kind = EventKind(action.lower())
    except ValueError:
        return None

    return TestEvent(
        kind=kind,
        package=_optional_str(_field(payload, "package")),
        test=_optional_str(_field(payload, "test")),
        output=_optional_str(_field(payload, "output")),
        elapsed=_optional_float(_field(payload, "elapsed")),
    )


__all__ = [
    "EventKind",
    "TestEvent",
    "TestResult",
    "parse_event_line",
]
