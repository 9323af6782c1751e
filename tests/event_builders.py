"""Shared builders for event-stream tests."""

from __future__ import annotations

import json

from lazytest.aggregator import TestRun as Run
from lazytest.events import EventKind, TestEvent as Event


def event(kind: str, package: str | None = None, test: str | None = None, **kwargs) -> Event:
    return Event(kind=EventKind(kind), package=package, test=test, **kwargs)


def build_run(*events: Event) -> Run:
    run = Run()
    for item in events:
        run.apply(item)
    return run


def json_line(**fields: object) -> str:
    return json.dumps(fields)
