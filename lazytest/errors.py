"""Exception hierarchy for malformed test-event streams."""

from __future__ import annotations


class LazytestError(Exception):
    """Base class for errors surfaced to the host."""


class ProtocolError(LazytestError):
    """An event is missing a field its kind requires.

    Raised for a single ingress event; state built from earlier events is
    left untouched.
    """


class PayloadDecodeError(LazytestError):
    """A stream line is not a JSON object."""
