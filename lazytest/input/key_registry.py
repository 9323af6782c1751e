"""Static keymaps shared by the report and log key handlers.

Each screen declares one module-level ``KeyMap`` whose actions take that
screen's key context, so bindings are built once at import time rather than
on every key press.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

ContextT = TypeVar("ContextT")
KeyAction = Callable[[ContextT], bool]


@dataclass(frozen=True)
class KeyBinding(Generic[ContextT]):
    """One or more key tokens bound to a single context action."""

    keys: tuple[str, ...]
    action: Callable[[ContextT], bool]


class KeyMap(Generic[ContextT]):
    """Exact-match key table; unbound keys dispatch to ``None``."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._actions: dict[str, Callable[[ContextT], bool]] = {}

    def add(self, binding: KeyBinding[ContextT]) -> KeyMap[ContextT]:
        """Register ``binding``; a key bound twice keeps the later action."""
        for key in binding.keys:
            self._actions[key] = binding.action
        return self

    def bind(self, *keys: str) -> Callable[[KeyAction], KeyAction]:
        """Decorator form of ``add`` for module-level action functions."""

        def decorate(action: KeyAction) -> KeyAction:
            self.add(KeyBinding(tuple(keys), action))
            return action

        return decorate

    def __contains__(self, key: str) -> bool:
        return key in self._actions

    def dispatch(self, key: str, context: ContextT) -> bool | None:
        """Run the action bound to ``key``; ``None`` when nothing is bound."""
        action = self._actions.get(key)
        if action is None:
            return None
        return bool(action(context))


__all__ = [
    "KeyBinding",
    "KeyMap",
]
