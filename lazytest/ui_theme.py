"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the report table, log view, and status bars.
``--no-color`` (or ``NO_COLOR``) always resolves to the plain theme.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    header: str
    selected: str
    package_name: str
    tree_border: str
    result_pass: str
    result_fail: str
    result_skip: str
    elapsed: str
    status_bar: str
    search_hit: str
    search_current: str
    query: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    header="\033[1;38;5;81m",
    selected="\033[7m",
    package_name="\033[1;34m",
    tree_border="\033[2m",
    result_pass="\033[38;5;42m",
    result_fail="\033[1;38;5;203m",
    result_skip="\033[38;5;214m",
    elapsed="\033[38;5;109m",
    status_bar="\033[2;38;5;250m",
    search_hit="\033[30;48;5;229m",
    search_current="\033[30;48;5;208m",
    query="\033[1;38;5;81m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    header="\033[1;38;5;45m",
    selected="\033[7m",
    package_name="\033[1;38;5;45m",
    tree_border="\033[2;38;5;31m",
    result_pass="\033[38;5;84m",
    result_fail="\033[1;38;5;209m",
    result_skip="\033[38;5;215m",
    elapsed="\033[38;5;73m",
    status_bar="\033[2;38;5;110m",
    search_hit="\033[30;48;5;153m",
    search_current="\033[30;48;5;39m",
    query="\033[1;38;5;45m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="\033[0m",
    header="",
    selected="\033[7m",
    package_name="",
    tree_border="",
    result_pass="",
    result_fail="",
    result_skip="",
    elapsed="",
    status_bar="",
    search_hit="\033[4m",
    search_current="\033[7m",
    query="",
)

_THEMES: dict[str, UITheme] = {theme.name: theme for theme in (DEFAULT_THEME, OCEAN_THEME)}

NO_COLOR_ENV = "NO_COLOR"


def available_theme_names() -> tuple[str, ...]:
    """Names accepted by ``--theme``; ``plain`` is reached only via no-color."""
    return tuple(sorted(_THEMES))


def normalize_theme_name(name: str | None) -> str:
    """Map user input onto a known theme name, defaulting to ``default``."""
    candidate = str(name or "").strip().lower()
    return candidate if candidate in _THEMES else DEFAULT_THEME.name


def resolve_theme(
    name: str | None,
    *,
    no_color: bool = False,
    environ: Mapping[str, str] | None = None,
) -> UITheme:
    """Pick the palette for a session.

    A non-empty ``NO_COLOR`` environment variable disables color the same
    way ``--no-color`` does.
    """
    env = os.environ if environ is None else environ
    if no_color or env.get(NO_COLOR_ENV):
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "NO_COLOR_ENV",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
