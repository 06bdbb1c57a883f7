# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0

"""Closed set of directory-listing themes."""

from __future__ import annotations

from enum import Enum

DEFAULT_THEME = "default"

SUPPORTED_THEMES: tuple[str, ...] = (
    "default", "dark", "blue", "green", "retro", "json", "table",
    "modern", "material", "minimal", "glass", "ocean", "forest",
    "sunset", "autumn", "winter", "spring", "summer", "cyberpunk",
    "neon", "matrix", "terminal", "space", "neon-blue", "neon-pink",
    "gradient", "monochrome", "arctic", "desert", "volcano", "galaxy",
    "vintage", "corporate", "paper", "bootstrap", "nature", "technology",
    "elegant",
)

_THEME_SET = frozenset(SUPPORTED_THEMES)


class ThemeKind(str, Enum):
    TEMPLATED = "templated"
    JSON = "json"
    TABLE = "table"


STRUCTURED_THEMES: dict[str, ThemeKind] = {
    "json": ThemeKind.JSON,
    "table": ThemeKind.TABLE,
}


def is_valid_theme(name: str) -> bool:
    return name in _THEME_SET


def supported_themes() -> list[str]:
    """Return the theme names in display order."""
    return list(SUPPORTED_THEMES)


def theme_kind(name: str) -> ThemeKind:
    """Return how *name* is rendered.

    Raises:
        ValueError: *name* is not a supported theme.
    """
    if not is_valid_theme(name):
        raise ValueError(f"Unknown theme: {name}")
    return STRUCTURED_THEMES.get(name, ThemeKind.TEMPLATED)


def templated_themes() -> list[str]:
    return [t for t in SUPPORTED_THEMES if t not in STRUCTURED_THEMES]
