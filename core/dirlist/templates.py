# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of ServerGo, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Theme template loading and validation.

A templated theme lives in ``templates/dirlist/<theme>/`` and consists of:

- ``index.html``: the page, with placeholders from :data:`PAGE_FIELDS`
- ``row.html``: one listing row, with placeholders from :data:`ROW_FIELDS`
- ``style.css``: served under ``/_servergo_assets/<theme>/``

Templates use Python ``str.format_map()`` placeholders like ``{entries}``.
Literal braces must be doubled: ``{{`` and ``}}``.  Placeholders are checked
when the theme is loaded so that a broken theme fails at startup rather than
on the first request.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from pathlib import Path

from core.exceptions import TemplateLoadError

PAGE_TEMPLATE = "index.html"
ROW_TEMPLATE = "row.html"

PAGE_FIELDS = frozenset({
    "title", "dir_path", "breadcrumb", "entries", "summary",
    "current_time", "theme", "assets",
})
ROW_FIELDS = frozenset({
    "name", "url", "icon", "size", "size_bytes", "last_modified",
    "kind", "css_class",
})

_formatter = string.Formatter()


@dataclass(frozen=True)
class ThemeTemplate:
    """Parsed page and row templates of one theme."""

    theme: str
    page: str
    row: str
    page_source: Path
    row_source: Path


def validate_template(theme: str, source: Path, text: str, allowed: frozenset[str]) -> None:
    """Raise :class:`TemplateLoadError` unless *text* only uses *allowed* fields."""
    try:
        fields = [f for _, f, _, _ in _formatter.parse(text) if f is not None]
    except ValueError as exc:
        raise TemplateLoadError(theme, str(source), str(exc)) from exc

    for field in fields:
        if not field or field.isdigit():
            raise TemplateLoadError(theme, str(source), "positional placeholder")
        if "." in field or "[" in field:
            raise TemplateLoadError(
                theme, str(source), f"attribute or index access in {{{field}}}",
            )
        if field not in allowed:
            raise TemplateLoadError(theme, str(source), f"unknown placeholder {{{field}}}")


def _read(theme: str, source: Path) -> str:
    try:
        return source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise TemplateLoadError(theme, str(source), str(exc)) from exc


def load_theme_template(theme: str, themes_dir: Path) -> ThemeTemplate:
    """Read and validate the templates of *theme* from *themes_dir*."""
    theme_dir = themes_dir / theme
    page_source = theme_dir / PAGE_TEMPLATE
    row_source = theme_dir / ROW_TEMPLATE

    page = _read(theme, page_source)
    row = _read(theme, row_source)
    validate_template(theme, page_source, page, PAGE_FIELDS)
    validate_template(theme, row_source, row, ROW_FIELDS)

    return ThemeTemplate(
        theme=theme,
        page=page,
        row=row,
        page_source=page_source,
        row_source=row_source,
    )
