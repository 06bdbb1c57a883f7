# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of ServerGo, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Directory listing renderer.

One :class:`ListingRenderer` is built per server.  Theme selection and
template loading happen once in the constructor; afterwards the renderer is
read-only and safe to share between concurrent requests.

Fallback chain at construction:

1. Unknown theme name → warning, use ``default``.
2. Structured theme (``json``, ``table``) → no template is loaded.
3. Templated theme fails to load → warning, use ``default``.
4. ``default`` fails to load → :class:`ConfigurationError`.
"""

from __future__ import annotations

import html
import logging
from pathlib import Path
from urllib.parse import quote

from core.dirlist.formatting import file_kind, kind_icon
from core.dirlist.models import DirectoryEntry, JsonListing, ListingPage, RenderedListing
from core.dirlist.scan import summarize
from core.dirlist.table import render_table
from core.dirlist.templates import ThemeTemplate, load_theme_template
from core.dirlist.themes import DEFAULT_THEME, ThemeKind, is_valid_theme, theme_kind
from core.exceptions import ConfigurationError, RenderError, TemplateLoadError
from core.paths import THEMES_DIR

logger = logging.getLogger("servergo.dirlist")

HTML_CONTENT_TYPE = "text/html; charset=utf-8"
JSON_CONTENT_TYPE = "application/json"
TABLE_CONTENT_TYPE = "text/plain; charset=utf-8"

ASSETS_PREFIX = "/_servergo_assets"


def build_breadcrumb(dir_path: str) -> str:
    """Return HTML links for each ancestor of *dir_path*; the last part is text."""
    parts = [p for p in dir_path.strip("/").split("/") if p]
    crumbs = ['<a href="/">/</a>']
    current = ""
    for i, part in enumerate(parts):
        current += "/" + part
        label = html.escape(part)
        if i == len(parts) - 1:
            crumbs.append(label)
        else:
            href = html.escape(quote(current, safe="/") + "/")
            crumbs.append(f'<a href="{href}">{label}</a>')
    return " / ".join(crumbs)


class ListingRenderer:
    """Render :class:`ListingPage` objects in the configured theme."""

    def __init__(self, theme: str = DEFAULT_THEME, themes_dir: Path | None = None) -> None:
        self.themes_dir = themes_dir or THEMES_DIR
        if not is_valid_theme(theme):
            logger.warning("Unknown theme '%s', falling back to '%s'", theme, DEFAULT_THEME)
            theme = DEFAULT_THEME

        self.kind = theme_kind(theme)
        self._template: ThemeTemplate | None = None
        if self.kind is ThemeKind.TEMPLATED:
            theme, self._template = self._load(theme)
        self.theme = theme

    def _load(self, theme: str) -> tuple[str, ThemeTemplate]:
        try:
            return theme, load_theme_template(theme, self.themes_dir)
        except TemplateLoadError as exc:
            if theme == DEFAULT_THEME:
                raise ConfigurationError(f"default theme is unusable: {exc}") from exc
            logger.warning("%s; falling back to '%s'", exc, DEFAULT_THEME)

        try:
            return DEFAULT_THEME, load_theme_template(DEFAULT_THEME, self.themes_dir)
        except TemplateLoadError as exc:
            raise ConfigurationError(f"default theme is unusable: {exc}") from exc

    @property
    def template(self) -> ThemeTemplate | None:
        return self._template

    # ── Rendering ─────────────────────────────────────────

    def render(self, page: ListingPage) -> RenderedListing:
        """Render *page*; template failures raise :class:`RenderError`."""
        if self.kind is ThemeKind.JSON:
            return self._render_json(page)
        if self.kind is ThemeKind.TABLE:
            return RenderedListing(render_table(page), TABLE_CONTENT_TYPE)
        return self._render_html(page)

    def _render_json(self, page: ListingPage) -> RenderedListing:
        try:
            body = JsonListing.from_page(page).model_dump_json(indent=4)
        except ValueError as exc:
            raise RenderError(self.theme, "json", exc) from exc
        return RenderedListing(body, JSON_CONTENT_TYPE)

    def _row_values(self, entry: DirectoryEntry, name: str | None = None) -> dict[str, str]:
        kind = file_kind(entry.name, entry.is_dir)
        return {
            "name": html.escape(name if name is not None else entry.name),
            "url": html.escape(entry.url),
            "icon": kind_icon(kind),
            "size": html.escape(entry.size),
            "size_bytes": str(entry.size_bytes),
            "last_modified": html.escape(entry.last_modified),
            "kind": kind,
            "css_class": "dir" if entry.is_dir else "file",
        }

    def _render_html(self, page: ListingPage) -> RenderedListing:
        template = self._template
        if template is None:
            raise RenderError(
                self.theme, str(self.themes_dir / self.theme), LookupError("no template loaded"),
            )

        rows: list[str] = []
        try:
            if page.parent_dir:
                parent = DirectoryEntry(
                    name="..",
                    is_dir=True,
                    size="-",
                    size_bytes=0,
                    last_modified="",
                    path=page.parent_dir.rstrip("/"),
                )
                rows.append(template.row.format_map(self._row_values(parent, "..")))
            for entry in page.entries:
                rows.append(template.row.format_map(self._row_values(entry)))
        except (KeyError, ValueError, IndexError) as exc:
            raise RenderError(self.theme, str(template.row_source), exc) from exc

        dir_path = html.escape(page.dir_path)
        values = {
            "title": f"Index of {dir_path}",
            "dir_path": dir_path,
            "breadcrumb": build_breadcrumb(page.dir_path),
            "entries": "\n".join(rows),
            "summary": html.escape(summarize(page.entries)),
            "current_time": html.escape(page.current_time),
            "theme": html.escape(self.theme),
            "assets": f"{ASSETS_PREFIX}/{self.theme}",
        }
        try:
            body = template.page.format_map(values)
        except (KeyError, ValueError, IndexError) as exc:
            raise RenderError(self.theme, str(template.page_source), exc) from exc
        return RenderedListing(body, HTML_CONTENT_TYPE)
