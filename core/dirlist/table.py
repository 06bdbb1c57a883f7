# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0

"""Plain-text table rendering for the ``table`` theme."""

from __future__ import annotations

from core.dirlist.formatting import display_width, pad_display
from core.dirlist.models import ListingPage

HEADERS = ("Name", "Size", "Modified", "Type")
MIN_NAME_WIDTH = 4
MIN_SIZE_WIDTH = 4
MIN_TIME_WIDTH = 8
EMPTY_MARKER = "(empty directory)"

_SEP = "  "


def render_table(page: ListingPage) -> str:
    """Render *page* as a monospace-aligned table.

    The type column is last and left unpadded, so only the first three
    columns are width-computed.
    """
    name_w, size_w, time_w = MIN_NAME_WIDTH, MIN_SIZE_WIDTH, MIN_TIME_WIDTH
    rows: list[tuple[str, str, str, str]] = []
    for entry in page.entries:
        row = (
            entry.name,
            entry.size,
            entry.last_modified,
            "directory" if entry.is_dir else "file",
        )
        name_w = max(name_w, display_width(row[0]))
        size_w = max(size_w, display_width(row[1]))
        time_w = max(time_w, display_width(row[2]))
        rows.append(row)

    def line(name: str, size: str, modified: str, kind: str) -> str:
        return _SEP.join((
            pad_display(name, name_w),
            pad_display(size, size_w),
            pad_display(modified, time_w),
            kind,
        ))

    lines = [
        line(*HEADERS),
        _SEP.join(("-" * name_w, "-" * size_w, "-" * time_w, "-" * len(HEADERS[3]))),
    ]
    if not rows:
        lines.append(EMPTY_MARKER)
    lines.extend(line(*row) for row in rows)
    return "\n".join(lines) + "\n"
