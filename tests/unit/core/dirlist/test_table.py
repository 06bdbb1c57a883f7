"""Unit tests for core.dirlist.table — the plain-text table theme."""
# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from core.dirlist.formatting import display_width
from core.dirlist.models import DirectoryEntry, ListingPage
from core.dirlist.table import EMPTY_MARKER, render_table


def _page(*entries: DirectoryEntry) -> ListingPage:
    return ListingPage(
        dir_path="/",
        entries=tuple(entries),
        parent_dir="",
        current_time="2026-01-01 00:00:00",
    )


def _file(name: str, size: str = "1 B") -> DirectoryEntry:
    return DirectoryEntry(name, False, size, 1, "2026-01-01 12:00:00", "/" + name)


class TestRenderTable:
    def test_header_and_separator(self):
        lines = render_table(_page(_file("a.txt"))).splitlines()
        assert lines[0].split() == ["Name", "Size", "Modified", "Type"]
        assert set(lines[1].replace(" ", "")) == {"-"}

    def test_minimum_widths(self):
        lines = render_table(_page(_file("a"))).splitlines()
        # name and size columns stay at least 4 wide
        assert lines[1].startswith("----  ----  ")

    def test_type_column_last(self):
        page = _page(
            DirectoryEntry("dir", True, "-", 0, "2026-01-01 12:00:00", "/dir"),
            _file("f.txt"),
        )
        lines = render_table(page).splitlines()
        assert lines[2].endswith("directory")
        assert lines[3].endswith("file")

    def test_columns_align_with_wide_characters(self):
        page = _page(_file("中文名字.txt", "10 B"), _file("plain.txt", "2.0 KB"))
        lines = render_table(page).splitlines()
        rows = lines[2:]
        # The size column starts at the same display offset on every row
        offsets = set()
        for row, size in zip(rows, ("10 B", "2.0 KB")):
            prefix = row[: row.index(size)]
            offsets.add(display_width(prefix))
        assert len(offsets) == 1

    def test_empty_directory_marker(self):
        lines = render_table(_page()).splitlines()
        assert lines[0].startswith("Name")
        assert lines[2] == EMPTY_MARKER
        assert len(lines) == 3

    def test_ends_with_newline(self):
        assert render_table(_page(_file("a"))).endswith("\n")
