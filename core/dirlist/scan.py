# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of ServerGo, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Turn a directory on disk into a :class:`ListingPage`."""

from __future__ import annotations

import logging
import os
import posixpath
from datetime import datetime
from pathlib import Path
from typing import Iterable

from core.dirlist.formatting import format_size
from core.dirlist.models import DirectoryEntry, ListingPage

logger = logging.getLogger("servergo.dirlist")

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def parent_path(dir_path: str) -> str:
    """Return the request path of the parent directory, ``""`` at the root."""
    trimmed = dir_path.rstrip("/")
    if not trimmed:
        return ""
    return posixpath.dirname(trimmed) or "/"


def _entry_from(dir_path: str, item: os.DirEntry) -> DirectoryEntry:
    st = item.stat()
    is_dir = item.is_dir()
    size_bytes = 0 if is_dir else st.st_size
    return DirectoryEntry(
        name=item.name,
        is_dir=is_dir,
        size="-" if is_dir else format_size(size_bytes),
        size_bytes=size_bytes,
        last_modified=datetime.fromtimestamp(st.st_mtime).strftime(TIME_FORMAT),
        path=posixpath.join(dir_path, item.name),
    )


def scan_directory(directory: Path, dir_path: str) -> list[DirectoryEntry]:
    """List *directory*, sorted directories-first then by name.

    Entries whose ``stat`` fails (broken links, races with deletion) are
    skipped.
    """
    entries: list[DirectoryEntry] = []
    with os.scandir(directory) as it:
        for item in it:
            try:
                entries.append(_entry_from(dir_path, item))
            except OSError as exc:
                logger.debug("Skipping unreadable entry %s: %s", item.path, exc)
    entries.sort(key=DirectoryEntry.sort_key)
    return entries


def build_listing_page(
    directory: Path,
    request_path: str,
    now: datetime | None = None,
) -> ListingPage:
    """Scan *directory*, served at the cleaned *request_path*."""
    dir_path = "/" + request_path.strip("/") if request_path.strip("/") else "/"
    return ListingPage(
        dir_path=dir_path,
        entries=tuple(scan_directory(directory, dir_path)),
        parent_dir=parent_path(dir_path),
        current_time=(now or datetime.now()).strftime(TIME_FORMAT),
    )


def summarize(entries: Iterable[DirectoryEntry]) -> str:
    """One-line footer such as ``"2 directories, 3 files, 4.2 KB total"``."""
    dirs = files = total = 0
    for entry in entries:
        if entry.is_dir:
            dirs += 1
        else:
            files += 1
            total += entry.size_bytes

    if not dirs and not files:
        return "Empty directory"

    parts = []
    if dirs:
        parts.append(f"{dirs} director{'y' if dirs == 1 else 'ies'}")
    if files:
        parts.append(f"{files} file{'' if files == 1 else 's'}")
        if total:
            parts.append(f"{format_size(total)} total")
    return ", ".join(parts)
