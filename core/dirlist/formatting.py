# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0

"""Human-readable sizes, display widths and file categories."""

from __future__ import annotations

import os

_SIZE_UNITS = ("KB", "MB", "GB", "TB", "PB", "EB")

_KIND_EXTENSIONS: dict[str, frozenset[str]] = {
    "image": frozenset({".jpg", ".jpeg", ".png", ".gif", ".bmp", ".webp", ".svg"}),
    "video": frozenset({".mp4", ".avi", ".mov", ".mkv", ".flv", ".wmv"}),
    "audio": frozenset({".mp3", ".wav", ".ogg", ".flac", ".aac"}),
    "archive": frozenset({".zip", ".rar", ".7z", ".tar", ".gz", ".bz2"}),
    "code": frozenset({
        ".go", ".c", ".cpp", ".java", ".py", ".js", ".html", ".css",
        ".php", ".sh", ".txt", ".md",
    }),
}

_KIND_ICONS = {
    "directory": "📁",
    "image": "🖼️",
    "video": "🎬",
    "audio": "🎵",
    "archive": "📦",
    "code": "📝",
    "file": "📄",
}


def format_size(size: int) -> str:
    """Format a byte count: ``"512 B"``, ``"1.5 KB"``, ``"2.0 GB"``.

    The value is integer-divided by 1024 while the quotient stays at or
    above 1024, then printed with one decimal.
    """
    unit = 1024
    if size < unit:
        return f"{size} B"
    div, exp = unit, 0
    n = size // unit
    while n >= unit and exp < len(_SIZE_UNITS) - 1:
        div *= unit
        exp += 1
        n //= unit
    return f"{size / div:.1f} {_SIZE_UNITS[exp]}"


def display_width(text: str) -> int:
    """Monospace cell width; every non-ASCII character counts as 2."""
    return sum(2 if ord(ch) > 127 else 1 for ch in text)


def pad_display(text: str, width: int) -> str:
    return text + " " * max(width - display_width(text), 0)


def file_kind(name: str, is_dir: bool = False) -> str:
    """Return one of directory, image, video, audio, archive, code, file."""
    if is_dir:
        return "directory"
    ext = os.path.splitext(name)[1].lower()
    for kind, extensions in _KIND_EXTENSIONS.items():
        if ext in extensions:
            return kind
    return "file"


def kind_icon(kind: str) -> str:
    return _KIND_ICONS.get(kind, _KIND_ICONS["file"])
