# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import argparse

from core.dirlist.themes import DEFAULT_THEME, STRUCTURED_THEMES, supported_themes
from core.version import VERSION


def print_themes() -> None:
    print("Available themes:")
    for name in supported_themes():
        notes = []
        if name == DEFAULT_THEME:
            notes.append("default")
        if name in STRUCTURED_THEMES:
            notes.append(STRUCTURED_THEMES[name].value + " output")
        suffix = f"  ({', '.join(notes)})" if notes else ""
        print(f"  - {name}{suffix}")
    print()
    print("Use: servergo start --theme <name>")


def cmd_themes(args: argparse.Namespace) -> None:
    """List the directory listing themes."""
    print_themes()


def cmd_version(args: argparse.Namespace) -> None:
    print(f"ServerGo {VERSION}")
