# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of ServerGo, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Centralized path resolution for ServerGo.

All modules import directory paths from here instead of computing them ad-hoc.
Runtime data directory can be overridden via SERVERGO_DATA_DIR environment variable.
"""

from __future__ import annotations

import os
from pathlib import Path

# Project root: where the code lives (immutable, git-tracked)
PROJECT_DIR = Path(__file__).resolve().parent.parent

# Templates shipped with the project
TEMPLATES_DIR = PROJECT_DIR / "templates"

# Listing themes: templates/dirlist/<theme>/{index.html,row.html,style.css}
THEMES_DIR = TEMPLATES_DIR / "dirlist"

# Login page and its static assets
AUTH_TEMPLATES_DIR = TEMPLATES_DIR / "auth"

# Default runtime data directory
_DEFAULT_DATA_DIR = Path.home() / ".servergo"


def get_data_dir() -> Path:
    """Return the runtime data directory, respecting SERVERGO_DATA_DIR env var."""
    env_val = os.environ.get("SERVERGO_DATA_DIR")
    if env_val:
        return Path(env_val).expanduser().resolve()
    return _DEFAULT_DATA_DIR


def get_log_dir() -> Path:
    return get_data_dir() / "logs"
