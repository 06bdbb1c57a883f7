# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of ServerGo, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""CLI handlers for the ``servergo config`` subcommand."""

from __future__ import annotations

import argparse
import sys
from typing import Any

from core.config.models import (
    CONFIG_KEYS,
    get_config_path,
    get_value,
    load_config,
    set_value,
)
from core.exceptions import ConfigValidationError

_DESCRIPTIONS = {
    "auto-open": "Open the browser when the server starts",
    "enable-dir-listing": "Render directory listings",
    "theme": "Directory listing theme",
    "language": "Interface language",
    "enable-log-persistence": "Write JSON logs under the data directory",
    "start-port": "Preferred port (0 = random)",
}


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def cmd_config_dispatch(args: argparse.Namespace) -> None:
    """Entry point for ``servergo config`` without a subcommand."""
    if not getattr(args, "config_command", None):
        args.config_parser.print_help()


def cmd_config_get(args: argparse.Namespace) -> None:
    """Print a single configuration value."""
    try:
        value = get_value(args.key)
    except ConfigValidationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    print(_format_value(value))


def cmd_config_set(args: argparse.Namespace) -> None:
    """Validate and persist a configuration value."""
    try:
        config = set_value(args.key, args.value)
    except ConfigValidationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    print(f"Set {args.key} = {_format_value(get_value(args.key, config))}")


def cmd_config_list(args: argparse.Namespace) -> None:
    """List every configuration key with its current value."""
    try:
        config = load_config()
    except ConfigValidationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    print(f"# {get_config_path()}")
    width = max(len(k) for k in CONFIG_KEYS)
    for key in CONFIG_KEYS:
        value = _format_value(get_value(key, config))
        print(f"{key:<{width}} = {value:<10}  # {_DESCRIPTIONS.get(key, '')}")
