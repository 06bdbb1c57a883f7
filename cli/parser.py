# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import argparse
import os

from core.auth.models import AuthMode

LOG_LEVELS = ("debug", "info", "warning", "error")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="servergo",
        description="ServerGo - Static File Server",
    )
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Override runtime data directory (default: ~/.servergo or SERVERGO_DATA_DIR)",
    )
    sub = parser.add_subparsers(dest="command")

    # ── Start ─────────────────────────────────────────────
    p_start = sub.add_parser(
        "start",
        aliases=["run", "serve", "launch"],
        help="Serve a directory over HTTP",
    )
    p_start.add_argument("-p", "--port", type=int, default=None,
                         help="Port to listen on (default: start-port config, 0 = random)")
    p_start.add_argument("-d", "--dir", default=None,
                         help="Directory to serve (default: current directory)")
    p_start.add_argument("--host", default="0.0.0.0", help="Interface to bind")
    p_start.add_argument("-o", "--open", action=argparse.BooleanOptionalAction, default=None,
                         help="Open the browser after start (default: auto-open config)")
    p_start.add_argument("-i", "--dir-list", action=argparse.BooleanOptionalAction, default=None,
                         help="Render directory listings (default: enable-dir-listing config)")
    p_start.add_argument("-m", "--theme", nargs="?", const="", default=None,
                         help="Listing theme; without a value, list the themes")
    p_start.add_argument("-a", "--auth", default=AuthMode.NONE.value,
                         choices=[m.value for m in AuthMode],
                         help="Authentication mode (default: none)")
    p_start.add_argument("-u", "--username", default=None,
                         help="Username for basic/form auth (default: admin)")
    p_start.add_argument("-w", "--password", default=None,
                         help="Password for basic/form auth (default: generated)")
    p_start.add_argument("-t", "--token", default=None,
                         help="Token for token auth (default: generated)")
    p_start.add_argument("-l", "--login-page", action="store_true",
                         help="Show the login page URL for form auth")
    p_start.add_argument("--log-level", default=None, choices=LOG_LEVELS)
    p_start.add_argument("--enable-log-persistence", action=argparse.BooleanOptionalAction,
                         default=None,
                         help="Write JSON logs under the data directory")
    p_start.add_argument("--request-timeout", type=float, default=60.0,
                         help="Seconds until a response must start, 0 disables (default: 60)")
    p_start.set_defaults(func=_lazy_start)

    # ── Themes ────────────────────────────────────────────
    p_themes = sub.add_parser("themes", help="List directory listing themes")
    p_themes.set_defaults(func=_lazy_themes)

    # ── Config ────────────────────────────────────────────
    from core.config.cli import (
        cmd_config_dispatch,
        cmd_config_get,
        cmd_config_list,
        cmd_config_set,
    )
    from core.config.models import CONFIG_KEYS

    p_config = sub.add_parser("config", help="Manage persisted preferences")
    p_config.set_defaults(func=cmd_config_dispatch, config_parser=p_config)
    config_sub = p_config.add_subparsers(dest="config_command")

    p_cfg_get = config_sub.add_parser("get", help="Get a config value")
    p_cfg_get.add_argument("key", help=f"One of: {', '.join(CONFIG_KEYS)}")
    p_cfg_get.set_defaults(func=cmd_config_get)

    p_cfg_set = config_sub.add_parser("set", help="Set a config value")
    p_cfg_set.add_argument("key", help=f"One of: {', '.join(CONFIG_KEYS)}")
    p_cfg_set.add_argument("value", help="New value")
    p_cfg_set.set_defaults(func=cmd_config_set)

    p_cfg_list = config_sub.add_parser("list", help="List all config values")
    p_cfg_list.set_defaults(func=cmd_config_list)

    # ── Version ───────────────────────────────────────────
    p_version = sub.add_parser("version", help="Show version")
    p_version.set_defaults(func=_lazy_version)

    return parser


def cli_main(argv: list[str] | None = None) -> None:
    from dotenv import load_dotenv

    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    # Apply --data-dir override before any command
    if args.data_dir:
        os.environ["SERVERGO_DATA_DIR"] = args.data_dir

    if args.command not in ("start", "run", "serve", "launch"):
        from core.logging_config import setup_logging

        setup_logging(level=os.environ.get("SERVERGO_LOG_LEVEL", "WARNING"))

    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


# ── Lazy import wrappers ──────────────────────────────────


def _lazy_start(args: argparse.Namespace) -> None:
    from cli.commands.server import cmd_start

    cmd_start(args)


def _lazy_themes(args: argparse.Namespace) -> None:
    from cli.commands.info import cmd_themes

    cmd_themes(args)


def _lazy_version(args: argparse.Namespace) -> None:
    from cli.commands.info import cmd_version

    cmd_version(args)
