# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import argparse
import logging
import sys
import threading
import webbrowser

from core.auth.authenticators import LOGIN_PATH, Authenticator
from core.auth.models import AuthMode
from core.config.models import ServerConfig, ServerGoConfig

logger = logging.getLogger("servergo")

_BROWSER_DELAY_S = 0.5


# ── Option resolution ─────────────────────────────────────


def _pick(cli_value, config_value):
    """CLI value when given, persisted preference otherwise."""
    return config_value if cli_value is None else cli_value


def build_server_config(args: argparse.Namespace, prefs: ServerGoConfig) -> ServerConfig:
    """Merge command-line options over persisted preferences.

    Raises:
        ConfigurationError: the merged values are invalid.
    """
    return ServerConfig.build(
        port=_pick(args.port, prefs.start_port),
        host=args.host,
        root=args.dir or ".",
        auth_mode=AuthMode(args.auth),
        username=args.username or "",
        password=args.password or "",
        token=args.token or "",
        enable_login_page=args.login_page,
        enable_dir_listing=_pick(args.dir_list, prefs.enable_dir_listing),
        theme=_pick(args.theme, prefs.theme),
        request_timeout=args.request_timeout,
    )


# ── Banner ────────────────────────────────────────────────


def format_banner(config: ServerConfig, port: int, authenticator: Authenticator, theme: str | None) -> str:
    """Startup summary for stdout.  Contains credentials: never log it."""
    display_host = "localhost" if config.host in ("0.0.0.0", "") else config.host
    base_url = f"http://{display_host}:{port}/"

    lines = [
        "ServerGo is running",
        f"  Root:       {config.root}",
        f"  URL:        {base_url}",
        f"  Listing:    {f'enabled (theme: {theme})' if theme else 'disabled'}",
        f"  Auth:       {authenticator.mode.value}",
    ]

    username, secret = authenticator.credentials()
    if authenticator.mode in (AuthMode.BASIC, AuthMode.FORM):
        lines.append(f"  Username:   {username}")
        lines.append(f"  Password:   {secret}")
    elif authenticator.mode is AuthMode.TOKEN:
        lines.append(f"  Token:      {secret}")
        lines.append(f"  Access URL: {base_url}?token={secret}")
    if authenticator.login_page_enabled:
        lines.append(f"  Login page: {base_url.rstrip('/')}{LOGIN_PATH}")

    lines.append("")
    lines.append("Press Ctrl+C to stop.")
    return "\n".join(lines)


def _open_browser(url: str) -> None:
    def _open() -> None:
        try:
            webbrowser.open(url)
        except webbrowser.Error as exc:
            logger.warning("Could not open browser: %s", exc)

    t = threading.Timer(_BROWSER_DELAY_S, _open)
    t.daemon = True
    t.start()


# ── Server commands ───────────────────────────────────────


def cmd_start(args: argparse.Namespace) -> None:
    """Start the ServerGo file server."""
    import uvicorn

    from cli.commands.info import print_themes
    from core.config import load_config
    from core.exceptions import ServerGoError
    from core.logging_config import setup_logging
    from core.paths import get_log_dir
    from core.ports import bind_listener, find_available_port
    from server.app import create_app

    # Bare --theme lists the themes instead of starting
    if args.theme == "":
        print_themes()
        return

    try:
        prefs = load_config()
    except ServerGoError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    persist_logs = _pick(args.enable_log_persistence, prefs.enable_log_persistence)
    log_path = setup_logging(
        level=args.log_level or "INFO",
        log_dir=get_log_dir() if persist_logs else None,
    )
    if log_path is not None:
        logger.info("Writing logs to %s", log_path)

    try:
        config = build_server_config(args, prefs)
        port = find_available_port(config.port)
        sock = bind_listener(config.host, port)
    except ServerGoError as exc:
        logger.error("Startup failed: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    try:
        app = create_app(config)
    except ServerGoError as exc:
        sock.close()
        logger.error("Startup failed: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    renderer = app.state.renderer
    print(format_banner(config, port, app.state.authenticator, renderer.theme if renderer else None))

    if _pick(args.open, prefs.auto_open):
        display_host = "localhost" if config.host in ("0.0.0.0", "") else config.host
        _open_browser(f"http://{display_host}:{port}/")

    server = uvicorn.Server(uvicorn.Config(
        app,
        log_level=(args.log_level or "info").lower(),
        log_config=None,  # keep the structlog handlers
        timeout_keep_alive=65,
    ))
    server.run(sockets=[sock])
