from __future__ import annotations
# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of ServerGo, licensed under Apache-2.0.
# See LICENSE for the full license text.


import logging
import time
import uuid
from pathlib import Path

import structlog
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from core.auth.authenticators import create_authenticator
from core.auth.models import AuthMode, AuthSettings
from core.config.models import ServerConfig
from core.dirlist.renderer import ASSETS_PREFIX, ListingRenderer
from core.exceptions import ForbiddenError, NotFoundError, RenderError
from core.logging_config import clear_request_context, set_request_id
from core.paths import THEMES_DIR
from core.version import VERSION
from server.middleware import RequestDeadlineMiddleware
from server.routes import create_router

logger = logging.getLogger("servergo.server")


def _is_asset_path(path: str) -> bool:
    return path == ASSETS_PREFIX or path.startswith(ASSETS_PREFIX + "/")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with method, path, status, and duration.

    Binds a ``request_id`` into structlog contextvars so that all log
    records emitted during request processing carry the ID.
    """

    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        clear_request_context()
        request_id = request.headers.get(
            "X-Request-ID", uuid.uuid4().hex[:12],
        )
        set_request_id(request_id)
        structlog.contextvars.bind_contextvars(
            method=request.method,
            path=request.url.path,
        )

        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - start) * 1000, 1)

        response.headers["X-Request-ID"] = request_id

        # Theme assets are requested with every listing page
        level = logging.DEBUG if _is_asset_path(request.url.path) else logging.INFO
        logging.getLogger("servergo.request").log(
            level,
            "request %s %s -> %d (%.1fms)",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )
        return response


def create_app(config: ServerConfig, themes_dir: Path | None = None) -> FastAPI:
    """Build the file server for *config*.

    The authenticator and the listing renderer are constructed once here
    and shared read-only by all requests through ``app.state``.

    Raises:
        ConfigurationError: the default listing theme cannot be loaded.
    """
    themes_dir = themes_dir or THEMES_DIR
    app = FastAPI(
        title="ServerGo",
        version=VERSION,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    authenticator = create_authenticator(AuthSettings(
        mode=config.auth_mode,
        username=config.username,
        password=config.password,
        token=config.token,
        enable_login_page=config.enable_login_page,
    ))
    renderer = (
        ListingRenderer(config.theme, themes_dir=themes_dir)
        if config.enable_dir_listing
        else None
    )

    app.state.config = config
    app.state.authenticator = authenticator
    app.state.renderer = renderer

    # ── Exception handlers ─────────────────────────────────
    @app.exception_handler(ForbiddenError)
    async def forbidden_handler(request: Request, exc: ForbiddenError):
        logger.info("Forbidden %s: %s", request.url.path, exc)
        return PlainTextResponse("403 Forbidden", status_code=403)

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return PlainTextResponse("404 Not Found", status_code=404)

    @app.exception_handler(RenderError)
    async def render_error_handler(request: Request, exc: RenderError):
        logger.error(
            "Listing render failed: theme=%s template=%s path=%s: %s",
            exc.theme, exc.template, request.url.path, exc.cause,
        )
        return PlainTextResponse("500 Internal Server Error", status_code=500)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception: %s", exc)
        return PlainTextResponse("Internal server error", status_code=500)

    # ── Auth guard middleware ──────────────────────────────
    @app.middleware("http")
    async def auth_guard(request: Request, call_next):  # type: ignore[no-untyped-def]
        if _is_asset_path(request.url.path):
            return await call_next(request)
        return await request.app.state.authenticator.authenticate(request, call_next)

    # Added last so it is outermost: deadline and auth run inside it.
    app.add_middleware(RequestDeadlineMiddleware, timeout=config.request_timeout)
    app.add_middleware(RequestLoggingMiddleware)

    # ── Routes ─────────────────────────────────────────────
    # The file route is a catch-all, so assets are mounted before it.
    app.mount(
        ASSETS_PREFIX,
        StaticFiles(directory=str(themes_dir)),
        name="servergo_assets",
    )
    app.include_router(create_router(form_auth=authenticator.mode is AuthMode.FORM))

    logger.info(
        "App created: root=%s auth=%s listing=%s theme=%s",
        config.root,
        authenticator.mode.value,
        config.enable_dir_listing,
        renderer.theme if renderer else "-",
    )
    return app
