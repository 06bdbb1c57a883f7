from __future__ import annotations
# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0

"""Form-login routes: login page, login submit, logout and page assets."""

import html
import logging
from datetime import datetime
from urllib.parse import quote

from fastapi import APIRouter, Form, Request
from fastapi.responses import FileResponse, HTMLResponse, RedirectResponse

from core.auth.authenticators import LOGIN_ASSETS, LOGIN_PATH, LOGOUT_PATH, FormAuthenticator
from core.exceptions import AuthError, NotFoundError
from core.paths import AUTH_TEMPLATES_DIR

logger = logging.getLogger("servergo.routes.auth")

_template_cache: dict[str, str] = {}


def render_login_page(error: str = "") -> str:
    """Fill ``templates/auth/login.html``; *error* is shown escaped."""
    if "login" not in _template_cache:
        path = AUTH_TEMPLATES_DIR / "login.html"
        _template_cache["login"] = path.read_text(encoding="utf-8")
    return _template_cache["login"].format_map({
        "error": html.escape(error),
        "error_hidden": "" if error else " hidden",
        "year": str(datetime.now().year),
    })


def create_auth_router() -> APIRouter:
    router = APIRouter(tags=["auth"])

    @router.get(LOGIN_PATH)
    async def login_page(request: Request, error: str = ""):
        authenticator: FormAuthenticator = request.app.state.authenticator
        if authenticator.is_authenticated(request):
            return RedirectResponse("/", status_code=302)
        return HTMLResponse(render_login_page(error))

    @router.post(LOGIN_PATH)
    async def login(
        request: Request,
        username: str = Form(""),
        password: str = Form(""),
    ):
        authenticator: FormAuthenticator = request.app.state.authenticator
        try:
            authenticator.verify_login(username, password)
        except AuthError as exc:
            logger.warning("Login failed for user '%s'", username)
            return RedirectResponse(
                f"{LOGIN_PATH}?error={quote(str(exc))}", status_code=302,
            )

        logger.info("Login succeeded for user '%s'", username)
        return authenticator.start_session(RedirectResponse("/", status_code=302))

    @router.get(LOGOUT_PATH)
    async def logout():
        return FormAuthenticator.end_session(RedirectResponse(LOGIN_PATH, status_code=302))

    @router.get("/auth/{asset_name}")
    async def login_asset(asset_name: str):
        if asset_name not in LOGIN_ASSETS:
            raise NotFoundError(f"/auth/{asset_name}")
        return FileResponse(AUTH_TEMPLATES_DIR / asset_name)

    return router
