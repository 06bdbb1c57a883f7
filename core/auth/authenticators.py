# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of ServerGo, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Authentication strategies.

Every strategy implements :class:`Authenticator`; the server installs exactly
one, chosen by :func:`create_authenticator` from the configured
:class:`AuthMode`.  ``authenticate`` has the signature of a Starlette
``http`` middleware dispatch function: it either returns a response itself
(challenge, redirect, error) or awaits ``call_next``.
"""

from __future__ import annotations

import base64
import binascii
import hmac
import logging
from abc import ABC, abstractmethod
from typing import Awaitable, Callable

from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse
from starlette.requests import Request
from starlette.responses import Response

from core.auth.models import AuthMode, AuthSettings
from core.auth.passwords import generate_password, generate_token
from core.auth.session import SESSION_COOKIE, SessionSigner
from core.exceptions import AuthError

logger = logging.getLogger("servergo.auth")

CallNext = Callable[[Request], Awaitable[Response]]

DEFAULT_USERNAME = "admin"

LOGIN_PATH = "/auth/login"
LOGOUT_PATH = "/auth/logout"
LOGIN_ASSETS = frozenset({"login.css", "login.js"})

_PUBLIC_PATHS = frozenset(
    {LOGIN_PATH, LOGOUT_PATH} | {f"/auth/{name}" for name in LOGIN_ASSETS}
)


def _secure_equals(a: str, b: str) -> bool:
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


class Authenticator(ABC):
    """Uniform contract shared by all authentication strategies."""

    mode: AuthMode

    @property
    def login_page_enabled(self) -> bool:
        return False

    def credentials(self) -> tuple[str, str]:
        """Return ``(username, secret)`` for the startup banner only."""
        return "", ""

    @abstractmethod
    async def authenticate(self, request: Request, call_next: CallNext) -> Response:
        ...


class NoAuthenticator(Authenticator):
    mode = AuthMode.NONE

    async def authenticate(self, request: Request, call_next: CallNext) -> Response:
        return await call_next(request)


class BasicAuthenticator(Authenticator):
    """HTTP Basic against a single username/password pair."""

    mode = AuthMode.BASIC

    def __init__(self, username: str, password: str, realm: str) -> None:
        self._username = username
        self._password = password
        self.realm = realm

    def credentials(self) -> tuple[str, str]:
        return self._username, self._password

    def _parse_header(self, header: str) -> tuple[str, str] | None:
        scheme, _, encoded = header.partition(" ")
        if scheme.lower() != "basic" or not encoded:
            return None
        try:
            decoded = base64.b64decode(encoded.strip(), validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError):
            return None
        username, sep, password = decoded.partition(":")
        if not sep:
            return None
        return username, password

    def check(self, username: str, password: str) -> bool:
        user_ok = _secure_equals(username, self._username)
        pass_ok = _secure_equals(password, self._password)
        return user_ok and pass_ok

    def challenge(self) -> Response:
        return PlainTextResponse(
            "401 Unauthorized",
            status_code=401,
            headers={"WWW-Authenticate": f'Basic realm="{self.realm}", charset="UTF-8"'},
        )

    async def authenticate(self, request: Request, call_next: CallNext) -> Response:
        parsed = self._parse_header(request.headers.get("authorization", ""))
        if parsed is None:
            return self.challenge()
        if not self.check(*parsed):
            logger.warning("Basic auth failed for user '%s'", parsed[0])
            return self.challenge()
        return await call_next(request)


class TokenAuthenticator(Authenticator):
    """Bearer token from ``?token=`` or the ``Authorization`` header."""

    mode = AuthMode.TOKEN

    def __init__(self, token: str) -> None:
        self._token = token

    def credentials(self) -> tuple[str, str]:
        return "", self._token

    @staticmethod
    def extract_token(request: Request) -> str:
        token = request.query_params.get("token", "")
        if token:
            return token
        header = request.headers.get("authorization", "")
        scheme, sep, value = header.partition(" ")
        if sep and scheme.lower() == "bearer":
            return value.strip()
        return header.strip()

    async def authenticate(self, request: Request, call_next: CallNext) -> Response:
        token = self.extract_token(request)
        if not token or not _secure_equals(token, self._token):
            logger.warning("Token auth failed for %s", request.url.path)
            return JSONResponse(
                {"error": "Unauthorized: a valid token is required"},
                status_code=401,
            )
        return await call_next(request)


class FormAuthenticator(Authenticator):
    """Cookie session established through an HTML login form."""

    mode = AuthMode.FORM

    def __init__(
        self,
        username: str,
        password: str,
        enable_login_page: bool,
        signer: SessionSigner | None = None,
    ) -> None:
        self._username = username
        self._password = password
        self._enable_login_page = enable_login_page
        self.signer = signer or SessionSigner()

    @property
    def login_page_enabled(self) -> bool:
        return self._enable_login_page

    def credentials(self) -> tuple[str, str]:
        return self._username, self._password

    def verify_login(self, username: str, password: str) -> None:
        """Raise :class:`AuthError` unless both fields match."""
        user_ok = _secure_equals(username, self._username)
        pass_ok = _secure_equals(password, self._password)
        if not (user_ok and pass_ok):
            raise AuthError("Invalid username or password")

    @staticmethod
    def is_public_path(path: str) -> bool:
        """Exact match only: the login routes and the login page assets."""
        return path in _PUBLIC_PATHS

    def is_authenticated(self, request: Request) -> bool:
        return self.signer.verify(request.cookies.get(SESSION_COOKIE))

    def start_session(self, response: Response) -> Response:
        response.set_cookie(
            key=SESSION_COOKIE,
            value=self.signer.issue(),
            max_age=self.signer.ttl,
            path="/",
            httponly=True,
            samesite="lax",
        )
        return response

    @staticmethod
    def end_session(response: Response) -> Response:
        response.delete_cookie(key=SESSION_COOKIE, path="/", httponly=True, samesite="lax")
        return response

    async def authenticate(self, request: Request, call_next: CallNext) -> Response:
        if self.is_public_path(request.url.path) or self.is_authenticated(request):
            return await call_next(request)
        return RedirectResponse(LOGIN_PATH, status_code=302)


# ── Factory ─────────────────────────────────────────────────


def create_authenticator(settings: AuthSettings) -> Authenticator:
    """Build the authenticator for *settings*, generating missing secrets.

    An empty password or token is replaced by a random one; it never
    disables authentication.
    """
    username = settings.username or DEFAULT_USERNAME
    password = settings.password or generate_password()

    if settings.mode is AuthMode.BASIC:
        return BasicAuthenticator(username, password, settings.realm)
    if settings.mode is AuthMode.TOKEN:
        return TokenAuthenticator(settings.token or generate_token())
    if settings.mode is AuthMode.FORM:
        return FormAuthenticator(username, password, settings.enable_login_page)
    return NoAuthenticator()
