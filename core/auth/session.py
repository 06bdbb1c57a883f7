# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of ServerGo, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Stateless form-login sessions.

The cookie value is ``"<expires>.<signature>"`` where the signature is an
HMAC-SHA256 over ``"authenticated:<expires>"`` keyed with a per-process
secret.  Nothing is stored server-side; restarting the server invalidates
every outstanding session.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets
import time

SESSION_COOKIE = "servergo_auth"
SESSION_TTL_SECONDS = 3600


class SessionSigner:
    """Issue and verify signed session cookie values."""

    def __init__(self, secret_key: bytes | None = None, ttl: int = SESSION_TTL_SECONDS):
        self._key = secret_key or secrets.token_bytes(32)
        self.ttl = ttl

    def _sign(self, expires: int) -> str:
        return hmac.new(
            self._key,
            f"authenticated:{expires}".encode("ascii"),
            hashlib.sha256,
        ).hexdigest()

    def issue(self, now: float | None = None) -> str:
        """Return a fresh cookie value valid for ``ttl`` seconds."""
        expires = int(now if now is not None else time.time()) + self.ttl
        return f"{expires}.{self._sign(expires)}"

    def verify(self, value: str | None, now: float | None = None) -> bool:
        """Return True if *value* carries a valid, unexpired signature."""
        if not value:
            return False
        expires_str, _, signature = value.partition(".")
        if not expires_str.isdigit() or not signature:
            return False
        expires = int(expires_str)
        if expires <= (now if now is not None else time.time()):
            return False
        return hmac.compare_digest(self._sign(expires), signature)
