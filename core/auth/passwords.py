# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0

"""Random credential generation."""

from __future__ import annotations

import secrets
import string

MIN_PASSWORD_LENGTH = 16
MIN_TOKEN_LENGTH = 32

PASSWORD_SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"
# RFC 3986 unreserved: tokens travel in ?token= query strings
TOKEN_SYMBOLS = "-._~"


def _generate(length: int, symbols: str) -> str:
    required = [
        secrets.choice(string.ascii_lowercase),
        secrets.choice(string.ascii_uppercase),
        secrets.choice(string.digits),
        secrets.choice(symbols),
    ]
    alphabet = string.ascii_letters + string.digits + symbols
    chars = required + [secrets.choice(alphabet) for _ in range(length - len(required))]
    secrets.SystemRandom().shuffle(chars)
    return "".join(chars)


def generate_password(length: int = MIN_PASSWORD_LENGTH) -> str:
    """Return a random password with at least one lower, upper, digit and symbol."""
    return _generate(max(length, MIN_PASSWORD_LENGTH), PASSWORD_SYMBOLS)


def generate_token(length: int = MIN_TOKEN_LENGTH) -> str:
    """Return a random URL-safe access token (mixed case, digits, ``-._~``)."""
    return _generate(max(length, MIN_TOKEN_LENGTH), TOKEN_SYMBOLS)
