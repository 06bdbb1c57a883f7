# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of ServerGo, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Unified exception hierarchy for ServerGo.

All domain-specific exceptions derive from :class:`ServerGoError`,
enabling callers to catch the entire family with a single clause::

    try:
        ...
    except ServerGoError as e:
        logger.error("Domain error: %s", e)

Startup errors (configuration, port allocation, listener bind) abort the
process.  Per-request errors (forbidden, not found, render) are translated
into HTTP responses by the exception handlers in ``server/app.py``.
"""

from __future__ import annotations

from pathlib import Path


class ServerGoError(Exception):
    """Base exception for all ServerGo errors."""


# ── Configuration ────────────────────────────────────────────


class ConfigurationError(ServerGoError):
    """Invalid server construction parameters (root, port, theme)."""


class ConfigValidationError(ConfigurationError):
    """Persisted configuration key or value failed validation."""


class TemplateLoadError(ConfigurationError):
    """A listing theme template could not be read or parsed."""

    def __init__(self, theme: str, source: Path | str, reason: str) -> None:
        super().__init__(f"cannot load theme '{theme}' from {source}: {reason}")
        self.theme = theme
        self.source = source
        self.reason = reason


# ── Startup ──────────────────────────────────────────────────


class NoAvailablePortError(ServerGoError):
    """Every port in the probe range was unbindable."""


class ServerStartupError(ServerGoError):
    """The listening socket could not be bound at startup."""


# ── Request handling ─────────────────────────────────────────


class RequestError(ServerGoError):
    """Errors raised while serving a single request."""


class ForbiddenError(RequestError):
    """Path escapes the served root, or directory listing is disabled."""


class NotFoundError(RequestError):
    """The requested path does not exist under the served root."""

    def __init__(self, request_path: str) -> None:
        super().__init__(f"not found: {request_path}")
        self.request_path = request_path


class AuthError(RequestError):
    """Credentials were missing or did not match."""


class RenderError(RequestError):
    """A directory listing could not be rendered."""

    def __init__(self, theme: str, template: str, cause: Exception) -> None:
        super().__init__(f"theme '{theme}' ({template}) failed to render: {cause}")
        self.theme = theme
        self.template = template
        self.cause = cause
