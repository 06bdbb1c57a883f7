"""Unit tests for core/exceptions.py — exception hierarchy."""
# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import pytest

from core.exceptions import (
    AuthError,
    ConfigurationError,
    ConfigValidationError,
    ForbiddenError,
    NoAvailablePortError,
    NotFoundError,
    RenderError,
    RequestError,
    ServerGoError,
    ServerStartupError,
    TemplateLoadError,
)


@pytest.mark.parametrize("exc_cls, parent", [
    (ConfigurationError, ServerGoError),
    (ConfigValidationError, ConfigurationError),
    (TemplateLoadError, ConfigurationError),
    (NoAvailablePortError, ServerGoError),
    (ServerStartupError, ServerGoError),
    (RequestError, ServerGoError),
    (ForbiddenError, RequestError),
    (NotFoundError, RequestError),
    (AuthError, RequestError),
    (RenderError, RequestError),
])
def test_hierarchy(exc_cls, parent):
    assert issubclass(exc_cls, parent)


def test_startup_and_request_errors_are_disjoint():
    assert not issubclass(NoAvailablePortError, RequestError)
    assert not issubclass(ForbiddenError, ConfigurationError)


def test_not_found_keeps_path():
    err = NotFoundError("/missing.txt")
    assert err.request_path == "/missing.txt"
    assert "/missing.txt" in str(err)


def test_template_load_error_fields():
    err = TemplateLoadError("dark", "/t/dark/row.html", "unknown placeholder {x}")
    assert err.theme == "dark"
    assert err.source == "/t/dark/row.html"
    assert "dark" in str(err) and "unknown placeholder" in str(err)


def test_render_error_fields():
    cause = KeyError("nope")
    err = RenderError("ocean", "row.html", cause)
    assert err.theme == "ocean"
    assert err.template == "row.html"
    assert err.cause is cause
