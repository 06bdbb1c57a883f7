# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of ServerGo, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Request deadline middleware.

Bounds the time until the response *starts*.  Once the status line has been
sent the deadline is lifted, so large file downloads are never cut off.
"""

from __future__ import annotations

import logging
import math

import anyio
from starlette.responses import PlainTextResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger("servergo.server")

DEFAULT_REQUEST_TIMEOUT = 60.0


class RequestDeadlineMiddleware:
    """Answer 503 when no response has started within *timeout* seconds."""

    def __init__(self, app: ASGIApp, timeout: float | None = DEFAULT_REQUEST_TIMEOUT) -> None:
        self.app = app
        self.timeout = timeout

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not self.timeout:
            await self.app(scope, receive, send)
            return

        response_started = False

        with anyio.CancelScope() as cancel_scope:
            cancel_scope.deadline = anyio.current_time() + self.timeout

            async def send_wrapper(message: Message) -> None:
                nonlocal response_started
                if message["type"] == "http.response.start":
                    response_started = True
                    cancel_scope.deadline = math.inf
                await send(message)

            await self.app(scope, receive, send_wrapper)

        if cancel_scope.cancelled_caught and not response_started:
            logger.warning(
                "Request deadline exceeded (%.1fs): %s %s",
                self.timeout, scope.get("method", ""), scope.get("path", ""),
            )
            response = PlainTextResponse("503 Service Unavailable: request timed out", status_code=503)
            await response(scope, receive, send)
