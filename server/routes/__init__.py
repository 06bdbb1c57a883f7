from __future__ import annotations
# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0

from fastapi import APIRouter

from server.routes.auth import create_auth_router
from server.routes.files import create_files_router


def create_router(form_auth: bool = False) -> APIRouter:
    router = APIRouter()

    if form_auth:
        router.include_router(create_auth_router())

    # Catch-all: must stay last
    router.include_router(create_files_router())

    return router
