from __future__ import annotations
# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0

"""Static file and directory listing route."""

import logging
from pathlib import Path
from urllib.parse import quote

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, RedirectResponse, Response

from core.dirlist.scan import build_listing_page
from core.exceptions import ForbiddenError, NotFoundError
from core.resolver import clean_request_path, resolve_request_path

logger = logging.getLogger("servergo.routes.files")

INDEX_FILE = "index.html"


def _raw_request_path(request: Request) -> str:
    """Return the path as sent by the client, before any percent-decoding."""
    raw = request.scope.get("raw_path")
    if raw:
        return raw.split(b"?", 1)[0].decode("utf-8", errors="replace")
    return request.url.path


def _find_index(root: Path, dir_path: str) -> Path | None:
    try:
        index = resolve_request_path(root, dir_path.rstrip("/") + "/" + INDEX_FILE)
    except NotFoundError:
        return None
    return index if index.is_file() else None


def create_files_router() -> APIRouter:
    router = APIRouter(tags=["files"])

    # Sync endpoint: stat and scandir run in the threadpool
    @router.api_route("/{request_path:path}", methods=["GET", "HEAD"])
    def serve_path(request_path: str, request: Request):
        config = request.app.state.config
        raw_path = _raw_request_path(request)
        target = resolve_request_path(config.root, raw_path)

        if not target.is_dir():
            return FileResponse(target)

        cleaned = clean_request_path(raw_path)
        if cleaned != "/" and not raw_path.endswith("/"):
            # Relative links in listings and index pages need the slash
            location = quote(cleaned, safe="/") + "/"
            if request.url.query:
                location += "?" + request.url.query
            return RedirectResponse(location, status_code=301)

        index = _find_index(config.root, cleaned)
        if index is not None:
            return FileResponse(index)

        renderer = request.app.state.renderer
        if renderer is None:
            raise ForbiddenError(f"directory listing disabled: {cleaned}")

        page = build_listing_page(target, cleaned)
        rendered = renderer.render(page)
        return Response(rendered.body, media_type=rendered.content_type)

    return router
