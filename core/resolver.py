# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of ServerGo, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Map request paths onto the served root without leaving it.

Two containment checks run for every request:

1. A lexical check on the decoded, cleaned request path, before the
   filesystem is touched.
2. The same check against the real path of the target, since a symbolic
   link anywhere along the path may point outside the root.

Missing paths raise :class:`NotFoundError`; containment failures raise
:class:`ForbiddenError`.  Callers map them to 404 and 403 respectively.
"""

from __future__ import annotations

import logging
import os
import posixpath
import stat
from pathlib import Path
from urllib.parse import unquote

from core.exceptions import ForbiddenError, NotFoundError

logger = logging.getLogger("servergo.resolver")


def clean_request_path(request_path: str) -> str:
    """Decode and lexically clean *request_path*, forcing a leading ``/``.

    Raises:
        ForbiddenError: a ``..`` segment climbs above the root, or the path
            contains a NUL byte.
    """
    decoded = unquote(request_path)
    if "\x00" in decoded:
        raise ForbiddenError(f"invalid character in path: {request_path!r}")

    # Backslashes are separators on Windows; treat them as such everywhere.
    decoded = decoded.replace("\\", "/")

    depth = 0
    for segment in decoded.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            depth -= 1
            if depth < 0:
                raise ForbiddenError(f"path escapes served root: {request_path!r}")
        else:
            depth += 1

    return posixpath.normpath("/" + decoded.lstrip("/"))


def _is_contained(root: Path, candidate: Path) -> bool:
    try:
        rel = os.path.relpath(candidate, root)
    except ValueError:
        # Different drives on Windows
        return False
    if rel == os.curdir:
        return True
    # Segment-wise: names such as "..cache" are legal
    return os.pardir not in Path(rel).parts


def resolve_request_path(root: Path, request_path: str) -> Path:
    """Return the absolute filesystem path for *request_path* under *root*.

    *root* must already be absolute.  Symbolic links anywhere along the path
    are followed only when the real target stays inside the real root.
    """
    cleaned = clean_request_path(request_path)
    candidate = root / cleaned.lstrip("/")

    if not _is_contained(root, candidate):
        logger.warning("Traversal rejected: %s", request_path)
        raise ForbiddenError(f"path escapes served root: {request_path!r}")

    try:
        is_link = stat.S_ISLNK(candidate.lstat().st_mode)
    except OSError as exc:
        raise NotFoundError(cleaned) from exc

    try:
        real_target = candidate.resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        if is_link:
            logger.warning("Unresolvable symlink rejected: %s (%s)", candidate, exc)
            raise ForbiddenError(f"cannot resolve link: {request_path!r}") from exc
        raise NotFoundError(cleaned) from exc

    if not _is_contained(root.resolve(), real_target):
        logger.warning("Symlink escape rejected: %s -> %s", candidate, real_target)
        raise ForbiddenError(f"link escapes served root: {request_path!r}")

    return candidate
