# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0
"""Global test fixtures for ServerGo.

Provides filesystem isolation, config cache management and a ready-made
served directory tree.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.helpers.filesystem import create_served_tree, create_test_data_dir


# ── Fixtures ──────────────────────────────────────────────


@pytest.fixture
def data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create an isolated ServerGo runtime data directory.

    - Redirects ``SERVERGO_DATA_DIR`` to a temp directory
    - Invalidates the config cache before and after the test
    """
    from core.config import invalidate_cache

    d = create_test_data_dir(tmp_path)
    monkeypatch.setenv("SERVERGO_DATA_DIR", str(d))
    invalidate_cache()

    yield d

    invalidate_cache()


@pytest.fixture
def served_root(tmp_path: Path) -> Path:
    """A small directory tree to serve (see ``create_served_tree``)."""
    return create_served_tree(tmp_path)


@pytest.fixture(autouse=True)
def _clear_structlog_context():
    """Keep request-scoped contextvars from leaking between tests."""
    import structlog

    yield
    structlog.contextvars.clear_contextvars()
