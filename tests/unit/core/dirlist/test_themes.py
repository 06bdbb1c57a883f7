"""Unit tests for core.dirlist.themes — the theme registry."""
# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import pytest

from core.dirlist.themes import (
    DEFAULT_THEME,
    ThemeKind,
    is_valid_theme,
    supported_themes,
    templated_themes,
    theme_kind,
)
from core.paths import THEMES_DIR


class TestThemeRegistry:
    def test_order_starts_with_default(self):
        themes = supported_themes()
        assert themes[:7] == ["default", "dark", "blue", "green", "retro", "json", "table"]
        assert themes[-1] == "elegant"
        assert len(themes) == 38
        assert len(set(themes)) == len(themes)

    def test_supported_themes_returns_copy(self):
        supported_themes().append("bogus")
        assert "bogus" not in supported_themes()

    @pytest.mark.parametrize("name", ["default", "json", "table", "neon-pink", "elegant"])
    def test_valid(self, name):
        assert is_valid_theme(name)

    @pytest.mark.parametrize("name", ["", "Default", "no-such-theme", "../default"])
    def test_invalid(self, name):
        assert not is_valid_theme(name)

    def test_kinds(self):
        assert theme_kind("json") is ThemeKind.JSON
        assert theme_kind("table") is ThemeKind.TABLE
        assert theme_kind(DEFAULT_THEME) is ThemeKind.TEMPLATED

    def test_unknown_kind_raises(self):
        with pytest.raises(ValueError):
            theme_kind("nope")


class TestShippedThemes:
    @pytest.mark.parametrize("name", templated_themes())
    def test_every_templated_theme_has_resources(self, name):
        theme_dir = THEMES_DIR / name
        for filename in ("index.html", "row.html", "style.css"):
            assert (theme_dir / filename).is_file(), f"{name}/{filename} missing"

    def test_structured_themes_have_no_templates(self):
        assert not (THEMES_DIR / "json").exists()
        assert not (THEMES_DIR / "table").exists()
