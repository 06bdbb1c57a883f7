"""Unit tests for cli/commands/server.py — the start command."""
# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
from unittest.mock import MagicMock, patch

import pytest

from cli.commands.server import build_server_config, cmd_start, format_banner
from cli.parser import build_parser
from core.auth.authenticators import create_authenticator
from core.auth.models import AuthMode, AuthSettings
from core.config.models import ServerConfig, ServerGoConfig
from core.exceptions import ConfigurationError, NoAvailablePortError


def _args(*argv: str):
    return build_parser().parse_args(["start", *argv])


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)


# ── build_server_config ───────────────────────────────────


class TestBuildServerConfig:
    def test_preferences_fill_unset_options(self, tmp_path):
        prefs = ServerGoConfig(start_port=8123, enable_dir_listing=False, theme="ocean")
        config = build_server_config(_args("-d", str(tmp_path)), prefs)
        assert config.port == 8123
        assert config.enable_dir_listing is False
        assert config.theme == "ocean"
        assert config.root == tmp_path.resolve()

    def test_cli_overrides_preferences(self, tmp_path):
        prefs = ServerGoConfig(start_port=8123, enable_dir_listing=False, theme="ocean")
        args = _args("-d", str(tmp_path), "-p", "9000", "--dir-list", "-m", "forest")
        config = build_server_config(args, prefs)
        assert config.port == 9000
        assert config.enable_dir_listing is True
        assert config.theme == "forest"

    def test_auth_options(self, tmp_path):
        args = _args("-d", str(tmp_path), "-a", "token", "-t", "abc")
        config = build_server_config(args, ServerGoConfig())
        assert config.auth_mode is AuthMode.TOKEN
        assert config.token == "abc"

    def test_missing_dir(self, tmp_path):
        with pytest.raises(ConfigurationError):
            build_server_config(_args("-d", str(tmp_path / "nope")), ServerGoConfig())


# ── format_banner ─────────────────────────────────────────


class TestFormatBanner:
    def _config(self, tmp_path, **kw) -> ServerConfig:
        return ServerConfig.build(root=tmp_path, **kw)

    def test_no_auth(self, tmp_path):
        banner = format_banner(self._config(tmp_path), 8080, create_authenticator(AuthSettings()), "default")
        assert "http://localhost:8080/" in banner
        assert "enabled (theme: default)" in banner
        assert "Password" not in banner
        assert banner.endswith("Press Ctrl+C to stop.")

    def test_basic_shows_credentials(self, tmp_path):
        auth = create_authenticator(AuthSettings(mode="basic", username="u", password="p"))
        banner = format_banner(self._config(tmp_path, host="127.0.0.1"), 80, auth, None)
        assert "http://127.0.0.1:80/" in banner
        assert "Listing:    disabled" in banner
        assert "Username:   u" in banner
        assert "Password:   p" in banner

    def test_token_shows_access_url(self, tmp_path):
        auth = create_authenticator(AuthSettings(mode="token", token="tk"))
        banner = format_banner(self._config(tmp_path), 8080, auth, "json")
        assert "Token:      tk" in banner
        assert "http://localhost:8080/?token=tk" in banner

    def test_form_login_page(self, tmp_path):
        auth = create_authenticator(AuthSettings(mode="form", enable_login_page=True))
        banner = format_banner(self._config(tmp_path), 8080, auth, "default")
        assert "Login page: http://localhost:8080/auth/login" in banner


# ── cmd_start ─────────────────────────────────────────────


class TestCmdStart:
    @pytest.fixture()
    def mocks(self, data_dir):
        sock = MagicMock()
        with patch("core.ports.find_available_port", return_value=8765) as find, \
             patch("core.ports.bind_listener", return_value=sock) as bind, \
             patch("uvicorn.Server") as server_cls, \
             patch("uvicorn.Config") as config_cls, \
             patch("cli.commands.server._open_browser") as open_browser:
            yield {
                "find": find,
                "bind": bind,
                "sock": sock,
                "server_cls": server_cls,
                "config_cls": config_cls,
                "open_browser": open_browser,
            }

    def test_starts_server_on_bound_socket(self, mocks, served_root, capsys):
        cmd_start(_args("-d", str(served_root), "-p", "8000", "--no-open"))

        mocks["find"].assert_called_once_with(8000)
        mocks["bind"].assert_called_once_with("0.0.0.0", 8765)
        mocks["server_cls"].return_value.run.assert_called_once_with(sockets=[mocks["sock"]])
        assert mocks["config_cls"].call_args.kwargs["log_config"] is None
        mocks["open_browser"].assert_not_called()
        assert "http://localhost:8765/" in capsys.readouterr().out

    def test_auto_open_from_preferences(self, mocks, served_root):
        cmd_start(_args("-d", str(served_root)))
        mocks["open_browser"].assert_called_once_with("http://localhost:8765/")

    def test_credentials_printed_not_logged(self, mocks, served_root, capsys, caplog):
        with caplog.at_level(logging.DEBUG), \
             patch("core.logging_config.setup_logging", return_value=None):
            cmd_start(_args("-d", str(served_root), "-a", "basic", "-w", "hunter2-secret", "--no-open"))
        assert "hunter2-secret" in capsys.readouterr().out
        assert "hunter2-secret" not in caplog.text

    def test_bare_theme_lists_themes(self, mocks, capsys):
        cmd_start(_args("--theme"))
        assert capsys.readouterr().out.startswith("Available themes:")
        mocks["server_cls"].assert_not_called()

    def test_no_port_exits(self, mocks, served_root, capsys):
        mocks["find"].side_effect = NoAvailablePortError("no available TCP port")
        with pytest.raises(SystemExit) as exc_info:
            cmd_start(_args("-d", str(served_root)))
        assert exc_info.value.code == 1
        assert "no available TCP port" in capsys.readouterr().err
        mocks["server_cls"].assert_not_called()

    def test_bad_root_exits(self, mocks, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            cmd_start(_args("-d", str(tmp_path / "missing")))
        assert exc_info.value.code == 1

    def test_broken_config_file_exits(self, mocks, data_dir, served_root):
        (data_dir / "config.json").write_text("{", encoding="utf-8")
        with pytest.raises(SystemExit):
            cmd_start(_args("-d", str(served_root)))

    def test_log_persistence_writes_log_file(self, mocks, data_dir, served_root):
        cmd_start(_args("-d", str(served_root), "--enable-log-persistence", "--no-open"))
        assert (data_dir.resolve() / "logs" / "servergo.log").exists()
