# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of ServerGo, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Central configuration module for ServerGo.

Defines the Pydantic models for the persisted ``config.json`` (user
preferences) and for the immutable per-run :class:`ServerConfig`, and
provides load / save helpers with a module-level singleton cache.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from core.auth.models import AuthMode
from core.dirlist.themes import DEFAULT_THEME, is_valid_theme, supported_themes
from core.exceptions import ConfigurationError, ConfigValidationError

logger = logging.getLogger("servergo.config")

SUPPORTED_LANGUAGES = ("en", "zh-CN")

_TRUE_WORDS = frozenset({"true", "yes", "y", "1", "on"})
_FALSE_WORDS = frozenset({"false", "no", "n", "0", "off"})

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class ServerGoConfig(BaseModel):
    """User preferences persisted in ``config.json``.

    Keys on disk and on the command line are the dashed aliases
    (``auto-open``, ``start-port``, ...).
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    auto_open: bool = Field(True, alias="auto-open")
    enable_dir_listing: bool = Field(True, alias="enable-dir-listing")
    theme: str = DEFAULT_THEME
    language: str = "en"
    enable_log_persistence: bool = Field(False, alias="enable-log-persistence")
    start_port: int = Field(0, alias="start-port", ge=0, le=65535)  # 0 = random

    @field_validator("theme")
    @classmethod
    def _check_theme(cls, v: str) -> str:
        if not is_valid_theme(v):
            raise ValueError(
                f"invalid theme '{v}'; supported: {', '.join(supported_themes())}"
            )
        return v

    @field_validator("language")
    @classmethod
    def _check_language(cls, v: str) -> str:
        if v not in SUPPORTED_LANGUAGES:
            raise ValueError(
                f"unsupported language '{v}'; supported: {', '.join(SUPPORTED_LANGUAGES)}"
            )
        return v

    def to_file_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


CONFIG_KEYS: tuple[str, ...] = tuple(
    field.alias or name for name, field in ServerGoConfig.model_fields.items()
)

_KEY_TO_FIELD: dict[str, str] = {
    field.alias or name: name for name, field in ServerGoConfig.model_fields.items()
}


class ServerConfig(BaseModel):
    """Immutable settings for one server run, built once by ``start``."""

    model_config = ConfigDict(frozen=True)

    port: int = Field(0, ge=0, le=65535)  # 0 = auto-select
    host: str = "0.0.0.0"
    root: Path
    auth_mode: AuthMode = AuthMode.NONE
    username: str = ""
    password: str = ""
    token: str = ""
    enable_login_page: bool = False
    enable_dir_listing: bool = True
    theme: str = DEFAULT_THEME
    request_timeout: float | None = 60.0  # seconds; None or 0 disables

    @field_validator("root")
    @classmethod
    def _check_root(cls, v: Path) -> Path:
        root = Path(v).expanduser().resolve()
        if not root.exists():
            raise ValueError(f"directory does not exist: {root}")
        if not root.is_dir():
            raise ValueError(f"not a directory: {root}")
        return root

    @field_validator("request_timeout")
    @classmethod
    def _check_timeout(cls, v: float | None) -> float | None:
        if v is not None and v < 0:
            raise ValueError("request_timeout must be >= 0")
        return v or None

    @classmethod
    def build(cls, **kwargs: Any) -> ServerConfig:
        """Validate *kwargs*, raising :class:`ConfigurationError` on failure."""
        try:
            return cls(**kwargs)
        except ValidationError as exc:
            messages = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'config'}: {err['msg']}"
                for err in exc.errors()
            )
            raise ConfigurationError(messages) from exc


# ---------------------------------------------------------------------------
# Singleton cache
# ---------------------------------------------------------------------------

_config: ServerGoConfig | None = None
_config_path: Path | None = None
_config_mtime: float = 0.0


def invalidate_cache() -> None:
    """Reset the module-level singleton cache."""
    global _config, _config_path, _config_mtime
    _config = None
    _config_path = None
    _config_mtime = 0.0


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------


def get_config_path(data_dir: Path | None = None) -> Path:
    """Return the path to config.json inside *data_dir*.

    If *data_dir* is not given, it is resolved via ``core.paths.get_data_dir``.
    """
    if data_dir is None:
        from core.paths import get_data_dir

        data_dir = get_data_dir()
    return data_dir / "config.json"


# ---------------------------------------------------------------------------
# Load / Save
# ---------------------------------------------------------------------------


def load_config(path: Path | None = None) -> ServerGoConfig:
    """Load configuration from disk, returning cached instance when possible.

    When the file does not exist the default configuration is returned.
    The cache is invalidated automatically when the file's mtime changes.

    Raises:
        ConfigValidationError: the file is not valid JSON or holds an
            invalid value.
    """
    global _config, _config_path, _config_mtime

    if path is None:
        path = get_config_path()

    if _config is not None and _config_path == path:
        try:
            disk_mtime = path.stat().st_mtime
        except OSError:
            disk_mtime = 0.0
        if disk_mtime == _config_mtime:
            return _config
        logger.debug("Config file changed on disk (mtime %.3f -> %.3f); reloading", _config_mtime, disk_mtime)

    if path.is_file():
        logger.debug("Loading config from %s", path)
        try:
            data: dict[str, Any] = json.loads(path.read_text(encoding="utf-8"))
            config = ServerGoConfig.model_validate(data)
        except json.JSONDecodeError as exc:
            logger.error("Failed to parse %s: %s", path, exc)
            raise ConfigValidationError(f"{path} is not valid JSON: {exc}") from exc
        except ValidationError as exc:
            logger.error("Invalid config in %s: %s", path, exc)
            raise ConfigValidationError(f"{path}: {exc}") from exc
    else:
        logger.debug("Config file not found at %s; using defaults", path)
        config = ServerGoConfig()

    _config = config
    _config_path = path
    try:
        _config_mtime = path.stat().st_mtime
    except OSError:
        _config_mtime = 0.0
    return config


def _atomic_write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp", prefix=f".{path.name}.")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_path, 0o600)
        os.replace(tmp_path, path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            logger.debug("Failed to unlink temp file %s", tmp_path, exc_info=True)
        raise


def save_config(config: ServerGoConfig, path: Path | None = None) -> None:
    """Persist *config* atomically as pretty-printed JSON (mode 0o600)."""
    global _config, _config_path, _config_mtime

    if path is None:
        path = get_config_path()

    text = json.dumps(config.to_file_dict(), indent=2, ensure_ascii=False) + "\n"
    _atomic_write_text(path, text)
    logger.debug("Config saved to %s", path)

    _config = config
    _config_path = path
    try:
        _config_mtime = path.stat().st_mtime
    except OSError:
        _config_mtime = 0.0


# ---------------------------------------------------------------------------
# Key access
# ---------------------------------------------------------------------------


def parse_bool(value: str) -> bool:
    lower = value.strip().lower()
    if lower in _TRUE_WORDS:
        return True
    if lower in _FALSE_WORDS:
        return False
    raise ConfigValidationError(
        f"invalid boolean '{value}'; use true/false, yes/no, on/off or 1/0"
    )


def get_value(key: str, config: ServerGoConfig | None = None) -> Any:
    """Return the value stored under the dashed *key*."""
    if key not in _KEY_TO_FIELD:
        raise ConfigValidationError(
            f"unknown config key '{key}'; valid keys: {', '.join(CONFIG_KEYS)}"
        )
    config = config or load_config()
    return getattr(config, _KEY_TO_FIELD[key])


def set_value(key: str, raw: str, path: Path | None = None) -> ServerGoConfig:
    """Validate *raw* for *key*, persist it and return the new config."""
    if key not in _KEY_TO_FIELD:
        raise ConfigValidationError(
            f"unknown config key '{key}'; valid keys: {', '.join(CONFIG_KEYS)}"
        )
    field_name = _KEY_TO_FIELD[key]
    annotation = ServerGoConfig.model_fields[field_name].annotation

    value: Any
    if annotation in (bool, "bool"):
        value = parse_bool(raw)
    elif annotation in (int, "int"):
        try:
            value = int(raw)
        except ValueError:
            raise ConfigValidationError(f"invalid number '{raw}' for {key}") from None
    else:
        value = raw

    data = load_config(path).model_dump()
    data[field_name] = value
    try:
        new_config = ServerGoConfig.model_validate(data)
    except ValidationError as exc:
        msg = exc.errors()[0]["msg"].removeprefix("Value error, ")
        raise ConfigValidationError(f"{key}: {msg}") from exc

    save_config(new_config, path)
    return new_config
