# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from core.config.models import (
    CONFIG_KEYS,
    SUPPORTED_LANGUAGES,
    ServerConfig,
    ServerGoConfig,
    get_config_path,
    get_value,
    invalidate_cache,
    load_config,
    save_config,
    set_value,
)
