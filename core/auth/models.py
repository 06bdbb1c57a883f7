# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of ServerGo, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Authentication data models for ServerGo."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class AuthMode(str, Enum):
    """Closed set of authentication strategies."""

    NONE = "none"
    BASIC = "basic"
    TOKEN = "token"
    FORM = "form"


class AuthSettings(BaseModel):
    """Inputs to :func:`core.auth.authenticators.create_authenticator`.

    Empty ``password`` / ``token`` mean "generate one", never "no auth".
    """

    model_config = ConfigDict(frozen=True)

    mode: AuthMode = AuthMode.NONE
    username: str = ""
    password: str = ""
    token: str = ""
    enable_login_page: bool = False
    realm: str = "ServerGo Protected Area"
