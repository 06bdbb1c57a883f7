from __future__ import annotations
# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of ServerGo, licensed under Apache-2.0.
# See LICENSE for the full license text.


from dataclasses import dataclass
from urllib.parse import quote

from pydantic import BaseModel


# ── Listing Data ──────────────────────────────────────────

@dataclass(frozen=True)
class DirectoryEntry:
    """One child of a listed directory, built fresh per request."""

    name: str
    is_dir: bool
    size: str           # formatted, "-" for directories
    size_bytes: int     # 0 for directories
    last_modified: str  # "YYYY-MM-DD HH:MM:SS"
    path: str           # request path with leading "/"

    @property
    def url(self) -> str:
        encoded = quote(self.path, safe="/")
        return encoded + "/" if self.is_dir else encoded

    def sort_key(self) -> tuple[bool, str, str]:
        return (not self.is_dir, self.name.lower(), self.name)


@dataclass(frozen=True)
class ListingPage:
    """Everything a renderer needs for one directory."""

    dir_path: str
    entries: tuple[DirectoryEntry, ...]
    parent_dir: str     # "" at the root
    current_time: str


@dataclass(frozen=True)
class RenderedListing:
    body: str
    content_type: str


# ── JSON Theme Document ───────────────────────────────────

class JsonListingItem(BaseModel):
    name: str
    is_directory: bool
    size: int
    size_formatted: str
    last_modified: str
    path: str
    url: str


class JsonListing(BaseModel):
    """Body of the ``json`` theme."""

    path: str
    timestamp: str
    parent_directory: str
    contents: list[JsonListingItem]

    @classmethod
    def from_page(cls, page: ListingPage) -> JsonListing:
        return cls(
            path=page.dir_path,
            timestamp=page.current_time,
            parent_directory=page.parent_dir,
            contents=[
                JsonListingItem(
                    name=e.name,
                    is_directory=e.is_dir,
                    size=e.size_bytes,
                    size_formatted=e.size,
                    last_modified=e.last_modified,
                    path=e.path,
                    url=e.url,
                )
                for e in page.entries
            ],
        )
