# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared type aliases and constants for catalog building."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Final, TypeAlias

PlistPrimitive: TypeAlias = str | int | float | bool | bytes | datetime
PlistValue: TypeAlias = PlistPrimitive | Sequence["PlistValue"] | Mapping[str, "PlistValue"]

PKGSINFO_KIND: Final[str] = "pkgsinfo"
PKGS_KIND: Final[str] = "pkgs"
CATALOGS_KIND: Final[str] = "catalogs"
ICONS_KIND: Final[str] = "icons"

ALL_CATALOG: Final[str] = "all"
ICON_HASHES_NAME: Final[str] = "_icon_hashes.plist"

# installer types with no locally hosted payload
EXEMPT_INSTALLER_TYPES: Final[frozenset[str]] = frozenset({"nopkg", "apple_update_metadata"})
UNINSTALLER_METHODS: Final[frozenset[str]] = frozenset({"uninstall_package"})

NOTES_KEY: Final[str] = "notes"
PRIVATE_KEY_PREFIX: Final[str] = "_"


def repo_path(kind: str, name: str) -> str:
    """Return the logical repository path for ``name`` under ``kind``."""

    return f"{kind}/{name}"


__all__ = [
    "ALL_CATALOG",
    "CATALOGS_KIND",
    "EXEMPT_INSTALLER_TYPES",
    "ICONS_KIND",
    "ICON_HASHES_NAME",
    "NOTES_KEY",
    "PKGSINFO_KIND",
    "PKGS_KIND",
    "PRIVATE_KEY_PREFIX",
    "PlistPrimitive",
    "PlistValue",
    "UNINSTALLER_METHODS",
    "repo_path",
]
