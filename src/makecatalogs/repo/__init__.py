# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Repository backends and plugin discovery."""

from __future__ import annotations

from .file_repo import FileRepo
from .plugins import DEFAULT_PLUGIN, PLUGIN_GROUP, connect, discover_plugins

__all__ = ["DEFAULT_PLUGIN", "FileRepo", "PLUGIN_GROUP", "connect", "discover_plugins"]
