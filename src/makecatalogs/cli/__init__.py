# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""makecatalogs CLI package exports."""

from __future__ import annotations

from typing import Final

from .app import app
from .models import CatalogOptions

__all__: Final[list[str]] = ["CatalogOptions", "app"]
