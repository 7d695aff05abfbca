# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration model for catalog builds."""

from __future__ import annotations

from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field

from .errors import ConfigError
from .repo.plugins import DEFAULT_PLUGIN

DEFAULT_JOBS: Final[int] = 4
DEFAULT_ICON_JOBS: Final[int] = 4


class CatalogConfig(BaseModel):
    """Settings consumed by a single catalog build.

    The resolved instance is passed explicitly into every stage.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    repo_url: str = ""
    plugin: str = DEFAULT_PLUGIN
    force: bool = False
    skip_payload_check: bool = False
    jobs: int = Field(default=DEFAULT_JOBS, ge=1)
    icon_jobs: int = Field(default=DEFAULT_ICON_JOBS, ge=1)
    hash_icons: bool = True
    verbose: bool = False
    emoji: bool = True
    color: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Return the configuration as a plain mapping."""

        return self.model_dump()


__all__ = ["CatalogConfig", "ConfigError"]
