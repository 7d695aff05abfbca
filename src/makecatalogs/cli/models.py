# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Data structures for the catalog build CLI."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any

import typer

REPO_PATH_ARGUMENT = Annotated[
    str | None,
    typer.Argument(help="Path to the repository root (overrides configuration).", show_default=False),
]
REPO_URL_OPTION = Annotated[
    str | None,
    typer.Option("--repo-url", "--repo_url", help="Repository URL understood by the selected plugin."),
]
PLUGIN_OPTION = Annotated[
    str | None,
    typer.Option("--plugin", help="Repository backend plugin name (default: FileRepo)."),
]
FORCE_OPTION = Annotated[
    bool,
    typer.Option(
        "--force",
        "-f",
        help="Include records whose installer items are missing.",
    ),
]
SKIP_CHECK_OPTION = Annotated[
    bool,
    typer.Option(
        "--skip-pkg-check",
        "--skip-payload-check",
        "-s",
        help="Skip checking that installer items exist in the repository.",
    ),
]
JOBS_OPTION = Annotated[
    int | None,
    typer.Option("--jobs", "-j", min=1, help="Number of concurrent record reads."),
]
NO_ICONS_OPTION = Annotated[
    bool,
    typer.Option("--no-icons", help="Do not hash icons or write the icon digest index."),
]
CONFIG_OPTION = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Additional TOML configuration file.", dir_okay=False),
]
VERBOSE_OPTION = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Print per-item progress."),
]
EMOJI_OPTION = Annotated[
    bool | None,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output.", show_default=False),
]
COLOR_OPTION = Annotated[
    bool | None,
    typer.Option("--color/--no-color", help="Toggle coloured output.", show_default=False),
]


@dataclass(slots=True)
class CatalogOptions:
    """Normalised CLI inputs for a catalog build."""

    repo_url: str | None
    plugin: str | None
    force: bool
    skip_payload_check: bool
    jobs: int | None
    hash_icons: bool
    config_path: Path | None
    verbose: bool
    emoji: bool | None
    color: bool | None

    def overrides(self) -> dict[str, Any]:
        """Return configuration overrides; unset flags map to ``None`` and defer to config files."""

        return {
            "repo_url": self.repo_url,
            "plugin": self.plugin,
            "force": True if self.force else None,
            "skip_payload_check": True if self.skip_payload_check else None,
            "jobs": self.jobs,
            "hash_icons": None if self.hash_icons else False,
            "verbose": True if self.verbose else None,
            "emoji": self.emoji,
            "color": self.color,
        }


def build_catalog_options(
    repo_path: str | None,
    repo_url: str | None,
    plugin: str | None,
    force: bool,
    skip_pkg_check: bool,
    jobs: int | None,
    no_icons: bool,
    config: Path | None,
    verbose: bool,
    emoji: bool | None,
    color: bool | None,
) -> CatalogOptions:
    """Construct ``CatalogOptions`` from Typer parameters.

    Args:
        repo_path: Positional repository path.
        repo_url: Repository URL option; wins over ``repo_path``.
        plugin: Backend plugin name.
        force: Include unsane records.
        skip_pkg_check: Bypass installer item validation.
        jobs: Concurrent record reads.
        no_icons: Disable icon hashing.
        config: Extra TOML configuration file.
        verbose: Print per-item progress.
        emoji: Emoji output toggle.
        color: Colour output toggle.

    Returns:
        CatalogOptions: Structured CLI options for the build.
    """

    return CatalogOptions(
        repo_url=repo_url or repo_path,
        plugin=plugin,
        force=force,
        skip_payload_check=skip_pkg_check,
        jobs=jobs,
        hash_icons=not no_icons,
        config_path=config,
        verbose=verbose,
        emoji=emoji,
        color=color,
    )


__all__ = [
    "CatalogOptions",
    "build_catalog_options",
    "COLOR_OPTION",
    "CONFIG_OPTION",
    "EMOJI_OPTION",
    "FORCE_OPTION",
    "JOBS_OPTION",
    "NO_ICONS_OPTION",
    "PLUGIN_OPTION",
    "REPO_PATH_ARGUMENT",
    "REPO_URL_OPTION",
    "SKIP_CHECK_OPTION",
    "VERBOSE_OPTION",
]
