# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Entry-point discovery for repository backend plugins."""

from __future__ import annotations

import logging
from importlib import metadata
from typing import Final, cast

from ..errors import RepoError, RepoOperation
from ..interfaces.repo import RepoAccessor, RepoFactory
from .file_repo import FileRepo

PLUGIN_GROUP: Final[str] = "makecatalogs.repo_plugins"
DEFAULT_PLUGIN: Final[str] = "FileRepo"

LOGGER = logging.getLogger(__name__)


def discover_plugins() -> dict[str, RepoFactory]:
    """Return backend factories registered under the plugin entry point.

    Returns:
        dict[str, RepoFactory]: Factories keyed by entry-point name, including ``FileRepo``.
    """

    factories: dict[str, RepoFactory] = {DEFAULT_PLUGIN: FileRepo}
    try:
        entries = metadata.entry_points()
    except metadata.PackageNotFoundError:  # pragma: no cover - metadata failure fallback
        return factories
    for entry in entries.select(group=PLUGIN_GROUP):
        try:
            factories[entry.name] = cast(RepoFactory, entry.load())
        except (AttributeError, ImportError, ValueError) as exc:
            LOGGER.debug("skipping repo plugin %s: %s", entry.name, exc)
            continue
    return factories


def connect(
    repo_url: str,
    plugin: str = DEFAULT_PLUGIN,
    *,
    factories: dict[str, RepoFactory] | None = None,
) -> RepoAccessor:
    """Return a repository accessor for ``repo_url`` using ``plugin``.

    Args:
        repo_url: Repository location understood by the selected backend.
        plugin: Backend name; ``FileRepo`` or a registered entry point.
        factories: Optional factory overrides used for testing.

    Returns:
        RepoAccessor: Connected repository accessor.

    Raises:
        RepoError: If the plugin is unknown or the backend cannot connect.
    """

    available = factories if factories is not None else discover_plugins()
    factory = available.get(plugin)
    if factory is None:
        known = ", ".join(sorted(available))
        raise RepoError(RepoOperation.CONNECT, repo_url, f"unknown repo plugin '{plugin}' (available: {known})")
    try:
        repo = factory(repo_url)
    except RepoError:
        raise
    except (OSError, ValueError, TypeError) as exc:
        raise RepoError(RepoOperation.CONNECT, repo_url, exc) from exc
    LOGGER.debug("connected to %s using %s", repo_url, plugin)
    return repo


__all__ = ["DEFAULT_PLUGIN", "PLUGIN_GROUP", "connect", "discover_plugins"]
