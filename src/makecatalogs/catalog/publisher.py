# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Reconcile assembled catalogs with the repository and persist them."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from ..errors import RepoError
from ..interfaces.repo import RepoAccessor
from ..models import CatalogMap, StageResult
from ..serialization import encode_catalog, encode_icon_hashes
from ..types import CATALOGS_KIND, ICON_HASHES_NAME, ICONS_KIND, repo_path

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class PublishSummary:
    """Repository paths changed by a publish pass."""

    written: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)


class CatalogPublisher:
    """The only component that mutates repository state."""

    def __init__(self, repo: RepoAccessor) -> None:
        self._repo = repo

    def publish(self, catalogs: CatalogMap, digests: Mapping[str, str]) -> StageResult[PublishSummary]:
        """Delete stale catalogs, write assembled ones, and write the icon digest index.

        A catalog present in the repository is stale when this run will not
        write it, either because it was not assembled or because it assembled
        to zero records.

        Args:
            catalogs: Assembled catalog map.
            digests: Icon digest map; the index is written only when non-empty.

        Returns:
            StageResult[PublishSummary]: Paths changed, plus every warning raised.
        """

        summary = PublishSummary()
        diagnostics: list[str] = []
        publishable = {name for name, records in catalogs.items() if records}

        try:
            existing = self._repo.itemlist(CATALOGS_KIND)
        except RepoError as exc:
            diagnostics.append(f"WARNING: Could not list existing catalogs: {exc}")
            existing = []

        for name in existing:
            if name in publishable:
                continue
            path = repo_path(CATALOGS_KIND, name)
            try:
                self._repo.delete(path)
            except RepoError as exc:
                diagnostics.append(f"WARNING: Could not delete stale catalog {path}: {exc}")
                continue
            summary.deleted.append(path)

        current = set(existing)
        for name, records in catalogs.items():
            path = repo_path(CATALOGS_KIND, name)
            if not records:
                diagnostics.append(f"WARNING: Catalog {name} has no items and was not written")
                continue
            if name in current:
                LOGGER.debug("Catalog %s already exists; will overwrite", name)
            try:
                self._repo.put(path, encode_catalog(records))
            except RepoError as exc:
                diagnostics.append(f"Failed to create catalog {name}: {exc}")
                continue
            summary.written.append(path)

        if digests:
            path = repo_path(ICONS_KIND, ICON_HASHES_NAME)
            try:
                self._repo.put(path, encode_icon_hashes(digests))
            except RepoError as exc:
                diagnostics.append(f"WARNING: Could not write icon hashes file {path}: {exc}")
            else:
                summary.written.append(path)

        return StageResult(value=summary, diagnostics=tuple(diagnostics))


__all__ = ["CatalogPublisher", "PublishSummary"]
