# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Content digests for icon assets."""

from __future__ import annotations

import hashlib
import logging
from concurrent.futures import ThreadPoolExecutor

from ..config import CatalogConfig
from ..errors import RepoError
from ..interfaces.repo import RepoAccessor
from ..models import IconDigestMap, StageResult
from ..types import ICON_HASHES_NAME, ICONS_KIND, repo_path

LOGGER = logging.getLogger(__name__)


def compute_digest(data: bytes) -> str:
    """Return the hex-encoded SHA-256 digest of ``data``."""

    return hashlib.sha256(data).hexdigest()


class IconHasher:
    """Hash every icon asset except the digest index itself."""

    def __init__(self, repo: RepoAccessor, config: CatalogConfig) -> None:
        self._repo = repo
        self._jobs = config.icon_jobs

    def hash(self) -> StageResult[IconDigestMap]:
        """Return digests for every readable icon, plus read warnings.

        Returns:
            StageResult[IconDigestMap]: Icon name to hex digest, and per-icon warnings.
        """

        try:
            names = [name for name in self._repo.itemlist(ICONS_KIND) if name != ICON_HASHES_NAME]
        except RepoError as exc:
            return StageResult(value={}, diagnostics=(f"WARNING: Could not list icons: {exc}",))

        with ThreadPoolExecutor(max_workers=self._jobs) as executor:
            results = list(executor.map(self._hash_one, names))

        digests: IconDigestMap = {}
        diagnostics: list[str] = []
        for name, digest, message in results:
            if digest is not None:
                digests[name] = digest
            if message is not None:
                diagnostics.append(message)
        LOGGER.debug("hashed %d of %d icons", len(digests), len(names))
        return StageResult(value=digests, diagnostics=tuple(diagnostics))

    def _hash_one(self, name: str) -> tuple[str, str | None, str | None]:
        path = repo_path(ICONS_KIND, name)
        try:
            data = self._repo.get(path)
        except (RepoError, OSError) as exc:
            return name, None, f"RepoError for {path}: {exc}"
        return name, compute_digest(data), None


__all__ = ["IconHasher", "compute_digest"]
