# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Read package-description documents from the repository into records."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from ..config import CatalogConfig
from ..errors import RecordFormatError, RepoError
from ..interfaces.repo import RepoAccessor
from ..models import Record, StageResult
from ..serialization import decode_plist
from ..types import PKGSINFO_KIND, repo_path
from .schema import record_schema_error

LOGGER = logging.getLogger(__name__)

_ItemResult = tuple[Record | None, tuple[str, ...]]


class RecordLoader:
    """Load and decode every package description named in a listing."""

    def __init__(self, repo: RepoAccessor, config: CatalogConfig) -> None:
        self._repo = repo
        self._jobs = config.jobs

    def load(self, names: Sequence[str]) -> StageResult[tuple[Record, ...]]:
        """Load ``names`` (relative to ``pkgsinfo``) into records.

        Reads may run concurrently; results and diagnostics are reduced back
        into listing order.

        Args:
            names: Item names returned by ``itemlist("pkgsinfo")``.

        Returns:
            StageResult[tuple[Record, ...]]: Decoded records plus per-item warnings.
        """

        if self._jobs > 1 and len(names) > 1:
            with ThreadPoolExecutor(max_workers=self._jobs) as executor:
                results = list(executor.map(self.load_one, names))
        else:
            results = [self.load_one(name) for name in names]

        records: list[Record] = []
        diagnostics: list[str] = []
        for record, messages in results:
            diagnostics.extend(messages)
            if record is not None:
                records.append(record)
        return StageResult(value=tuple(records), diagnostics=tuple(diagnostics))

    def load_one(self, name: str) -> _ItemResult:
        """Load a single item, returning ``(record or None, warnings)``."""

        ref = repo_path(PKGSINFO_KIND, name)
        try:
            data = self._repo.get(ref)
        except (RepoError, OSError) as exc:
            return None, (f"Unexpected IO error for {ref}: {exc}",)
        try:
            document = decode_plist(data, context=ref)
        except RecordFormatError as exc:
            return None, (f"Unexpected error for {ref}: {exc}",)

        if "name" not in document:
            return None, (f"WARNING: {ref} is missing name",)
        violation = record_schema_error(document)
        if violation is not None:
            return None, (f"WARNING: {ref} is not a valid package description: {violation}",)
        try:
            record = Record.from_mapping(ref, document)
        except RecordFormatError as exc:
            return None, (f"Unexpected error for {ref}: {exc}",)
        LOGGER.debug("loaded %s (%s)", ref, record.name)
        return record, ()


__all__ = ["RecordLoader"]
