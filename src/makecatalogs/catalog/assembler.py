# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Group sane records into named catalogs."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..models import CatalogMap, Record, StageResult
from ..types import ALL_CATALOG

LOGGER = logging.getLogger(__name__)


def assemble_catalogs(records: Iterable[Record]) -> StageResult[CatalogMap]:
    """Build the catalog map for ``records`` in encounter order.

    Every record lands in ``all`` exactly once and in each catalog it declares.
    Blank catalog names are reported and skipped; names that collide when
    compared case-insensitively are reported once but kept separate.

    Args:
        records: Sane records in listing order.

    Returns:
        StageResult[CatalogMap]: Catalog name to ordered records, plus structural warnings.
    """

    catalogs: CatalogMap = {ALL_CATALOG: []}
    diagnostics: list[str] = []
    for record in records:
        catalogs[ALL_CATALOG].append(record)
        seen: set[str] = {ALL_CATALOG}
        for catalog_name in record.catalogs:
            if not catalog_name.strip():
                diagnostics.append(f"WARNING: Info file {record.ref} has an empty catalog name!")
                continue
            if catalog_name in seen:
                continue
            seen.add(catalog_name)
            catalogs.setdefault(catalog_name, []).append(record)
            LOGGER.debug("Adding %s to %s...", record.ref, catalog_name)

    collisions = case_collisions(catalogs)
    if collisions:
        diagnostics.append(
            "WARNING: There are catalogs with names that differ only by case. "
            "This may cause issues depending on the case-sensitivity of the "
            f"underlying filesystem: {', '.join(collisions)}"
        )
    return StageResult(value=catalogs, diagnostics=tuple(diagnostics))


def case_collisions(names: Iterable[str]) -> list[str]:
    """Return every name that equals another name under case-insensitive comparison.

    Args:
        names: Catalog names in assembly order.

    Returns:
        list[str]: Colliding names, in their original order.
    """

    ordered = list(names)
    counts: dict[str, int] = {}
    for name in ordered:
        key = name.casefold()
        counts[key] = counts.get(key, 0) + 1
    return [name for name in ordered if counts[name.casefold()] > 1]


__all__ = ["assemble_catalogs", "case_collisions"]
