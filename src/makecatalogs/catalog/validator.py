# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Check that records reference installer artifacts present in the repository."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from ..models import Record, StageResult
from ..types import EXEMPT_INSTALLER_TYPES, PKGS_KIND, UNINSTALLER_METHODS, repo_path

LOGGER = logging.getLogger(__name__)


class ArtifactMatch(Enum):
    """Result of resolving a declared location against the artifact listing."""

    EXACT = "exact"
    CASE_ONLY = "case_only"
    MISSING = "missing"


@dataclass(slots=True)
class ReferenceValidator:
    """Decide whether records are sane to publish.

    Validation is pure: it only consults the artifact listing captured at
    construction time.

    Attributes:
        artifacts: Item names returned by ``itemlist("pkgs")``.
    """

    artifacts: Sequence[str]
    _paths: frozenset[str] = field(init=False, repr=False)
    _folded: dict[str, str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        paths = [repo_path(PKGS_KIND, name) for name in self.artifacts]
        self._paths = frozenset(paths)
        folded: dict[str, str] = {}
        for path in paths:
            folded.setdefault(path.casefold(), path)
        self._folded = folded

    def resolve(self, location: str) -> tuple[ArtifactMatch, str | None]:
        """Resolve ``location`` (relative to ``pkgs``) against the listing.

        Args:
            location: Declared installer or uninstaller location.

        Returns:
            tuple[ArtifactMatch, str | None]: Match kind and the repository path found, if any.
        """

        path = repo_path(PKGS_KIND, location)
        if path in self._paths:
            return ArtifactMatch.EXACT, path
        candidate = self._folded.get(path.casefold())
        if candidate is not None:
            return ArtifactMatch.CASE_ONLY, candidate
        return ArtifactMatch.MISSING, None

    def check(self, record: Record) -> StageResult[bool]:
        """Return whether ``record`` is sane, with any warnings raised.

        Args:
            record: Record to verify.

        Returns:
            StageResult[bool]: ``True`` when the record may be published.
        """

        if record.installer_type in EXEMPT_INSTALLER_TYPES:
            return StageResult(value=True)
        if record.has_remote_package():
            return StageResult(value=True)

        diagnostics: list[str] = []
        location = record.installer_item_location
        if location is None:
            return StageResult(value=False, diagnostics=(f"WARNING: {record.ref} is missing installer_item_location",))
        sane = self._check_location(record, location, "installer", diagnostics)

        uninstaller = record.uninstaller_item_location
        if uninstaller is not None:
            sane = self._check_location(record, uninstaller, "uninstaller", diagnostics) and sane
        elif record.uninstall_method in UNINSTALLER_METHODS:
            diagnostics.append(f"WARNING: {record.ref} is missing uninstaller_item_location")
            sane = False
        return StageResult(value=sane, diagnostics=tuple(diagnostics))

    def _check_location(self, record: Record, location: str, role: str, diagnostics: list[str]) -> bool:
        match, found = self.resolve(location)
        if match is ArtifactMatch.EXACT:
            return True
        if match is ArtifactMatch.CASE_ONLY:
            diagnostics.append(
                f"WARNING: {record.ref} refers to {role} item: {location}. "
                f"The pathname of the item in the repo has different case: {found}. "
                "This may cause issues depending on the case-sensitivity of the underlying filesystem."
            )
            return True
        diagnostics.append(f"WARNING: {record.ref} refers to missing {role} item: {location}")
        return False


def select_sane(
    records: Iterable[Record],
    validator: ReferenceValidator,
    *,
    force: bool,
) -> StageResult[tuple[Record, ...]]:
    """Filter ``records`` down to those eligible for catalog assembly.

    Args:
        records: Loaded records in listing order.
        validator: Validator bound to the current artifact listing.
        force: Include unsane records anyway (their warnings are still kept).

    Returns:
        StageResult[tuple[Record, ...]]: Eligible records in their original order.
    """

    selected: list[Record] = []
    diagnostics: list[str] = []
    for record in records:
        verdict = validator.check(record)
        diagnostics.extend(verdict.diagnostics)
        if verdict.value or force:
            selected.append(record)
        else:
            LOGGER.debug("excluding %s from catalogs", record.ref)
    return StageResult(value=tuple(selected), diagnostics=tuple(diagnostics))


__all__ = ["ArtifactMatch", "ReferenceValidator", "select_sane"]
