# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Data structures shared by the catalog building stages."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Final, Generic, TypeAlias, TypeVar, cast

from pydantic import BaseModel, ConfigDict, Field

from .types import NOTES_KEY, PRIVATE_KEY_PREFIX, PlistValue
from .utils import freeze_plist_mapping, optional_string, string_array, thaw_plist_value

T = TypeVar("T")

PACKAGE_URL_KEYS: Final[tuple[str, ...]] = ("PackageURL", "package_url")
PACKAGE_COMPLETE_URL_KEYS: Final[tuple[str, ...]] = ("PackageCompleteURL", "package_complete_url")


@dataclass(frozen=True, slots=True)
class Record:
    """Immutable package description loaded from the repository.

    Attributes:
        ref: Logical repository path of the source document (``pkgsinfo/<name>``).
        fields: Read-only ordered field bag published verbatim in catalogs.
    """

    ref: str
    fields: Mapping[str, PlistValue]

    @classmethod
    def from_mapping(cls, ref: str, data: Mapping[str, PlistValue]) -> Record:
        """Build a record from a decoded document, dropping non-catalog fields.

        Args:
            ref: Logical repository path of the source document.
            data: Decoded top-level dictionary.

        Returns:
            Record: Frozen record without ``notes`` or ``_``-prefixed fields.
        """

        kept = {
            key: value
            for key, value in data.items()
            if key != NOTES_KEY and not str(key).startswith(PRIVATE_KEY_PREFIX)
        }
        return cls(ref=ref, fields=freeze_plist_mapping(kept, context=ref))

    @property
    def name(self) -> str:
        return cast(str, self.fields["name"])

    @property
    def catalogs(self) -> tuple[str, ...]:
        return string_array(self.fields.get("catalogs"), key="catalogs", context=self.ref)

    @property
    def installer_type(self) -> str | None:
        return optional_string(self.fields.get("installer_type"), key="installer_type", context=self.ref)

    @property
    def installer_item_location(self) -> str | None:
        return optional_string(
            self.fields.get("installer_item_location"),
            key="installer_item_location",
            context=self.ref,
        )

    @property
    def uninstaller_item_location(self) -> str | None:
        return optional_string(
            self.fields.get("uninstaller_item_location"),
            key="uninstaller_item_location",
            context=self.ref,
        )

    @property
    def uninstall_method(self) -> str | None:
        return optional_string(self.fields.get("uninstall_method"), key="uninstall_method", context=self.ref)

    @property
    def package_url(self) -> str | None:
        return self._first_present(PACKAGE_URL_KEYS)

    @property
    def package_complete_url(self) -> str | None:
        return self._first_present(PACKAGE_COMPLETE_URL_KEYS)

    def has_remote_package(self) -> bool:
        """Return ``True`` when the payload is hosted outside the repository."""

        return bool(self.package_url or self.package_complete_url)

    def to_plist(self) -> dict[str, PlistValue]:
        """Return a plain mutable copy of the field bag for encoding."""

        return cast(dict[str, PlistValue], thaw_plist_value(self.fields))

    def _first_present(self, keys: tuple[str, ...]) -> str | None:
        for key in keys:
            value = self.fields.get(key)
            if value:
                return str(value)
        return None


CatalogMap: TypeAlias = dict[str, list[Record]]
IconDigestMap: TypeAlias = dict[str, str]


@dataclass(frozen=True, slots=True)
class StageResult(Generic[T]):
    """Value produced by a stage together with the diagnostics it raised."""

    value: T
    diagnostics: tuple[str, ...] = field(default_factory=tuple)


class RunStatus(StrEnum):
    """Terminal status of a catalog build."""

    OK = "ok"
    FAILED = "failed"


class Outcome(BaseModel):
    """Aggregated result of one catalog build."""

    model_config = ConfigDict(validate_assignment=True)

    errors: list[str] = Field(default_factory=list)
    written: list[str] = Field(default_factory=list)
    deleted: list[str] = Field(default_factory=list)
    status: RunStatus = RunStatus.OK

    def exit_code(self) -> int:
        return 1 if self.status is RunStatus.FAILED else 0


__all__ = [
    "CatalogMap",
    "IconDigestMap",
    "Outcome",
    "Record",
    "RunStatus",
    "StageResult",
]
