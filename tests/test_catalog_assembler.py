# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for grouping records into catalogs."""

from __future__ import annotations

from typing import Any

from makecatalogs.catalog.assembler import assemble_catalogs, case_collisions
from makecatalogs.models import Record


def _record(name: str, **fields: Any) -> Record:
    return Record.from_mapping(f"pkgsinfo/{name}.plist", {"name": name, **fields})


def _names(records: list[Record]) -> list[str]:
    return [record.name for record in records]


def test_all_catalog_exists_for_empty_input() -> None:
    result = assemble_catalogs([])

    assert result.value == {"all": []}
    assert result.diagnostics == ()


def test_records_land_in_all_and_declared_catalogs_in_order() -> None:
    records = [
        _record("Foo", catalogs=["testing", "production"]),
        _record("Bar"),
        _record("Baz", catalogs=["testing"]),
    ]

    result = assemble_catalogs(records)

    assert list(result.value) == ["all", "testing", "production"]
    assert _names(result.value["all"]) == ["Foo", "Bar", "Baz"]
    assert _names(result.value["testing"]) == ["Foo", "Baz"]
    assert _names(result.value["production"]) == ["Foo"]


def test_each_record_appears_once_per_catalog() -> None:
    record = _record("Foo", catalogs=["testing", "testing", "all"])

    result = assemble_catalogs([record])

    assert _names(result.value["all"]) == ["Foo"]
    assert _names(result.value["testing"]) == ["Foo"]


def test_blank_catalog_names_are_reported_and_skipped() -> None:
    result = assemble_catalogs([_record("Foo", catalogs=["", "  ", "testing"])])

    assert set(result.value) == {"all", "testing"}
    assert result.diagnostics == (
        "WARNING: Info file pkgsinfo/Foo.plist has an empty catalog name!",
        "WARNING: Info file pkgsinfo/Foo.plist has an empty catalog name!",
    )


def test_case_colliding_catalogs_are_kept_separate_with_one_warning() -> None:
    records = [
        _record("Foo", catalogs=["Testing"]),
        _record("Bar", catalogs=["testing"]),
        _record("Baz", catalogs=["TESTING"]),
    ]

    result = assemble_catalogs(records)

    assert _names(result.value["Testing"]) == ["Foo"]
    assert _names(result.value["testing"]) == ["Bar"]
    assert len(result.diagnostics) == 1
    assert result.diagnostics[0].endswith("underlying filesystem: Testing, testing, TESTING")


def test_case_collisions_ignores_distinct_names() -> None:
    assert case_collisions(["all", "testing", "production"]) == []
    assert case_collisions(["all", "ALL", "beta"]) == ["all", "ALL"]
