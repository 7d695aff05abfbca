# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""End-to-end tests for the catalog build engine."""

from __future__ import annotations

import hashlib
import plistlib
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

import pytest

from makecatalogs.catalog.engine import CatalogEngine, RunStage, build_catalogs
from makecatalogs.config import CatalogConfig
from makecatalogs.errors import CatalogBuildAborted
from makecatalogs.models import RunStatus

if TYPE_CHECKING:
    from conftest import InMemoryRepo


def _names(entries: list[dict[str, object]]) -> list[str]:
    return [str(entry["name"]) for entry in entries]


def test_clean_repository_builds_catalogs(
    repo: InMemoryRepo,
    add_pkginfo: Callable[..., str],
    add_artifacts: Callable[[Iterable[str]], None],
) -> None:
    add_pkginfo("a.plist", name="Foo", installer_type="nopkg")
    add_pkginfo("b.plist", name="Bar", catalogs=["testing"], installer_item_location="bar.pkg")
    add_artifacts(["bar.pkg"])

    engine = CatalogEngine(repo, CatalogConfig())
    outcome = engine.run()

    assert engine.stage is RunStage.DONE
    assert outcome.status is RunStatus.OK
    assert outcome.exit_code() == 0
    assert outcome.errors == []
    assert _names(repo.catalog("all")) == ["Foo", "Bar"]
    assert _names(repo.catalog("testing")) == ["Bar"]
    assert outcome.written == ["catalogs/all", "catalogs/testing"]
    assert "icons/_icon_hashes.plist" not in repo.items


def test_missing_installer_item_is_excluded_and_fails_run(
    repo: InMemoryRepo,
    add_pkginfo: Callable[..., str],
    add_artifacts: Callable[[Iterable[str]], None],
) -> None:
    add_pkginfo("a.plist", name="Foo", installer_item_location="missing.pkg")
    add_pkginfo("b.plist", name="Bar", installer_item_location="bar.pkg")
    add_artifacts(["bar.pkg"])

    outcome = build_catalogs(repo, CatalogConfig())

    assert outcome.status is RunStatus.FAILED
    assert outcome.exit_code() == 1
    assert outcome.errors == ["WARNING: pkgsinfo/a.plist refers to missing installer item: missing.pkg"]
    assert _names(repo.catalog("all")) == ["Bar"]


def test_force_includes_unsane_records(
    repo: InMemoryRepo,
    add_pkginfo: Callable[..., str],
) -> None:
    add_pkginfo("a.plist", name="Foo", installer_item_location="missing.pkg")

    outcome = build_catalogs(repo, CatalogConfig(force=True))

    assert outcome.status is RunStatus.FAILED
    assert _names(repo.catalog("all")) == ["Foo"]


def test_skip_payload_check_bypasses_validation(
    repo: InMemoryRepo,
    add_pkginfo: Callable[..., str],
) -> None:
    add_pkginfo("a.plist", name="Foo", installer_item_location="missing.pkg")
    repo.fail_lists.add("pkgs")

    outcome = build_catalogs(repo, CatalogConfig(skip_payload_check=True))

    assert outcome.status is RunStatus.OK
    assert _names(repo.catalog("all")) == ["Foo"]


def test_stale_catalogs_are_removed(
    repo: InMemoryRepo,
    add_pkginfo: Callable[..., str],
) -> None:
    add_pkginfo("a.plist", name="Foo", installer_type="nopkg", catalogs=["production"])
    repo.items["catalogs/testing"] = plistlib.dumps([])

    outcome = build_catalogs(repo, CatalogConfig())

    assert outcome.deleted == ["catalogs/testing"]
    assert repo.paths("catalogs") == {"catalogs/all", "catalogs/production"}


def test_empty_repository_writes_nothing_and_fails(repo: InMemoryRepo) -> None:
    repo.items["catalogs/all"] = plistlib.dumps([])

    outcome = build_catalogs(repo, CatalogConfig())

    assert repo.paths("catalogs") == set()
    assert outcome.errors == ["WARNING: Catalog all has no items and was not written"]
    assert outcome.exit_code() == 1


def test_icon_digests_are_published(
    repo: InMemoryRepo,
    add_pkginfo: Callable[..., str],
) -> None:
    add_pkginfo("a.plist", name="Foo", installer_type="nopkg")
    repo.items["icons/Foo.png"] = b"png bytes"

    outcome = build_catalogs(repo, CatalogConfig())

    assert outcome.status is RunStatus.OK
    index = plistlib.loads(repo.items["icons/_icon_hashes.plist"])
    assert index == {"Foo.png": hashlib.sha256(b"png bytes").hexdigest()}


def test_hash_icons_disabled_skips_digest_index(
    repo: InMemoryRepo,
    add_pkginfo: Callable[..., str],
) -> None:
    add_pkginfo("a.plist", name="Foo", installer_type="nopkg")
    repo.items["icons/Foo.png"] = b"png bytes"

    build_catalogs(repo, CatalogConfig(hash_icons=False))

    assert "icons/_icon_hashes.plist" not in repo.items


def test_unreadable_icon_is_reported(
    repo: InMemoryRepo,
    add_pkginfo: Callable[..., str],
) -> None:
    add_pkginfo("a.plist", name="Foo", installer_type="nopkg")
    repo.items["icons/Foo.png"] = b"png bytes"
    repo.items["icons/Bar.png"] = b"png bytes"
    repo.fail_reads.add("icons/Bar.png")

    outcome = build_catalogs(repo, CatalogConfig())

    assert outcome.status is RunStatus.FAILED
    assert list(plistlib.loads(repo.items["icons/_icon_hashes.plist"])) == ["Foo.png"]


def test_rebuild_is_idempotent(
    repo: InMemoryRepo,
    add_pkginfo: Callable[..., str],
    add_artifacts: Callable[[Iterable[str]], None],
) -> None:
    add_pkginfo("a.plist", name="Foo", catalogs=["testing"], installer_item_location="foo.pkg")
    add_artifacts(["foo.pkg"])
    repo.items["icons/Foo.png"] = b"png bytes"

    build_catalogs(repo, CatalogConfig())
    first = {path: data for path, data in repo.items.items() if not path.startswith("pkgs")}
    build_catalogs(repo, CatalogConfig())
    second = {path: data for path, data in repo.items.items() if not path.startswith("pkgs")}

    assert first == second


@pytest.mark.parametrize("kind", ["pkgsinfo", "pkgs"])
def test_listing_failure_aborts_before_any_write(repo: InMemoryRepo, kind: str) -> None:
    repo.items["catalogs/all"] = b"old"
    repo.fail_lists.add(kind)

    engine = CatalogEngine(repo, CatalogConfig())
    with pytest.raises(CatalogBuildAborted, match="Could not list repository items"):
        engine.run()

    assert engine.stage is RunStage.LISTING
    assert repo.writes == []
    assert repo.deletes == []


def test_backend_os_errors_skip_items_without_aborting(
    repo: InMemoryRepo,
    add_pkginfo: Callable[..., str],
) -> None:
    add_pkginfo("a.plist", name="Foo", installer_type="nopkg")
    add_pkginfo("b.plist", name="Bar", installer_type="nopkg")
    repo.items["icons/Bar.png"] = b"png bytes"
    repo.os_error_reads.update({"pkgsinfo/a.plist", "icons/Bar.png"})

    outcome = build_catalogs(repo, CatalogConfig(jobs=1))

    assert outcome.status is RunStatus.FAILED
    assert len(outcome.errors) == 2
    assert _names(repo.catalog("all")) == ["Bar"]
