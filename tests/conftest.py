# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import plistlib
from collections.abc import Callable, Iterable
from threading import Lock
from typing import Any

import pytest

from makecatalogs.errors import RepoError, RepoOperation
from makecatalogs.interfaces.repo import RepoAccessor


class InMemoryRepo(RepoAccessor):
    """Dictionary-backed repository with injectable failures."""

    def __init__(self, items: dict[str, bytes] | None = None) -> None:
        self.items: dict[str, bytes] = dict(items or {})
        self.fail_lists: set[str] = set()
        self.fail_reads: set[str] = set()
        self.os_error_reads: set[str] = set()
        self.fail_writes: set[str] = set()
        self.fail_deletes: set[str] = set()
        self.writes: list[str] = []
        self.deletes: list[str] = []
        self._lock = Lock()

    def itemlist(self, kind: str) -> list[str]:
        if kind in self.fail_lists:
            raise RepoError(RepoOperation.LIST, kind, "injected list failure")
        prefix = f"{kind}/"
        with self._lock:
            return sorted(path[len(prefix) :] for path in self.items if path.startswith(prefix))

    def get(self, path: str) -> bytes:
        if path in self.fail_reads:
            raise RepoError(RepoOperation.READ, path, "injected read failure")
        if path in self.os_error_reads:
            raise OSError(f"connection reset reading {path}")
        with self._lock:
            try:
                return self.items[path]
            except KeyError as exc:
                raise RepoError(RepoOperation.READ, path, "no such item") from exc

    def put(self, path: str, data: bytes) -> None:
        if path in self.fail_writes:
            raise RepoError(RepoOperation.WRITE, path, "injected write failure")
        with self._lock:
            self.items[path] = data
            self.writes.append(path)

    def delete(self, path: str) -> None:
        if path in self.fail_deletes:
            raise RepoError(RepoOperation.DELETE, path, "injected delete failure")
        with self._lock:
            if path not in self.items:
                raise RepoError(RepoOperation.DELETE, path, "no such item")
            del self.items[path]
            self.deletes.append(path)

    def paths(self, kind: str) -> set[str]:
        """Return the full paths stored under ``kind``."""

        return {f"{kind}/{name}" for name in self.itemlist(kind)}

    def catalog(self, name: str) -> list[dict[str, Any]]:
        """Decode a written catalog."""

        return plistlib.loads(self.items[f"catalogs/{name}"])


@pytest.fixture
def repo() -> InMemoryRepo:
    """Return an empty in-memory repository."""

    return InMemoryRepo()


@pytest.fixture
def add_pkginfo(repo: InMemoryRepo) -> Callable[..., str]:
    """Return a helper that stores a package description and returns its reference."""

    def _add(item_name: str, **fields: Any) -> str:
        path = f"pkgsinfo/{item_name}"
        repo.items[path] = plistlib.dumps(fields)
        return path

    return _add


@pytest.fixture
def add_artifacts(repo: InMemoryRepo) -> Callable[[Iterable[str]], None]:
    """Return a helper that stores placeholder installer items under ``pkgs``."""

    def _add(names: Iterable[str]) -> None:
        for name in names:
            repo.items[f"pkgs/{name}"] = b"payload"

    return _add
