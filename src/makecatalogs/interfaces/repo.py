# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Repository storage interfaces."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Callable
from typing import Protocol, TypeAlias, runtime_checkable


@runtime_checkable
class RepoAccessor(Protocol):
    """Abstract storage keyed by logical ``<kind>/<name>`` paths.

    Implementations raise :class:`makecatalogs.errors.RepoError` for every
    transport or storage failure.
    """

    @abstractmethod
    def itemlist(self, kind: str) -> list[str]:
        """Return the ordered relative names stored under ``kind``.

        Args:
            kind: Top-level namespace such as ``pkgsinfo`` or ``catalogs``.

        Returns:
            list[str]: Relative item names, without the ``kind`` prefix.
        """

    @abstractmethod
    def get(self, path: str) -> bytes:
        """Return the raw bytes stored at ``path``.

        Args:
            path: Logical path composed as ``<kind>/<name>``.

        Returns:
            bytes: Stored content.

        Raises:
            RepoError: If the item cannot be read.
            OSError: Backends may let raw I/O errors through; callers treat them like ``RepoError``.
        """

    @abstractmethod
    def put(self, path: str, data: bytes) -> None:
        """Store ``data`` at ``path``, replacing any existing content.

        Args:
            path: Logical path composed as ``<kind>/<name>``.
            data: Content to persist.
        """

    @abstractmethod
    def delete(self, path: str) -> None:
        """Remove the item stored at ``path``.

        Args:
            path: Logical path composed as ``<kind>/<name>``.
        """


RepoFactory: TypeAlias = Callable[[str], RepoAccessor]

__all__ = ["RepoAccessor", "RepoFactory"]
