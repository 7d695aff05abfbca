# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Exceptions raised by the catalog builder and its repository backends."""

from __future__ import annotations

from enum import StrEnum


class MakeCatalogsError(Exception):
    """Base class for errors raised by makecatalogs."""


class RepoOperation(StrEnum):
    """Enumerate repository operations that may fail."""

    CONNECT = "connect"
    LIST = "list"
    READ = "read"
    WRITE = "write"
    DELETE = "delete"


class RepoError(MakeCatalogsError):
    """Raised when a repository backend fails to complete an operation.

    Args:
        operation: Operation that failed.
        path: Logical repository path (or kind) the operation targeted.
        cause: Underlying exception or message describing the failure.
    """

    def __init__(self, operation: RepoOperation, path: str, cause: BaseException | str) -> None:
        self.operation = operation
        self.path = path
        self.cause = cause
        super().__init__(f"{operation.value} {path} failed: {cause}")


class ConfigError(MakeCatalogsError):
    """Raised when configuration input is invalid."""


class RecordFormatError(MakeCatalogsError):
    """Raised when a package-description document cannot be decoded into a record."""


class CatalogBuildAborted(MakeCatalogsError):
    """Raised when a run cannot start because the repository listing failed."""

    def __init__(self, error: RepoError) -> None:
        self.error = error
        super().__init__(f"Could not list repository items: {error}")


__all__ = [
    "CatalogBuildAborted",
    "ConfigError",
    "MakeCatalogsError",
    "RecordFormatError",
    "RepoError",
    "RepoOperation",
]
