# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for repository backend selection."""

from __future__ import annotations

from pathlib import Path

import pytest

from makecatalogs.errors import RepoError, RepoOperation
from makecatalogs.repo.file_repo import FileRepo
from makecatalogs.repo.plugins import DEFAULT_PLUGIN, connect, discover_plugins


def test_default_plugin_is_file_repo(tmp_path: Path) -> None:
    repo = connect(str(tmp_path))

    assert isinstance(repo, FileRepo)
    assert DEFAULT_PLUGIN in discover_plugins()


def test_unknown_plugin_raises_connect_error(tmp_path: Path) -> None:
    with pytest.raises(RepoError, match="unknown repo plugin 'GitRepo'") as excinfo:
        connect(str(tmp_path), "GitRepo", factories={"FileRepo": FileRepo})

    assert excinfo.value.operation is RepoOperation.CONNECT


def test_factory_failures_are_wrapped() -> None:
    def _broken(repo_url: str) -> FileRepo:
        raise OSError(f"cannot mount {repo_url}")

    with pytest.raises(RepoError, match="cannot mount smb://share") as excinfo:
        connect("smb://share", "Broken", factories={"Broken": _broken})

    assert excinfo.value.operation is RepoOperation.CONNECT
    assert isinstance(excinfo.value.__cause__, OSError)
