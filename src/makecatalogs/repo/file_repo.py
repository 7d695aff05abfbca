# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Local filesystem repository backend."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from urllib.parse import unquote, urlparse

from ..errors import RepoError, RepoOperation
from ..interfaces.repo import RepoAccessor

FILE_SCHEME = "file"


def path_from_url(repo_url: str) -> Path:
    """Return the local directory addressed by ``repo_url``.

    Args:
        repo_url: ``file://`` URL or plain filesystem path.

    Returns:
        Path: Absolute directory path.

    Raises:
        RepoError: If the URL uses a scheme other than ``file``.
    """

    parsed = urlparse(repo_url)
    if parsed.scheme == FILE_SCHEME:
        return Path(unquote(parsed.path)).expanduser().resolve()
    if parsed.scheme and len(parsed.scheme) > 1:
        raise RepoError(RepoOperation.CONNECT, repo_url, f"unsupported URL scheme '{parsed.scheme}'")
    return Path(repo_url).expanduser().resolve()


class FileRepo(RepoAccessor):
    """Repository stored in a local (or locally mounted) directory tree."""

    def __init__(self, repo_url: str) -> None:
        """Bind the repository to ``repo_url``.

        Args:
            repo_url: ``file://`` URL or plain filesystem path of the repository root.

        Raises:
            RepoError: If the root is not an existing directory.
        """

        self.root = path_from_url(repo_url)
        if not self.root.is_dir():
            raise RepoError(RepoOperation.CONNECT, str(self.root), "repository root is not a directory")

    def itemlist(self, kind: str) -> list[str]:
        kind_root = self.root / kind
        if not kind_root.exists():
            return []
        names: list[str] = []
        try:
            for dirpath, dirnames, filenames in os.walk(kind_root, onerror=_raise_walk_error):
                dirnames[:] = [name for name in dirnames if not name.startswith(".")]
                base = Path(dirpath).relative_to(kind_root)
                for filename in filenames:
                    if filename.startswith("."):
                        continue
                    names.append((base / filename).as_posix())
        except OSError as exc:
            raise RepoError(RepoOperation.LIST, kind, exc) from exc
        return sorted(names)

    def get(self, path: str) -> bytes:
        try:
            return self._resolve(path).read_bytes()
        except OSError as exc:
            raise RepoError(RepoOperation.READ, path, exc) from exc

    def put(self, path: str, data: bytes) -> None:
        target = self._resolve(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            handle = tempfile.NamedTemporaryFile(dir=target.parent, prefix=f".{target.name}.", delete=False)
            try:
                with handle:
                    handle.write(data)
                os.replace(handle.name, target)
            except OSError:
                Path(handle.name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise RepoError(RepoOperation.WRITE, path, exc) from exc

    def delete(self, path: str) -> None:
        try:
            self._resolve(path).unlink()
        except OSError as exc:
            raise RepoError(RepoOperation.DELETE, path, exc) from exc

    def _resolve(self, path: str) -> Path:
        return self.root / Path(path)

    def __repr__(self) -> str:
        return f"FileRepo(root={str(self.root)!r})"


def _raise_walk_error(error: OSError) -> None:
    raise error


__all__ = ["FileRepo", "path_from_url"]
