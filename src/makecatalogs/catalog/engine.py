# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Orchestrate a complete catalog build against a repository."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from enum import StrEnum
from typing import TypeVar

from ..config import CatalogConfig
from ..errors import CatalogBuildAborted, RepoError
from ..interfaces.repo import RepoAccessor
from ..models import IconDigestMap, Outcome, StageResult
from ..reporting import Reporter
from ..types import PKGS_KIND, PKGSINFO_KIND
from .assembler import assemble_catalogs
from .icons import IconHasher
from .loader import RecordLoader
from .publisher import CatalogPublisher
from .validator import ReferenceValidator, select_sane

LOGGER = logging.getLogger(__name__)

_T = TypeVar("_T")


class RunStage(StrEnum):
    """Forward-only stages of a catalog build."""

    LISTING = "listing"
    LOADING = "loading"
    VALIDATING = "validating"
    HASHING = "hashing"
    ASSEMBLING = "assembling"
    PUBLISHING = "publishing"
    DONE = "done"


class CatalogEngine:
    """Run one catalog build: list, load, validate, assemble, publish.

    Icon hashing runs on its own worker pool alongside record processing and
    its digest map is merged only when publishing.
    """

    def __init__(self, repo: RepoAccessor, config: CatalogConfig, reporter: Reporter | None = None) -> None:
        self._repo = repo
        self._config = config
        self.reporter = reporter or Reporter()
        self.stage = RunStage.LISTING

    def run(self) -> Outcome:
        """Execute the build and return its aggregated outcome.

        Returns:
            Outcome: Accumulated diagnostics, changed paths, and terminal status.

        Raises:
            CatalogBuildAborted: If the record or artifact listing fails.
        """

        self._enter(RunStage.LISTING)
        try:
            record_names = self._repo.itemlist(PKGSINFO_KIND)
            artifact_names = [] if self._config.skip_payload_check else self._repo.itemlist(PKGS_KIND)
        except RepoError as exc:
            raise CatalogBuildAborted(exc) from exc

        with ThreadPoolExecutor(max_workers=1, thread_name_prefix="icon-hasher") as icon_pool:
            icon_future = self._start_icon_hashing(icon_pool)

            self._enter(RunStage.LOADING)
            loaded = self._collect(RecordLoader(self._repo, self._config).load(record_names))

            self._enter(RunStage.VALIDATING)
            if self._config.skip_payload_check:
                sane = loaded
            else:
                validator = ReferenceValidator(artifact_names)
                sane = self._collect(select_sane(loaded, validator, force=self._config.force))

            self._enter(RunStage.HASHING)
            digests: IconDigestMap = self._collect(icon_future.result()) if icon_future is not None else {}

        self._enter(RunStage.ASSEMBLING)
        catalogs = self._collect(assemble_catalogs(sane))

        self._enter(RunStage.PUBLISHING)
        summary = self._collect(CatalogPublisher(self._repo).publish(catalogs, digests))
        for path in summary.deleted:
            self.reporter.note_deleted(path)
        for path in summary.written:
            self.reporter.note_written(path)

        self._enter(RunStage.DONE)
        return self.reporter.outcome()

    def _start_icon_hashing(self, pool: ThreadPoolExecutor) -> Future[StageResult[IconDigestMap]] | None:
        if not self._config.hash_icons:
            return None
        return pool.submit(IconHasher(self._repo, self._config).hash)

    def _collect(self, result: StageResult[_T]) -> _T:
        self.reporter.extend(result.diagnostics)
        return result.value

    def _enter(self, stage: RunStage) -> None:
        self.stage = stage
        LOGGER.debug("stage: %s", stage.value)


def build_catalogs(repo: RepoAccessor, config: CatalogConfig) -> Outcome:
    """Run a catalog build for ``repo`` with ``config`` and return the outcome."""

    return CatalogEngine(repo, config).run()


__all__ = ["CatalogEngine", "RunStage", "build_catalogs"]
