# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Catalog building stages and the engine that runs them."""

from __future__ import annotations

from .assembler import assemble_catalogs, case_collisions
from .engine import CatalogEngine, RunStage, build_catalogs
from .icons import IconHasher, compute_digest
from .loader import RecordLoader
from .publisher import CatalogPublisher, PublishSummary
from .validator import ArtifactMatch, ReferenceValidator, select_sane

__all__ = (
    "ArtifactMatch",
    "CatalogEngine",
    "CatalogPublisher",
    "IconHasher",
    "PublishSummary",
    "RecordLoader",
    "ReferenceValidator",
    "RunStage",
    "assemble_catalogs",
    "build_catalogs",
    "case_collisions",
    "compute_digest",
    "select_sane",
)
