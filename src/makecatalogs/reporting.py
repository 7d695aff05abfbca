# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Diagnostic accumulation and end-of-run reporting."""

from __future__ import annotations

from collections.abc import Iterable
from threading import Lock

from .logging import fail, info, ok, section, warn
from .models import Outcome, RunStatus


class Reporter:
    """Collect diagnostics from every stage of a run.

    Appends are serialised with a lock so concurrent stages may share a
    single reporter. The reporter is consumed once via :meth:`outcome`.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._errors: list[str] = []
        self._written: list[str] = []
        self._deleted: list[str] = []

    def add(self, message: str) -> None:
        with self._lock:
            self._errors.append(message)

    def extend(self, messages: Iterable[str]) -> None:
        """Append ``messages`` in order as one atomic block."""

        batch = list(messages)
        with self._lock:
            self._errors.extend(batch)

    def note_written(self, path: str) -> None:
        with self._lock:
            self._written.append(path)

    def note_deleted(self, path: str) -> None:
        with self._lock:
            self._deleted.append(path)

    @property
    def errors(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._errors)

    def outcome(self) -> Outcome:
        """Return the aggregated :class:`Outcome` for the run."""

        with self._lock:
            failed = bool(self._errors)
            return Outcome(
                errors=list(self._errors),
                written=list(self._written),
                deleted=list(self._deleted),
                status=RunStatus.FAILED if failed else RunStatus.OK,
            )


def render_outcome(outcome: Outcome, *, use_emoji: bool, use_color: bool) -> None:
    """Print warnings first, then per-artifact confirmations, then the status line.

    Args:
        outcome: Aggregated run result.
        use_emoji: Whether status output should include emoji glyphs.
        use_color: Whether ANSI colour output is desired.
    """

    if outcome.errors:
        section("Warnings", use_color=use_color)
        for message in outcome.errors:
            warn(message, use_emoji=use_emoji, use_color=use_color)

    if outcome.deleted or outcome.written:
        section("Repository changes", use_color=use_color)
        for path in outcome.deleted:
            info(f"Removed stale {path}", use_emoji=use_emoji, use_color=use_color)
        for path in outcome.written:
            info(f"Created {path}", use_emoji=use_emoji, use_color=use_color)

    if outcome.status is RunStatus.FAILED:
        fail(
            f"Catalogs rebuilt with {len(outcome.errors)} warning(s).",
            use_emoji=use_emoji,
            use_color=use_color,
        )
    else:
        ok("Catalogs rebuilt successfully.", use_emoji=use_emoji, use_color=use_color)


__all__ = ["Reporter", "render_outcome"]
