# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rich consoles used for build reports."""

from __future__ import annotations

import sys
from functools import lru_cache
from typing import NamedTuple

from rich.console import Console


class ConsoleStyle(NamedTuple):
    """Presentation settings a console is built for."""

    color: bool
    emoji: bool
    tty: bool


def detect_tty() -> bool:
    """Return whether stdout is attached to a terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


def _build_console(style: ConsoleStyle) -> Console:
    ansi = style.color and style.tty
    return Console(
        color_system="auto" if ansi else None,
        force_terminal=style.tty,
        no_color=not ansi,
        emoji=style.emoji,
        soft_wrap=True,
    )


class RichConsoleManager:
    """Hand out one Rich console per colour, emoji, and TTY combination.

    Consoles are built lazily and write to whatever ``sys.stdout`` is at print
    time, so captured output in tests and CLI runners still sees the report.
    """

    def __init__(self) -> None:
        self._consoles: dict[ConsoleStyle, Console] = {}

    def get(self, *, color: bool, emoji: bool) -> Console:
        style = ConsoleStyle(color=color, emoji=emoji, tty=detect_tty())
        console = self._consoles.get(style)
        if console is None:
            console = self._consoles[style] = _build_console(style)
        return console


@lru_cache(maxsize=1)
def get_console_manager() -> RichConsoleManager:
    """Return the process-wide console manager."""

    return RichConsoleManager()


__all__ = ["ConsoleStyle", "RichConsoleManager", "detect_tty", "get_console_manager"]
