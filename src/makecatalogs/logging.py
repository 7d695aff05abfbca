# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console status lines and Rich-backed library logging for catalog builds."""

from __future__ import annotations

import logging
from enum import Enum

from rich.logging import RichHandler
from rich.rule import Rule
from rich.text import Text

from .console import detect_tty, get_console_manager

LOG_FORMAT = "%(message)s"
LOGGER_NAME = "makecatalogs"


class StatusLevel(Enum):
    """Glyph and Rich style for each kind of status line."""

    INFO = ("ℹ️ ", "cyan")
    OK = ("✅ ", "green")
    WARN = ("⚠️ ", "yellow")
    FAIL = ("❌ ", "red")

    @property
    def glyph(self) -> str:
        return self.value[0]

    @property
    def style(self) -> str:
        return self.value[1]


def configure_logging(*, verbose: bool, use_color: bool) -> None:
    """Send ``makecatalogs`` log records to the console through Rich.

    Args:
        verbose: Show per-item ``DEBUG`` traces; otherwise only warnings.
        use_color: Whether the handler's console may emit ANSI colour.
    """

    handler = RichHandler(
        console=get_console_manager().get(color=use_color, emoji=False),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def emoji(symbol: str, enable: bool) -> str:
    return symbol if enable else ""


def _emit(level: StatusLevel, msg: str, *, use_emoji: bool, use_color: bool | None) -> None:
    colored = detect_tty() if use_color is None else use_color
    line = Text(f"{emoji(level.glyph, use_emoji)}{msg}")
    if colored:
        line.stylize(level.style)
    get_console_manager().get(color=colored, emoji=use_emoji).print(line)


def section(title: str, *, use_color: bool) -> None:
    """Print a heading that separates blocks of the build report."""

    console = get_console_manager().get(color=use_color, emoji=True)
    if not use_color:
        console.print(f"\n--- {title} ---")
        return
    console.print()
    console.print(Rule(title))


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    _emit(StatusLevel.INFO, msg, use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    _emit(StatusLevel.OK, msg, use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    _emit(StatusLevel.WARN, msg, use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    _emit(StatusLevel.FAIL, msg, use_emoji=use_emoji, use_color=use_color)


__all__ = ["StatusLevel", "configure_logging", "emoji", "fail", "info", "ok", "section", "warn"]
