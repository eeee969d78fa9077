# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Rich consoles shared by the logging helpers and report presenters."""

from __future__ import annotations

import sys
from functools import lru_cache

from rich.console import Console


def detect_tty() -> bool:
    """Return ``True`` when stdout appears to be backed by a terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


class RichConsoleManager:
    """Hand out one console per effective ``(styled, emoji)`` presentation.

    Colour is only honoured when stdout is a terminal, so a request for colour
    while piping output resolves to the same plain console as ``color=False``.
    Consoles write to whatever ``sys.stdout`` is at print time, which keeps
    captured output (tests, ``CliRunner``) working with cached instances.
    """

    def __init__(self) -> None:
        self._consoles: dict[tuple[bool, bool], Console] = {}

    def get(self, *, color: bool, emoji: bool) -> Console:
        """Return the console for the requested colour and emoji settings."""

        styled = color and detect_tty()
        key = (styled, emoji)
        console = self._consoles.get(key)
        if console is None:
            console = Console(
                color_system="auto" if styled else None,
                no_color=not styled,
                emoji=emoji,
                highlight=False,
                soft_wrap=True,
            )
            self._consoles[key] = console
        return console


@lru_cache(maxsize=1)
def get_console_manager() -> RichConsoleManager:
    """Return the process-wide :class:`RichConsoleManager` instance."""

    return RichConsoleManager()


__all__ = ["RichConsoleManager", "detect_tty", "get_console_manager"]
