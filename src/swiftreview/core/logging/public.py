# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Status lines printed while a review command runs.

Every helper takes ``use_emoji`` explicitly; ``use_color`` defaults to TTY
detection so library code can print without threading a full output config.
"""

from __future__ import annotations

from typing import Final, Literal

from rich.rule import Rule
from rich.text import Text

from swiftreview.runtime.console.manager import detect_tty, get_console_manager

StatusKind = Literal["info", "ok", "warn", "fail"]

_STATUS_MARKERS: Final[dict[StatusKind, tuple[str, str]]] = {
    "info": ("ℹ️", "cyan"),
    "ok": ("✅", "green"),
    "warn": ("⚠️", "yellow"),
    "fail": ("❌", "bold red"),
}


def emoji(symbol: str, enable: bool) -> str:
    """Return ``symbol`` followed by a space, or nothing when emoji are disabled."""

    return f"{symbol} " if enable else ""


def _status(kind: StatusKind, msg: str, *, use_emoji: bool, use_color: bool | None) -> None:
    symbol, style = _STATUS_MARKERS[kind]
    color_enabled = detect_tty() if use_color is None else use_color
    line = Text(emoji(symbol, use_emoji))
    line.append(msg, style=style if color_enabled else None)
    get_console_manager().get(color=color_enabled, emoji=use_emoji).print(line)


def section(title: str, *, use_color: bool) -> None:
    """Print the banner that opens a command's output."""

    console = get_console_manager().get(color=use_color, emoji=True)
    if use_color and detect_tty():
        console.print()
        console.print(Rule(Text(title, style="bold")))
        return
    console.print(Text(f"\n--- {title} ---"))


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Print progress or context for the current run."""

    _status("info", msg, use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Print a completed step."""

    _status("ok", msg, use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Print a recoverable problem such as a skipped file."""

    _status("warn", msg, use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Print the error that ends a command."""

    _status("fail", msg, use_emoji=use_emoji, use_color=use_color)


__all__ = ["StatusKind", "emoji", "fail", "info", "ok", "section", "warn"]
