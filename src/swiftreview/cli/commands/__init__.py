# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command registry."""

from __future__ import annotations

import typer

from .dead_code import dead_code_command
from .memory_check import memory_check_command
from .style_check import style_check_command

__all__ = ["register_commands"]


def register_commands(app: typer.Typer) -> None:
    """Register the review commands on ``app``.

    Args:
        app: Typer application receiving command registrations.
    """

    app.command(name="style-check")(style_check_command)
    app.command(name="dead-code")(dead_code_command)
    app.command(name="memory-check")(memory_check_command)
