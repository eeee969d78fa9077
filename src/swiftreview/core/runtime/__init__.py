# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Runtime helpers for launching external processes."""

from __future__ import annotations

from .process import CommandOptions, CommandResult, run_command

__all__ = ["CommandOptions", "CommandResult", "run_command"]
