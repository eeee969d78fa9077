# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Integrations with external Swift analyzers."""

from __future__ import annotations

from .locator import resolve_executable, tool_version
from .periphery import run_periphery
from .swiftlint import run_swiftlint

__all__ = ["resolve_executable", "run_periphery", "run_swiftlint", "tool_version"]
