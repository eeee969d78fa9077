# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Report rendering and persistence."""

from __future__ import annotations

from .formatters import render_report
from .output import AutoSaveThresholds, resolve_report_path, should_save, write_report

__all__ = ["AutoSaveThresholds", "render_report", "resolve_report_path", "should_save", "write_report"]
