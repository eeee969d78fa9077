# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Static memory-lifecycle analysis for Swift sources."""

from __future__ import annotations

from .rules import MEMORY_RULES, MemoryRule, rule_label
from .runtime import check_lifetime_tracker
from .scanner import MemoryScanner, ScanReport

__all__ = [
    "MEMORY_RULES",
    "MemoryRule",
    "MemoryScanner",
    "ScanReport",
    "check_lifetime_tracker",
    "rule_label",
]
