# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Source file discovery."""

from __future__ import annotations

from .filesystem import find_swift_files

__all__ = ["find_swift_files"]
