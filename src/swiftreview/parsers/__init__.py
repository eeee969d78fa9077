# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsers turning external tool output into :class:`~swiftreview.core.models.Issue` objects."""

from __future__ import annotations

from .base import JsonArrayParser, ParseContext, SourceLocation, load_json_array, parse_location
from .periphery import parse_periphery
from .swiftlint import parse_swiftlint

__all__ = [
    "JsonArrayParser",
    "ParseContext",
    "SourceLocation",
    "load_json_array",
    "parse_location",
    "parse_periphery",
    "parse_swiftlint",
]
