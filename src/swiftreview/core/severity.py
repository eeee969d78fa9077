# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Severity levels normalising different tool vocabularies."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


DEFAULT_TOOL_SEVERITIES: Final[dict[str, Severity]] = {
    "error": Severity.ERROR,
    "fatal": Severity.ERROR,
    "warning": Severity.WARNING,
    "info": Severity.INFO,
    "note": Severity.INFO,
}


def map_severity(
    label: object,
    mapping: Mapping[str, Severity] = DEFAULT_TOOL_SEVERITIES,
    default: Severity = Severity.WARNING,
) -> Severity:
    """Return a :class:`Severity` derived from a tool-specific ``label``.

    Args:
        label: Raw severity value reported by the tool.
        mapping: Lower-case tool vocabulary mapped onto :class:`Severity`.
        default: Severity returned when ``label`` is missing or unrecognised.

    Returns:
        Severity: Normalised severity.
    """

    if isinstance(label, str):
        return mapping.get(label.strip().lower(), default)
    return default


_SEVERITY_ICONS: Final[dict[Severity, str]] = {
    Severity.ERROR: "❌",
    Severity.WARNING: "⚠️",
    Severity.INFO: "ℹ️",
}


def severity_icon(severity: Severity) -> str:
    """Return the emoji used when rendering ``severity``."""

    return _SEVERITY_ICONS[severity]


__all__ = ["DEFAULT_TOOL_SEVERITIES", "Severity", "map_severity", "severity_icon"]
