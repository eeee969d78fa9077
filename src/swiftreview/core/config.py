# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models shared by the analysis, tool, and CLI layers."""

from __future__ import annotations

from pathlib import Path
from typing import Final, Literal

from pydantic import BaseModel, ConfigDict, Field

from .errors import ConfigError

ReportFormat = Literal["text", "json", "html"]

REPORT_FORMATS: Final[tuple[ReportFormat, ...]] = ("text", "json", "html")
SWIFT_SUFFIX: Final[str] = ".swift"
DEFAULT_CLOSURE_LOOKAHEAD: Final[int] = 9
DEFAULT_STORED_CLOSURE_SCAN_LIMIT: Final[int] = 20


def parse_report_format(value: str) -> ReportFormat:
    """Return the report format named by ``value``.

    Raises:
        ConfigError: If ``value`` names an unsupported format.
    """

    normalised = value.strip().lower()
    for candidate in REPORT_FORMATS:
        if candidate == normalised:
            return candidate
    raise ConfigError(f"Unsupported report format '{value}'. Expected one of: {', '.join(REPORT_FORMATS)}")


class OutputConfig(BaseModel):
    """Configuration for console output and report artifacts."""

    model_config = ConfigDict(validate_assignment=True)

    verbose: bool = False
    emoji: bool = True
    color: bool = True
    report_format: ReportFormat = "text"
    output: Path | None = None
    save: bool = True


class ScannerConfig(BaseModel):
    """Tunable limits for the memory pattern scanner.

    ``closure_lookahead`` bounds how many lines after a closure opening are
    searched for ``self`` references. ``stored_closure_scan_limit`` caps the
    brace-balancing walk over stored closure bodies.
    """

    model_config = ConfigDict(frozen=True)

    closure_lookahead: int = Field(default=DEFAULT_CLOSURE_LOOKAHEAD, ge=1)
    stored_closure_scan_limit: int = Field(default=DEFAULT_STORED_CLOSURE_SCAN_LIMIT, ge=1)
    file_suffix: str = SWIFT_SUFFIX


class SwiftLintConfig(BaseModel):
    """Options forwarded to the SwiftLint integration."""

    model_config = ConfigDict(validate_assignment=True)

    binary: Path | None = None
    config_file: Path | None = None
    fix: bool = False
    strict: bool = False


class PeripheryConfig(BaseModel):
    """Options forwarded to the Periphery integration."""

    model_config = ConfigDict(validate_assignment=True)

    binary: Path | None = None
    scheme: str | None = None
    targets: str | None = None


__all__ = [
    "DEFAULT_CLOSURE_LOOKAHEAD",
    "DEFAULT_STORED_CLOSURE_SCAN_LIMIT",
    "OutputConfig",
    "PeripheryConfig",
    "REPORT_FORMATS",
    "ReportFormat",
    "SWIFT_SUFFIX",
    "ScannerConfig",
    "SwiftLintConfig",
    "parse_report_format",
]
