# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the swiftreview package."""

from __future__ import annotations

import json
from collections import Counter

from pydantic import BaseModel, ConfigDict, Field, computed_field

from swiftreview.core.severity import Severity

type JsonScalar = str | int | float | bool | None
type JsonValue = JsonScalar | list[JsonValue] | dict[str, JsonValue]


class Issue(BaseModel):
    """Standardize a single finding produced by the scanner or a tool ingester.

    ``line`` and ``column`` are ``None`` when the finding cannot be localised,
    for example project-level messages.
    """

    model_config = ConfigDict(frozen=True)

    file: str
    line: int | None = Field(default=None, ge=1)
    column: int | None = Field(default=None, ge=1)
    severity: Severity
    rule: str
    message: str

    @property
    def location(self) -> str:
        """Return ``file[:line]`` as shown in text reports."""

        if self.line is None:
            return self.file
        return f"{self.file}:{self.line}"


class ReviewSummary(BaseModel):
    """Per-severity issue counts derived from a result."""

    model_config = ConfigDict(frozen=True)

    errors: int = Field(default=0, ge=0)
    warnings: int = Field(default=0, ge=0)
    infos: int = Field(default=0, ge=0)

    @property
    def total(self) -> int:
        """Return the number of issues covered by the summary."""
        return self.errors + self.warnings + self.infos


class ReviewResult(BaseModel):
    """Aggregate the issues collected by one tool run.

    The summary is recomputed from :attr:`issues` on every access so the
    per-severity counts can never drift from the issue list.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    tool_name: str = Field(alias="toolName")
    execution_time: float = Field(alias="executionTime", ge=0)
    files_checked: int = Field(alias="filesChecked", ge=0)
    issues: tuple[Issue, ...] = Field(default_factory=tuple)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def summary(self) -> ReviewSummary:
        """Return severity counts for :attr:`issues`."""

        counts = Counter(issue.severity for issue in self.issues)
        return ReviewSummary(
            errors=counts[Severity.ERROR],
            warnings=counts[Severity.WARNING],
            infos=counts[Severity.INFO],
        )

    def rule_counts(self) -> list[tuple[str, int]]:
        """Return ``(rule, count)`` pairs ordered by descending count."""

        counts = Counter(issue.rule for issue in self.issues)
        return sorted(counts.items(), key=lambda item: (-item[1], item[0]))

    def to_payload(self) -> dict[str, JsonValue]:
        """Return a JSON-compatible mapping using the report field names."""

        return self.model_dump(mode="json", by_alias=True)

    def to_json(self) -> str:
        """Serialise the result as pretty JSON with alphabetically sorted keys."""

        return json.dumps(self.to_payload(), indent=2, sort_keys=True, ensure_ascii=False)


__all__ = ["Issue", "JsonScalar", "JsonValue", "ReviewResult", "ReviewSummary"]
