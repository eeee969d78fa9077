# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parser for SwiftLint ``--reporter json`` output."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from swiftreview.core.models import Issue
from swiftreview.core.severity import DEFAULT_TOOL_SEVERITIES, Severity, map_severity

from .base import (
    JsonArrayParser,
    JsonRecord,
    ParseContext,
    coerce_optional_int,
    coerce_optional_str,
)

SWIFTLINT_SEVERITIES: Final[dict[str, Severity]] = dict(DEFAULT_TOOL_SEVERITIES)


def swiftlint_record_to_issue(record: JsonRecord, context: ParseContext) -> Issue | None:
    """Map one SwiftLint violation onto an :class:`Issue`.

    SwiftLint reports the column as ``character``; older releases used
    ``column``. Records without a file, rule identifier, or reason are dropped.
    """

    file = coerce_optional_str(record.get("file"))
    rule = coerce_optional_str(record.get("rule_id"))
    reason = coerce_optional_str(record.get("reason"))
    if file is None or rule is None or reason is None:
        context.report(f"Skipping incomplete SwiftLint record: {dict(record)!r}")
        return None
    column = record.get("character")
    if column is None:
        column = record.get("column")
    return Issue(
        file=file,
        line=coerce_optional_int(record.get("line")),
        column=coerce_optional_int(column),
        severity=map_severity(record.get("severity"), SWIFTLINT_SEVERITIES),
        rule=rule,
        message=reason,
    )


def parse_swiftlint(stdout: str, *, context: ParseContext | None = None) -> Sequence[Issue]:
    """Parse SwiftLint JSON output into issues, tolerating truncated output."""

    return JsonArrayParser(swiftlint_record_to_issue).parse(stdout, context=context)


__all__ = ["SWIFTLINT_SEVERITIES", "parse_swiftlint", "swiftlint_record_to_issue"]
