# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parser for Periphery ``scan --format json`` output."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from swiftreview.core.errors import UnlocatableFindingError
from swiftreview.core.models import Issue
from swiftreview.core.severity import Severity

from .base import (
    JsonArrayParser,
    JsonRecord,
    ParseContext,
    coerce_optional_str,
    coerce_str_list,
    parse_location,
)

UNUSED_RULE_PREFIX: Final[str] = "unused_"
PUBLIC_MODIFIERS: Final[frozenset[str]] = frozenset({"public", "open"})

KIND_LABELS: Final[dict[str, str]] = {
    "class": "class",
    "struct": "struct",
    "enum": "enum",
    "protocol": "protocol",
    "function": "function",
    "method": "method",
    "property": "property",
    "parameter": "parameter",
    "typealias": "typealias",
    "associatedtype": "associatedtype",
    "import": "import",
    "extension": "extension",
}

_KIND_ICONS: Final[dict[str, str]] = {
    "class": "🗂️",
    "struct": "🗂️",
    "enum": "🗂️",
    "protocol": "📋",
    "function": "⚙️",
    "method": "⚙️",
    "property": "📦",
    "import": "📥",
}
_DEFAULT_ICON: Final[str] = "🗑️"


def translate_kind(kind: str) -> str:
    """Return the human readable label for a Periphery declaration kind."""

    return KIND_LABELS.get(kind.lower(), kind)


def kind_icon(kind: str) -> str:
    """Return the emoji associated with a Periphery declaration kind."""

    return _KIND_ICONS.get(kind.lower(), _DEFAULT_ICON)


def periphery_severity(modifiers: Sequence[str]) -> Severity:
    """Return ``info`` for externally visible declarations, else ``warning``.

    Public and open declarations may be used by other modules that Periphery
    cannot see.
    """

    if PUBLIC_MODIFIERS.intersection(modifiers):
        return Severity.INFO
    return Severity.WARNING


def build_periphery_message(kind: str, name: str, modifiers: Sequence[str], hints: Sequence[str]) -> str:
    """Compose the issue message from the kind label, modifiers, and hints."""

    message = f"{kind_icon(kind)} Unused {translate_kind(kind)}: '{name}'"
    if modifiers:
        message += f" ({', '.join(modifiers)})"
    if hints:
        message += f"\n      💡 {', '.join(hints)}"
    return message


def periphery_record_to_issue(record: JsonRecord, context: ParseContext) -> Issue | None:
    """Map one Periphery result onto an :class:`Issue`, dropping unlocatable ones."""

    kind = coerce_optional_str(record.get("kind"))
    name = coerce_optional_str(record.get("name")) or ""
    raw_location = coerce_optional_str(record.get("location")) or ""
    if kind is None:
        context.report(f"Skipping Periphery record without kind: {dict(record)!r}")
        return None
    try:
        location = parse_location(raw_location)
    except UnlocatableFindingError as exc:
        context.report(str(exc))
        return None
    modifiers = coerce_str_list(record.get("modifiers"))
    hints = coerce_str_list(record.get("hints"))
    return Issue(
        file=location.file,
        line=location.line,
        column=location.column,
        severity=periphery_severity(modifiers),
        rule=f"{UNUSED_RULE_PREFIX}{kind}",
        message=build_periphery_message(kind, name, modifiers, hints),
    )


def parse_periphery(stdout: str, *, context: ParseContext | None = None) -> Sequence[Issue]:
    """Parse Periphery JSON output into issues, tolerating truncated output."""

    return JsonArrayParser(periphery_record_to_issue).parse(stdout, context=context)


__all__ = [
    "KIND_LABELS",
    "UNUSED_RULE_PREFIX",
    "build_periphery_message",
    "kind_icon",
    "parse_periphery",
    "periphery_record_to_issue",
    "periphery_severity",
    "translate_kind",
]
