# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared parser infrastructure and helper utilities."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Final

from swiftreview.core.errors import MalformedOutputError, UnlocatableFindingError
from swiftreview.core.logging import warn
from swiftreview.core.models import Issue, JsonValue

LOGGER = logging.getLogger(__name__)

ARRAY_CLOSE: Final[str] = "]"
LOCATION_SEPARATOR: Final[str] = ":"
_MIN_LOCATION_SEGMENTS: Final[int] = 3

JsonRecord = Mapping[str, JsonValue]
RecordTransform = Callable[[JsonRecord, "ParseContext"], Issue | None]


@dataclass(frozen=True, slots=True)
class ParseContext:
    """Explicit settings threaded into every record transform."""

    verbose: bool = False
    use_emoji: bool = True

    def report(self, message: str) -> None:
        """Print ``message`` as a warning when verbose output is enabled."""

        LOGGER.debug(message)
        if self.verbose:
            warn(message, use_emoji=self.use_emoji)


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """File and position decoded from a compact ``file:line:column`` string."""

    file: str
    line: int
    column: int


def _decode_array(text: str) -> list[JsonValue]:
    """Strictly decode ``text`` as a JSON array.

    Raises:
        MalformedOutputError: If ``text`` is not valid JSON or not an array.
    """

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedOutputError(f"invalid JSON: {exc}") from exc
    if not isinstance(payload, list):
        raise MalformedOutputError(f"expected a JSON array, got {type(payload).__name__}")
    return payload


def _repair_truncated(text: str) -> list[JsonValue]:
    """Decode the prefix of ``text`` ending at its last ``]``.

    Raises:
        MalformedOutputError: If no closing bracket exists or the prefix is invalid.
    """

    boundary = text.rfind(ARRAY_CLOSE)
    if boundary < 0:
        raise MalformedOutputError("no array terminator found in output")
    return _decode_array(text[: boundary + 1])


def load_json_array(text: str, *, context: ParseContext | None = None) -> list[JsonValue]:
    """Decode tool output as a JSON array, repairing truncated output when possible.

    Long-running tools killed mid-write leave output that is not valid JSON.
    When the strict decode fails the text is cut after its last ``]`` and
    decoded again. When that fails too the output is treated as containing no
    findings.

    Args:
        text: Raw stdout captured from the tool.
        context: Parse settings controlling verbose diagnostics.

    Returns:
        list[JsonValue]: Decoded array items, or ``[]`` when unrecoverable.
    """

    ctx = context or ParseContext()
    stripped = text.strip()
    if not stripped:
        return []
    try:
        return _decode_array(stripped)
    except MalformedOutputError as exc:
        ctx.report(f"JSON parse failed ({exc}); retrying up to the last '{ARRAY_CLOSE}'")
    try:
        recovered = _repair_truncated(stripped)
    except MalformedOutputError as exc:
        ctx.report(f"Unable to recover tool output: {exc}")
        return []
    ctx.report(f"Recovered {len(recovered)} record(s) from truncated output")
    return recovered


def iter_records(payload: Sequence[JsonValue]) -> Iterator[JsonRecord]:
    """Yield the mapping items of ``payload``, skipping anything else."""

    for item in payload:
        if isinstance(item, Mapping):
            yield item


def parse_location(text: str) -> SourceLocation:
    """Parse a ``file:line:column`` location string.

    The last two colon-separated segments must be integers; every segment
    before them is rejoined with ``:`` so file names containing colons survive.

    Raises:
        UnlocatableFindingError: If ``text`` does not have that shape.
    """

    segments = text.split(LOCATION_SEPARATOR)
    if len(segments) < _MIN_LOCATION_SEGMENTS:
        raise UnlocatableFindingError(text)
    try:
        line = int(segments[-2])
        column = int(segments[-1])
    except ValueError as exc:
        raise UnlocatableFindingError(text) from exc
    file = LOCATION_SEPARATOR.join(segments[:-2])
    if not file or line < 1 or column < 1:
        raise UnlocatableFindingError(text)
    return SourceLocation(file=file, line=line, column=column)


def coerce_optional_str(value: JsonValue | None) -> str | None:
    """Return ``value`` as a non-empty string, or ``None``."""

    if value is None:
        return None
    text = value if isinstance(value, str) else str(value)
    return text if text.strip() else None


def coerce_optional_int(value: JsonValue | None) -> int | None:
    """Return ``value`` as a positive integer, or ``None``."""

    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 1 else None
    if isinstance(value, str):
        try:
            parsed = int(value.strip())
        except ValueError:
            return None
        return parsed if parsed >= 1 else None
    return None


def coerce_str_list(value: JsonValue | None) -> list[str]:
    """Return the string items of ``value`` when it is a list."""

    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item is not None]


@dataclass(slots=True)
class JsonArrayParser:
    """Decode a JSON array and map each record through ``transform``."""

    transform: RecordTransform

    def parse(self, stdout: str, *, context: ParseContext | None = None) -> list[Issue]:
        """Return the issues produced from ``stdout``."""

        ctx = context or ParseContext()
        issues: list[Issue] = []
        for record in iter_records(load_json_array(stdout, context=ctx)):
            issue = self.transform(record, ctx)
            if issue is not None:
                issues.append(issue)
        return issues


__all__ = [
    "JsonArrayParser",
    "JsonRecord",
    "ParseContext",
    "RecordTransform",
    "SourceLocation",
    "coerce_optional_int",
    "coerce_optional_str",
    "coerce_str_list",
    "iter_records",
    "load_json_array",
    "parse_location",
]
