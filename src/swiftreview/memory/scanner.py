# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Heuristic retain-cycle scanner working directly on Swift source text.

The detectors match short textual windows rather than a syntax tree. They are
deliberately conservative: an opening brace without nearby evidence produces
no finding, and every lookahead window is clamped to the end of the file.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from swiftreview.core.config import ScannerConfig
from swiftreview.core.errors import UnreadableSourceError
from swiftreview.core.logging import warn
from swiftreview.core.models import Issue

from .rules import DELEGATE_NOT_WEAK, POTENTIAL_RETAIN_CYCLE, STORED_CLOSURE_RETAIN_CYCLE, WEAK_SELF_USAGE

LOGGER = logging.getLogger(__name__)

OPEN_BRACE: Final[str] = "{"
CLOSE_BRACE: Final[str] = "}"
WEAK_SELF_CAPTURE: Final[str] = "[weak self]"
UNOWNED_SELF_CAPTURE: Final[str] = "[unowned self]"
ESCAPING_ATTRIBUTE: Final[str] = "@escaping"
SELF_MEMBER: Final[str] = "self."
SELF_OPTIONAL_MEMBER: Final[str] = "self?."
SELF_OPTIONAL: Final[str] = "self?"
SELF_TOKEN: Final[str] = "self"
GUARD_KEYWORD: Final[str] = "guard"
VAR_KEYWORD: Final[str] = "var"
WEAK_VAR: Final[str] = "weak var"
UNOWNED_VAR: Final[str] = "unowned var"
DELEGATE_TOKEN: Final[str] = "delegate"
FUNCTION_ARROW: Final[str] = "->"
CLOSURE_ASSIGNMENT: Final[str] = "= {"
CAPTURE_LIST_OPEN: Final[str] = "["

Detector = Callable[[Sequence[str], str, ScannerConfig], list[Issue]]


def _references_self_member(line: str) -> bool:
    return SELF_MEMBER in line or SELF_OPTIONAL_MEMBER in line


def _is_escaping(lines: Sequence[str], index: int) -> bool:
    """Return ``True`` when the line or the one before it carries ``@escaping``."""

    if ESCAPING_ATTRIBUTE in lines[index]:
        return True
    return index > 0 and ESCAPING_ATTRIBUTE in lines[index - 1]


def detect_escaping_closures(lines: Sequence[str], file: str, config: ScannerConfig) -> list[Issue]:
    """Flag escaping closures that reference ``self`` without a weak capture.

    For every line opening a brace without ``[weak self]`` or
    ``[unowned self]`` the next ``config.closure_lookahead`` lines are searched
    for ``self.`` or ``self?.``. Only closures marked ``@escaping`` on the same
    or preceding line are reported; non-escaping closures cannot outlive the
    scope that defines them.
    """

    issues: list[Issue] = []
    total = len(lines)
    for index, line in enumerate(lines):
        if OPEN_BRACE not in line or WEAK_SELF_CAPTURE in line or UNOWNED_SELF_CAPTURE in line:
            continue
        window = lines[min(index + 1, total) : min(index + 1 + config.closure_lookahead, total)]
        if not any(_references_self_member(candidate) for candidate in window):
            continue
        if _is_escaping(lines, index):
            issues.append(POTENTIAL_RETAIN_CYCLE.issue(file, index + 1))
    return issues


def detect_unguarded_weak_self(lines: Sequence[str], file: str, config: ScannerConfig) -> list[Issue]:
    """Flag ``[weak self]`` captures whose next line dereferences ``self.`` directly."""

    del config
    issues: list[Issue] = []
    for index, line in enumerate(lines):
        if WEAK_SELF_CAPTURE not in line:
            continue
        next_line = lines[index + 1] if index + 1 < len(lines) else ""
        if SELF_MEMBER in next_line and GUARD_KEYWORD not in next_line and SELF_OPTIONAL not in next_line:
            issues.append(WEAK_SELF_USAGE.issue(file, index + 2))
    return issues


def detect_strong_delegates(lines: Sequence[str], file: str, config: ScannerConfig) -> list[Issue]:
    """Flag ``var`` declarations mentioning ``delegate`` without ``weak``/``unowned``."""

    del config
    issues: list[Issue] = []
    for index, line in enumerate(lines):
        if DELEGATE_TOKEN not in line or VAR_KEYWORD not in line:
            continue
        if WEAK_VAR in line or UNOWNED_VAR in line:
            continue
        issues.append(DELEGATE_NOT_WEAK.issue(file, index + 1))
    return issues


def _stored_closure_mentions_self(lines: Sequence[str], start: int, limit: int) -> bool:
    """Walk a closure body from ``start`` until its braces balance.

    The walk stops after ``limit`` lines even when the braces never balance.
    The line that closes the body is inspected before the walk ends.
    """

    depth = 0
    found_self = False
    for line in lines[start : min(start + limit, len(lines))]:
        depth += line.count(OPEN_BRACE)
        depth -= line.count(CLOSE_BRACE)
        if SELF_TOKEN in line:
            found_self = True
        if depth == 0:
            break
    return found_self


def detect_stored_closures(lines: Sequence[str], file: str, config: ScannerConfig) -> list[Issue]:
    """Flag stored closure properties without a capture list that mention ``self``."""

    issues: list[Issue] = []
    for index, line in enumerate(lines):
        if VAR_KEYWORD not in line or FUNCTION_ARROW not in line or CLOSURE_ASSIGNMENT not in line:
            continue
        if CAPTURE_LIST_OPEN in line:
            continue
        if _stored_closure_mentions_self(lines, index, config.stored_closure_scan_limit):
            issues.append(STORED_CLOSURE_RETAIN_CYCLE.issue(file, index + 1))
    return issues


DETECTORS: Final[tuple[Detector, ...]] = (
    detect_escaping_closures,
    detect_unguarded_weak_self,
    detect_strong_delegates,
    detect_stored_closures,
)


@dataclass(slots=True)
class ScanReport:
    """Issues collected across a batch of files plus the files that were skipped."""

    issues: list[Issue] = field(default_factory=list)
    files_scanned: int = 0
    skipped: list[UnreadableSourceError] = field(default_factory=list)


def read_source(path: Path) -> str:
    """Return the UTF-8 text of ``path``.

    Raises:
        UnreadableSourceError: If the file cannot be opened or decoded.
    """

    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise UnreadableSourceError(path, f"not valid UTF-8 ({exc.reason})") from exc
    except OSError as exc:
        raise UnreadableSourceError(path, exc.strerror or str(exc)) from exc


@dataclass(slots=True)
class MemoryScanner:
    """Run every detector over Swift sources and collect memory findings."""

    config: ScannerConfig = field(default_factory=ScannerConfig)
    use_emoji: bool = True

    def scan_text(self, text: str, file: str) -> list[Issue]:
        """Return findings for ``text`` attributed to ``file``.

        Detector output is concatenated in the fixed detector order, each
        detector reporting in line order.
        """

        lines = text.splitlines()
        issues: list[Issue] = []
        for detector in DETECTORS:
            issues.extend(detector(lines, file, self.config))
        return issues

    def scan_file(self, path: Path) -> list[Issue]:
        """Return findings for the file at ``path``.

        Raises:
            UnreadableSourceError: If the file cannot be read.
        """

        return self.scan_text(read_source(path), str(path))

    def scan_paths(self, files: Sequence[Path]) -> ScanReport:
        """Scan ``files`` in order, skipping any file that cannot be read."""

        report = ScanReport()
        for path in files:
            try:
                issues = self.scan_file(path)
            except UnreadableSourceError as exc:
                warn(f"Skipping {exc.path}: {exc.reason}", use_emoji=self.use_emoji)
                report.skipped.append(exc)
                continue
            report.files_scanned += 1
            report.issues.extend(issues)
        LOGGER.debug("memory scan: %d file(s), %d issue(s)", report.files_scanned, len(report.issues))
        return report


__all__ = [
    "DETECTORS",
    "MemoryScanner",
    "ScanReport",
    "detect_escaping_closures",
    "detect_stored_closures",
    "detect_strong_delegates",
    "detect_unguarded_weak_self",
    "read_source",
]
