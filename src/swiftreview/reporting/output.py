# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Report destination selection and persistence."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Final

from swiftreview.core.config import OutputConfig, ReportFormat
from swiftreview.core.models import ReviewResult

from .formatters import render_report

REPORTS_DIR_NAME: Final[str] = "reports"
REPORT_EXTENSIONS: Final[dict[ReportFormat, str]] = {"text": "txt", "json": "json", "html": "html"}


@dataclass(frozen=True, slots=True)
class AutoSaveThresholds:
    """Counts above which a report is saved to disk even with ``--no-save``."""

    issues: int | None = None
    files: int | None = None

    def exceeded(self, result: ReviewResult) -> bool:
        """Return ``True`` when ``result`` is too large for console output."""

        if self.issues is not None and len(result.issues) > self.issues:
            return True
        return self.files is not None and result.files_checked > self.files


def report_timestamp(now: datetime | None = None) -> str:
    """Return an ISO-8601 timestamp safe for use in file names."""

    moment = now or datetime.now(timezone.utc)
    return moment.isoformat(timespec="seconds").replace("+00:00", "Z").replace(":", "-").replace(".", "-")


def resolve_report_path(
    prefix: str,
    fmt: ReportFormat,
    *,
    output: Path | None = None,
    cwd: Path | None = None,
    now: datetime | None = None,
) -> Path:
    """Return the explicit ``output`` path or ``<cwd>/reports/<prefix>-report-<ts>.<ext>``."""

    if output is not None:
        return output
    reports_dir = (cwd or Path.cwd()) / REPORTS_DIR_NAME
    return reports_dir / f"{prefix}-report-{report_timestamp(now)}.{REPORT_EXTENSIONS[fmt]}"


def should_save(config: OutputConfig, result: ReviewResult, thresholds: AutoSaveThresholds) -> bool:
    """Return whether the report goes to disk instead of the console."""

    return config.save or thresholds.exceeded(result)


def write_report(result: ReviewResult, path: Path, fmt: ReportFormat) -> Path:
    """Render ``result`` to ``path``, creating parent directories as needed."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_report(result, fmt), encoding="utf-8")
    return path


__all__ = [
    "AutoSaveThresholds",
    "REPORT_EXTENSIONS",
    "report_timestamp",
    "resolve_report_path",
    "should_save",
    "write_report",
]
