# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render review results as text, JSON, or HTML documents."""

from __future__ import annotations

import html
from collections.abc import Callable
from typing import Final

from swiftreview.core.config import ReportFormat
from swiftreview.core.models import Issue, ReviewResult
from swiftreview.core.severity import severity_icon

_BOX_WIDTH: Final[int] = 54
NO_ISSUES_MESSAGE: Final[str] = "No issues found!"


def _text_header(tool_name: str) -> list[str]:
    border = "═" * (_BOX_WIDTH + 4)
    return [
        f"╔{border}╗",
        f"║  {tool_name[:_BOX_WIDTH].ljust(_BOX_WIDTH)}  ║",
        f"╚{border}╝",
        "",
    ]


def summary_lines(result: ReviewResult) -> list[str]:
    """Return the statistics block shared by text reports and console summaries."""

    summary = result.summary
    return [
        f"  • Files checked: {result.files_checked}",
        f"  • Execution time: {result.execution_time:.2f}s",
        f"  • ❌ Errors: {summary.errors}",
        f"  • ⚠️  Warnings: {summary.warnings}",
        f"  • ℹ️  Info: {summary.infos}",
    ]


def _issue_lines(issue: Issue) -> list[str]:
    return [
        f"{severity_icon(issue.severity)} {issue.location}",
        f"   [{issue.rule}] {issue.message}",
        "",
    ]


def format_text(result: ReviewResult) -> str:
    """Return a plain-text report."""

    lines = _text_header(result.tool_name)
    lines.append("📊 Statistics:")
    lines.extend(summary_lines(result))
    lines.append("")
    if not result.issues:
        lines.append(f"✅ {NO_ISSUES_MESSAGE}")
    else:
        lines.append("🔍 Issues found:")
        lines.append("")
        for issue in result.issues:
            lines.extend(_issue_lines(issue))
    return "\n".join(lines) + "\n"


def format_json(result: ReviewResult) -> str:
    """Return the JSON report with sorted keys."""

    return result.to_json()


def _html_row(issue: Issue) -> str:
    cells = (
        issue.severity.value,
        issue.file,
        "" if issue.line is None else str(issue.line),
        "" if issue.column is None else str(issue.column),
        issue.rule,
        issue.message,
    )
    rendered = "".join(f"<td>{html.escape(cell)}</td>" for cell in cells)
    return f'<tr class="{issue.severity.value}">{rendered}</tr>'


def format_html(result: ReviewResult) -> str:
    """Return a standalone HTML report."""

    summary = result.summary
    title = html.escape(result.tool_name)
    rows = "\n".join(_html_row(issue) for issue in result.issues)
    body = (
        f"<table>\n<thead><tr><th>Severity</th><th>File</th><th>Line</th><th>Column</th>"
        f"<th>Rule</th><th>Message</th></tr></thead>\n<tbody>\n{rows}\n</tbody>\n</table>"
        if result.issues
        else f"<p>{html.escape(NO_ISSUES_MESSAGE)}</p>"
    )
    return (
        "<!DOCTYPE html>\n"
        f'<html><head><meta charset="utf-8"><title>{title}</title></head>\n<body>\n'
        f"<h1>{title}</h1>\n"
        "<ul>"
        f"<li>Files checked: {result.files_checked}</li>"
        f"<li>Execution time: {result.execution_time:.2f}s</li>"
        f"<li>Errors: {summary.errors}</li>"
        f"<li>Warnings: {summary.warnings}</li>"
        f"<li>Info: {summary.infos}</li>"
        "</ul>\n"
        f"{body}\n</body></html>\n"
    )


_FORMATTERS: Final[dict[ReportFormat, Callable[[ReviewResult], str]]] = {
    "text": format_text,
    "json": format_json,
    "html": format_html,
}


def render_report(result: ReviewResult, fmt: ReportFormat) -> str:
    """Render ``result`` in the requested report format."""

    return _FORMATTERS[fmt](result)


__all__ = ["format_html", "format_json", "format_text", "render_report", "summary_lines"]
