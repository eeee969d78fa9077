# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Rich panel rendering for review statistics."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from rich import box
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from swiftreview.core.config import OutputConfig
from swiftreview.core.models import ReviewResult
from swiftreview.runtime.console.manager import get_console_manager

RuleLabeler = Callable[[str], str]


def _styled(value: str, style: str | None) -> Text:
    return Text(value, style=style) if style else Text(value)


def create_summary_panel(result: ReviewResult, cfg: OutputConfig) -> Panel:
    """Create a Rich panel with file, timing, and severity counts."""

    table = Table(show_header=False, box=box.SIMPLE, pad_edge=False, expand=False)
    label_style = "yellow" if cfg.color else None
    value_style = "orange1" if cfg.color else None
    table.add_column(style=label_style, justify="left", no_wrap=True)
    table.add_column(style=value_style, justify="right", no_wrap=True)

    summary = result.summary
    rows = (
        ("Files checked", str(result.files_checked)),
        ("Execution time", f"{result.execution_time:.2f}s"),
        ("Errors", str(summary.errors)),
        ("Warnings", str(summary.warnings)),
        ("Info", str(summary.infos)),
    )
    for label, value in rows:
        table.add_row(_styled(label, label_style), _styled(value, value_style))

    title_text = f"📊 {result.tool_name}" if cfg.emoji else result.tool_name
    panel = Panel.fit(table, title=title_text, padding=(0, 1))
    if cfg.color:
        panel.border_style = "yellow"
    return panel


def create_rule_table(result: ReviewResult, labeler: RuleLabeler, cfg: OutputConfig) -> Table:
    """Create a table of issue counts per rule, most frequent first."""

    table = Table(box=box.SIMPLE, expand=False)
    table.add_column("Rule", style="cyan" if cfg.color else None)
    table.add_column("Count", justify="right")
    for rule, count in result.rule_counts():
        table.add_row(Text(labeler(rule)), str(count))
    return table


def emit_summary(result: ReviewResult, cfg: OutputConfig) -> None:
    """Print the summary panel."""

    console = get_console_manager().get(color=cfg.color, emoji=cfg.emoji)
    console.print(create_summary_panel(result, cfg))


def emit_rule_statistics(
    result: ReviewResult,
    cfg: OutputConfig,
    *,
    labeler: RuleLabeler,
    recommendations: Sequence[str] = (),
) -> None:
    """Print per-rule counts followed by numbered recommendations."""

    if not result.issues:
        return
    console = get_console_manager().get(color=cfg.color, emoji=cfg.emoji)
    console.print(create_rule_table(result, labeler, cfg))
    if recommendations:
        console.print(Text("Recommendations:", style="bold" if cfg.color else ""))
        for position, entry in enumerate(recommendations, start=1):
            console.print(Text(f"  {position}. {entry}"))


__all__ = ["create_rule_table", "create_summary_panel", "emit_rule_statistics", "emit_summary"]
