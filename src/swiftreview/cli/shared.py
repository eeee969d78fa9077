# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Option types and result publishing shared by the CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, NoReturn

import typer

from swiftreview.core.config import OutputConfig, parse_report_format
from swiftreview.core.errors import ReviewToolError
from swiftreview.core.logging import fail, info, ok
from swiftreview.core.models import ReviewResult
from swiftreview.reporting.formatters import render_report
from swiftreview.reporting.output import AutoSaveThresholds, resolve_report_path, should_save, write_report
from swiftreview.reporting.stats import emit_summary

PATH_ARGUMENT = Annotated[Path, typer.Argument(help="File or directory to check.")]
FORMAT_OPTION = Annotated[str, typer.Option("--format", "-f", help="Report format: text, json, html.")]
OUTPUT_OPTION = Annotated[
    Path | None,
    typer.Option("--output", "-o", help="Write the report to this file instead of reports/."),
]
NO_SAVE_OPTION = Annotated[bool, typer.Option("--no-save", help="Print the report to the console only.")]
VERBOSE_OPTION = Annotated[bool, typer.Option("--verbose", help="Print diagnostic details.")]
NO_EMOJI_OPTION = Annotated[bool, typer.Option("--no-emoji", help="Disable emoji in output.")]
NO_COLOR_OPTION = Annotated[bool, typer.Option("--no-color", help="Disable coloured output.")]


def build_output_config(
    *,
    report_format: str,
    output: Path | None,
    no_save: bool,
    verbose: bool,
    no_emoji: bool,
    no_color: bool,
) -> OutputConfig:
    """Construct :class:`OutputConfig` from Typer parameters, exiting on bad input."""

    try:
        fmt = parse_report_format(report_format)
    except ReviewToolError as exc:
        abort(exc, use_emoji=not no_emoji)
    return OutputConfig(
        verbose=verbose,
        emoji=not no_emoji,
        color=not no_color,
        report_format=fmt,
        output=output,
        save=not no_save,
    )


def abort(exc: Exception | str, *, use_emoji: bool, hints: tuple[str, ...] = ()) -> NoReturn:
    """Report a fatal error and terminate the command with status ``1``."""

    fail(str(exc), use_emoji=use_emoji)
    for hint in hints:
        typer.echo(f"   {hint}")
    raise typer.Exit(code=1)


def publish_result(
    result: ReviewResult,
    cfg: OutputConfig,
    *,
    prefix: str,
    thresholds: AutoSaveThresholds,
) -> Path | None:
    """Save or print the report and return the saved path, if any."""

    if not should_save(cfg, result, thresholds):
        typer.echo(render_report(result, cfg.report_format))
        return None

    path = write_report(
        result,
        resolve_report_path(prefix, cfg.report_format, output=cfg.output),
        cfg.report_format,
    )
    emit_summary(result, cfg)
    ok(f"Full report saved: {path}", use_emoji=cfg.emoji, use_color=cfg.color)
    if cfg.report_format == "html":
        info(f"Open in a browser: open {path}", use_emoji=cfg.emoji, use_color=cfg.color)
    elif cfg.report_format == "json":
        info(
            f"Query with jq: cat {path} | jq '.issues[] | select(.severity==\"error\")'",
            use_emoji=cfg.emoji,
            use_color=cfg.color,
        )
    return path


__all__ = [
    "FORMAT_OPTION",
    "NO_COLOR_OPTION",
    "NO_EMOJI_OPTION",
    "NO_SAVE_OPTION",
    "OUTPUT_OPTION",
    "PATH_ARGUMENT",
    "VERBOSE_OPTION",
    "abort",
    "build_output_config",
    "publish_result",
]
