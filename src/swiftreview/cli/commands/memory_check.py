# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Implementation of the ``memory-check`` command."""

from __future__ import annotations

import time
from typing import Annotated, Final

import typer

from swiftreview.core.config import DEFAULT_CLOSURE_LOOKAHEAD, DEFAULT_STORED_CLOSURE_SCAN_LIMIT, ScannerConfig
from swiftreview.core.errors import SourcePathError
from swiftreview.core.logging import info, ok, section, warn
from swiftreview.core.models import Issue, ReviewResult
from swiftreview.discovery import find_swift_files
from swiftreview.memory import MemoryScanner, check_lifetime_tracker, rule_label
from swiftreview.memory.runtime import RUNTIME_SETUP_STEPS
from swiftreview.reporting.output import AutoSaveThresholds
from swiftreview.reporting.stats import emit_rule_statistics

from ..shared import (
    FORMAT_OPTION,
    NO_COLOR_OPTION,
    NO_EMOJI_OPTION,
    NO_SAVE_OPTION,
    OUTPUT_OPTION,
    PATH_ARGUMENT,
    VERBOSE_OPTION,
    abort,
    build_output_config,
    publish_result,
)

TOOL_NAME: Final[str] = "Swift Memory Check"
REPORT_PREFIX: Final[str] = "memory"
MEMORY_THRESHOLDS: Final[AutoSaveThresholds] = AutoSaveThresholds(issues=50, files=30)
MEMORY_RECOMMENDATIONS: Final[tuple[str, ...]] = (
    "Use [weak self] in escaping closures that reference self",
    "Declare delegate properties as weak var",
    "Unwrap weak self with guard let self = self before use",
    "Track object lifetimes at runtime with LifetimeTracker",
)

STATIC_OPTION = Annotated[bool, typer.Option("--static-analysis", help="Scan sources for retain-cycle patterns.")]
RUNTIME_OPTION = Annotated[bool, typer.Option("--runtime-analysis", help="Check for LifetimeTracker setup.")]
LOOKAHEAD_OPTION = Annotated[
    int,
    typer.Option("--closure-lookahead", min=1, help="Lines searched after a closure opens."),
]
STORED_LIMIT_OPTION = Annotated[
    int,
    typer.Option("--stored-closure-limit", min=1, help="Lines searched inside a stored closure body."),
]


def memory_check_command(
    path: PATH_ARGUMENT,
    report_format: FORMAT_OPTION = "text",
    static_analysis: STATIC_OPTION = False,
    runtime_analysis: RUNTIME_OPTION = False,
    closure_lookahead: LOOKAHEAD_OPTION = DEFAULT_CLOSURE_LOOKAHEAD,
    stored_closure_limit: STORED_LIMIT_OPTION = DEFAULT_STORED_CLOSURE_SCAN_LIMIT,
    output: OUTPUT_OPTION = None,
    no_save: NO_SAVE_OPTION = False,
    verbose: VERBOSE_OPTION = False,
    no_emoji: NO_EMOJI_OPTION = False,
    no_color: NO_COLOR_OPTION = False,
) -> None:
    """Look for memory-lifecycle problems in Swift sources."""

    started = time.perf_counter()
    cfg = build_output_config(
        report_format=report_format,
        output=output,
        no_save=no_save,
        verbose=verbose,
        no_emoji=no_emoji,
        no_color=no_color,
    )
    if not static_analysis and not runtime_analysis:
        warn(
            "Choose an analysis mode: --static-analysis and/or --runtime-analysis",
            use_emoji=cfg.emoji,
            use_color=cfg.color,
        )
        raise typer.Exit(code=1)

    scanner_config = ScannerConfig(
        closure_lookahead=closure_lookahead,
        stored_closure_scan_limit=stored_closure_limit,
    )
    section(TOOL_NAME, use_color=cfg.color)
    try:
        files = find_swift_files(path, suffix=scanner_config.file_suffix)
    except SourcePathError as exc:
        abort(exc, use_emoji=cfg.emoji)
    info(f"Swift files found: {len(files)}", use_emoji=cfg.emoji, use_color=cfg.color)

    issues: list[Issue] = []
    if static_analysis:
        scanner = MemoryScanner(config=scanner_config, use_emoji=cfg.emoji)
        report = scanner.scan_paths(files)
        issues.extend(report.issues)
        ok(
            f"Static analysis: {len(report.issues)} issue(s) in {report.files_scanned} file(s)",
            use_emoji=cfg.emoji,
            use_color=cfg.color,
        )

    if runtime_analysis:
        info("Runtime analysis with LifetimeTracker:", use_emoji=cfg.emoji, use_color=cfg.color)
        for position, step in enumerate(RUNTIME_SETUP_STEPS, start=1):
            typer.echo(f"   {position}. {step}")
        issues.extend(check_lifetime_tracker(files, path))

    result = ReviewResult(
        tool_name=TOOL_NAME,
        execution_time=time.perf_counter() - started,
        files_checked=len(files),
        issues=tuple(issues),
    )
    publish_result(result, cfg, prefix=REPORT_PREFIX, thresholds=MEMORY_THRESHOLDS)
    emit_rule_statistics(result, cfg, labeler=rule_label, recommendations=MEMORY_RECOMMENDATIONS)


__all__ = ["MEMORY_RECOMMENDATIONS", "memory_check_command"]
