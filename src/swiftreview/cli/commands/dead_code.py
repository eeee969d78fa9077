# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Implementation of the ``dead-code`` command."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Annotated, Final

import typer

from swiftreview.core.config import PeripheryConfig
from swiftreview.core.errors import ConfigError, LaunchError, SourcePathError, ToolExecutionError
from swiftreview.core.logging import info, ok, section
from swiftreview.core.models import ReviewResult
from swiftreview.discovery import find_swift_files
from swiftreview.parsers.periphery import UNUSED_RULE_PREFIX, translate_kind
from swiftreview.reporting.output import AutoSaveThresholds
from swiftreview.reporting.stats import emit_rule_statistics
from swiftreview.tools.locator import resolve_executable, tool_version
from swiftreview.tools.periphery import PERIPHERY_NAME, choose_scheme, ensure_project_path, list_schemes, run_periphery

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

TOOL_NAME: Final[str] = "Swift Dead Code Detection"
REPORT_PREFIX: Final[str] = "dead-code"
DEAD_CODE_THRESHOLDS: Final[AutoSaveThresholds] = AutoSaveThresholds(issues=20)
INSTALL_HINTS: Final[tuple[str, ...]] = (
    "Install Periphery with: brew install peripheryapp/periphery/periphery",
    "or pass --periphery-path /path/to/periphery",
    "Static memory checks still work without it: swift-review memory-check <path> --static-analysis",
)
DEAD_CODE_RECOMMENDATIONS: Final[tuple[str, ...]] = (
    "Remove unused code to keep the project readable",
    "Double-check public declarations, other modules may use them",
    "Refactor large unused classes step by step",
    "Run the dead-code check regularly in CI",
)

TARGETS_OPTION = Annotated[str | None, typer.Option("--targets", help="Comma-separated targets to scan.")]
SCHEME_OPTION = Annotated[str | None, typer.Option("--scheme", help="Xcode scheme to analyse.")]
PERIPHERY_PATH_OPTION = Annotated[
    Path | None,
    typer.Option("--periphery-path", help="Path to the periphery executable."),
]


def describe_rule(rule: str) -> str:
    """Return a readable label for an ``unused_<kind>`` rule."""

    return translate_kind(rule.removeprefix(UNUSED_RULE_PREFIX)).capitalize()


def _count_sources(project: Path) -> int:
    try:
        return len(find_swift_files(project.parent))
    except SourcePathError:
        return 0


def dead_code_command(
    path: PATH_ARGUMENT,
    report_format: FORMAT_OPTION = "text",
    verbose: VERBOSE_OPTION = False,
    targets: TARGETS_OPTION = None,
    scheme: SCHEME_OPTION = None,
    periphery_path: PERIPHERY_PATH_OPTION = None,
    output: OUTPUT_OPTION = None,
    no_save: NO_SAVE_OPTION = False,
    no_emoji: NO_EMOJI_OPTION = False,
    no_color: NO_COLOR_OPTION = False,
) -> None:
    """Detect unused Swift declarations with Periphery."""

    started = time.perf_counter()
    cfg = build_output_config(
        report_format=report_format,
        output=output,
        no_save=no_save,
        verbose=verbose,
        no_emoji=no_emoji,
        no_color=no_color,
    )
    scan_config = PeripheryConfig(binary=periphery_path, scheme=scheme, targets=targets)
    section(TOOL_NAME, use_color=cfg.color)

    try:
        binary = resolve_executable(PERIPHERY_NAME, scan_config.binary)
    except LaunchError as exc:
        abort(exc, use_emoji=cfg.emoji, hints=INSTALL_HINTS)
    version = tool_version(binary)
    if version:
        info(f"Periphery version: {version}", use_emoji=cfg.emoji, use_color=cfg.color)

    try:
        project = ensure_project_path(path.expanduser().resolve())
    except ConfigError as exc:
        abort(exc, use_emoji=cfg.emoji)

    chosen = scan_config.scheme
    if chosen is None:
        schemes = list_schemes(project)
        chosen = choose_scheme(project, schemes)
        if chosen is None:
            hints = (f"Available schemes: {', '.join(schemes)}",) if schemes else ()
            abort("Unable to detect a scheme; pass one with --scheme", use_emoji=cfg.emoji, hints=hints)
        ok(f"Using scheme: {chosen}", use_emoji=cfg.emoji, use_color=cfg.color)

    info(f"Analysing {project.name}...", use_emoji=cfg.emoji, use_color=cfg.color)
    try:
        issues = run_periphery(binary, project, chosen, scan_config, cfg)
    except (LaunchError, ToolExecutionError) as exc:
        abort(exc, use_emoji=cfg.emoji)

    result = ReviewResult(
        tool_name=TOOL_NAME,
        execution_time=time.perf_counter() - started,
        files_checked=_count_sources(project),
        issues=tuple(issues),
    )
    publish_result(result, cfg, prefix=REPORT_PREFIX, thresholds=DEAD_CODE_THRESHOLDS)
    emit_rule_statistics(result, cfg, labeler=describe_rule, recommendations=DEAD_CODE_RECOMMENDATIONS)


__all__ = ["DEAD_CODE_RECOMMENDATIONS", "dead_code_command", "describe_rule"]
