# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Implementation of the ``style-check`` command."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Annotated, Final

import typer

from swiftreview.core.config import SwiftLintConfig
from swiftreview.core.errors import LaunchError, SourcePathError
from swiftreview.core.logging import info, section, warn
from swiftreview.core.models import ReviewResult
from swiftreview.discovery import find_swift_files
from swiftreview.reporting.output import AutoSaveThresholds
from swiftreview.tools.locator import resolve_executable, tool_version
from swiftreview.tools.swiftlint import SWIFTLINT_NAME, run_swiftlint

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

TOOL_NAME: Final[str] = "Swift Style Check"
REPORT_PREFIX: Final[str] = "style"
STYLE_THRESHOLDS: Final[AutoSaveThresholds] = AutoSaveThresholds(issues=100, files=50)
LARGE_PROJECT_FILES: Final[int] = 50
INSTALL_HINTS: Final[tuple[str, ...]] = (
    "Install SwiftLint with: brew install swiftlint",
    "or place a swiftlint binary in ./bin/",
    "or pass --swiftlint-path /path/to/swiftlint",
)

STRICT_OPTION = Annotated[bool, typer.Option("--strict", help="Exit with status 1 when warnings are found.")]
CONFIG_OPTION = Annotated[
    Path | None,
    typer.Option("--config", "--rules-path", help="Path to a .swiftlint.yml file."),
]
SWIFTLINT_PATH_OPTION = Annotated[
    Path | None,
    typer.Option("--swiftlint-path", "--swift-lint-path", help="Path to the swiftlint executable."),
]
FIX_OPTION = Annotated[bool, typer.Option("--fix", help="Apply automatic fixes before linting.")]


def style_check_command(
    path: PATH_ARGUMENT,
    report_format: FORMAT_OPTION = "text",
    strict: STRICT_OPTION = False,
    config: CONFIG_OPTION = None,
    swiftlint_path: SWIFTLINT_PATH_OPTION = None,
    fix: FIX_OPTION = False,
    output: OUTPUT_OPTION = None,
    no_save: NO_SAVE_OPTION = False,
    verbose: VERBOSE_OPTION = False,
    no_emoji: NO_EMOJI_OPTION = False,
    no_color: NO_COLOR_OPTION = False,
) -> None:
    """Check Swift code style with SwiftLint."""

    started = time.perf_counter()
    cfg = build_output_config(
        report_format=report_format,
        output=output,
        no_save=no_save,
        verbose=verbose,
        no_emoji=no_emoji,
        no_color=no_color,
    )
    path = path.expanduser().resolve()
    if config is not None:
        config = config.expanduser().resolve()
    lint_config = SwiftLintConfig(binary=swiftlint_path, config_file=config, fix=fix, strict=strict)
    section(TOOL_NAME, use_color=cfg.color)

    try:
        binary = resolve_executable(SWIFTLINT_NAME, lint_config.binary)
    except LaunchError as exc:
        abort(exc, use_emoji=cfg.emoji, hints=INSTALL_HINTS)

    info(f"Path: {path}", use_emoji=cfg.emoji, use_color=cfg.color)
    info(f"SwiftLint: {binary}", use_emoji=cfg.emoji, use_color=cfg.color)
    version = tool_version(binary)
    if version:
        info(f"Version: {version}", use_emoji=cfg.emoji, use_color=cfg.color)

    try:
        files = find_swift_files(path)
    except SourcePathError as exc:
        abort(exc, use_emoji=cfg.emoji)
    info(f"Swift files found: {len(files)}", use_emoji=cfg.emoji, use_color=cfg.color)
    if len(files) > LARGE_PROJECT_FILES:
        warn(
            f"Large project ({len(files)} files); analysis may take a while",
            use_emoji=cfg.emoji,
            use_color=cfg.color,
        )

    try:
        run = run_swiftlint(binary, path, lint_config, cfg)
    except LaunchError as exc:
        abort(exc, use_emoji=cfg.emoji)

    result = ReviewResult(
        tool_name=TOOL_NAME,
        execution_time=time.perf_counter() - started,
        files_checked=len(files),
        issues=tuple(run.issues),
    )
    publish_result(result, cfg, prefix=REPORT_PREFIX, thresholds=STYLE_THRESHOLDS)

    if lint_config.strict and result.summary.warnings > 0:
        raise typer.Exit(code=1)


__all__ = ["style_check_command"]
