# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""SwiftLint integration: build the command line, run it, ingest the JSON report."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from swiftreview.core.config import OutputConfig, SwiftLintConfig
from swiftreview.core.errors import LaunchError
from swiftreview.core.logging import info, ok, warn
from swiftreview.core.models import Issue
from swiftreview.core.runtime.process import CommandOptions, run_command
from swiftreview.parsers.base import ParseContext
from swiftreview.parsers.swiftlint import parse_swiftlint

SWIFTLINT_NAME: Final[str] = "swiftlint"
_STDERR_PREVIEW_CHARS: Final[int] = 200


@dataclass(slots=True)
class SwiftLintRun:
    """Outcome of a single SwiftLint invocation."""

    issues: list[Issue] = field(default_factory=list)
    exit_code: int = 0
    output_size: int = 0
    duration: float = 0.0


def _working_directory(target: Path) -> Path:
    return target if target.is_dir() else target.parent


def effective_config_file(config: SwiftLintConfig, *, use_emoji: bool) -> Path | None:
    """Return the configured ``.swiftlint.yml`` when it exists, warning otherwise.

    The returned path is absolute; SwiftLint runs from the target's directory.
    """

    if config.config_file is None:
        return None
    config_file = config.config_file.expanduser().resolve()
    if config_file.exists():
        return config_file
    warn(
        f"SwiftLint configuration not found: {config_file}; continuing without it",
        use_emoji=use_emoji,
    )
    return None


def build_lint_command(binary: Path, target: Path, config_file: Path | None) -> list[str]:
    """Return the SwiftLint command requesting a JSON report."""

    command = [str(binary), "lint", "--reporter", "json"]
    if config_file is not None:
        command.extend(["--config", str(config_file)])
    if not target.is_dir():
        command.append(str(target))
    return command


def build_fix_command(binary: Path, target: Path, config_file: Path | None) -> list[str]:
    """Return the SwiftLint autocorrect command."""

    command = [str(binary), "--fix"]
    if config_file is not None:
        command.extend(["--config", str(config_file)])
    if not target.is_dir():
        command.append(str(target))
    return command


def _apply_fixes(binary: Path, target: Path, config_file: Path | None, *, use_emoji: bool) -> None:
    info("Applying automatic fixes...", use_emoji=use_emoji)
    options = CommandOptions(cwd=_working_directory(target))
    try:
        result = run_command(build_fix_command(binary, target, config_file), options=options)
    except LaunchError as exc:
        warn(f"Automatic fixes skipped: {exc}", use_emoji=use_emoji)
        return
    if result.ok:
        ok("Fixes applied", use_emoji=use_emoji)
    else:
        warn(f"SwiftLint --fix exited with status {result.exit_code}", use_emoji=use_emoji)


def run_swiftlint(
    binary: Path,
    target: Path,
    config: SwiftLintConfig,
    output: OutputConfig,
) -> SwiftLintRun:
    """Run SwiftLint against ``target`` and return the parsed issues.

    SwiftLint exits non-zero whenever it reports violations, so the exit code
    alone is not treated as a failure. Only stdout carries the JSON report;
    stderr holds informational messages.

    Raises:
        LaunchError: If SwiftLint cannot be started.
    """

    use_emoji = output.emoji
    target = target.expanduser().resolve()
    config_file = effective_config_file(config, use_emoji=use_emoji)
    if config.fix:
        _apply_fixes(binary, target, config_file, use_emoji=use_emoji)

    info("SwiftLint is analysing the code (large projects may take a while)...", use_emoji=use_emoji)
    started = time.perf_counter()
    result = run_command(
        build_lint_command(binary, target, config_file),
        options=CommandOptions(cwd=_working_directory(target)),
    )
    duration = time.perf_counter() - started
    ok(f"SwiftLint finished in {duration:.1f}s", use_emoji=use_emoji)

    if result.stderr and output.verbose:
        info(f"SwiftLint stderr: {result.stderr[:_STDERR_PREVIEW_CHARS]}...", use_emoji=use_emoji)
    if not result.stdout.strip():
        warn("SwiftLint produced no output", use_emoji=use_emoji)
        return SwiftLintRun(exit_code=result.exit_code, duration=duration)

    context = ParseContext(verbose=output.verbose, use_emoji=use_emoji)
    issues = list(parse_swiftlint(result.stdout, context=context))
    info(f"Issues found: {len(issues)}", use_emoji=use_emoji)
    return SwiftLintRun(
        issues=issues,
        exit_code=result.exit_code,
        output_size=len(result.stdout.encode("utf-8")),
        duration=duration,
    )


__all__ = [
    "SWIFTLINT_NAME",
    "SwiftLintRun",
    "build_fix_command",
    "build_lint_command",
    "effective_config_file",
    "run_swiftlint",
]
