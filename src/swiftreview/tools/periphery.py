# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Periphery integration: scheme detection, scan invocation, and report ingestion."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Final

from swiftreview.core.config import OutputConfig, PeripheryConfig
from swiftreview.core.errors import ConfigError, LaunchError, ToolExecutionError
from swiftreview.core.logging import info
from swiftreview.core.models import Issue
from swiftreview.core.runtime.process import CommandOptions, run_command
from swiftreview.parsers.base import ParseContext
from swiftreview.parsers.periphery import parse_periphery

LOGGER = logging.getLogger(__name__)

PERIPHERY_NAME: Final[str] = "periphery"
XCODEBUILD_NAME: Final[str] = "xcodebuild"
XCODEPROJ_SUFFIX: Final[str] = ".xcodeproj"
XCWORKSPACE_SUFFIX: Final[str] = ".xcworkspace"
PROJECT_SUFFIXES: Final[tuple[str, ...]] = (XCODEPROJ_SUFFIX, XCWORKSPACE_SUFFIX)
SCHEMES_HEADER: Final[str] = "Schemes:"
_OUTPUT_PREVIEW_CHARS: Final[int] = 1000


def ensure_project_path(path: Path) -> Path:
    """Return ``path`` when it names an Xcode project or workspace.

    Raises:
        ConfigError: If ``path`` has another suffix.
    """

    if path.suffix not in PROJECT_SUFFIXES:
        raise ConfigError(f"Periphery requires a .xcodeproj or .xcworkspace path, got: {path}")
    return path


def parse_scheme_listing(stdout: str) -> list[str]:
    """Return the scheme names listed by ``xcodebuild -list``."""

    schemes: list[str] = []
    in_schemes = False
    for raw_line in stdout.splitlines():
        line = raw_line.strip()
        if line == SCHEMES_HEADER:
            in_schemes = True
            continue
        if not in_schemes:
            continue
        if not line or ":" in line:
            break
        schemes.append(line)
    return schemes


def list_schemes(project: Path) -> list[str]:
    """Return the schemes of ``project`` or ``[]`` when ``xcodebuild`` fails."""

    flag = "-workspace" if project.suffix == XCWORKSPACE_SUFFIX else "-project"
    try:
        result = run_command(
            [XCODEBUILD_NAME, flag, str(project), "-list"],
            options=CommandOptions(cwd=project.parent),
        )
    except LaunchError as exc:
        LOGGER.debug("scheme listing unavailable: %s", exc)
        return []
    if not result.ok:
        return []
    return parse_scheme_listing(result.stdout)


def choose_scheme(project: Path, schemes: Sequence[str]) -> str | None:
    """Pick the scheme matching the project name, else the first one."""

    if not schemes:
        return None
    if len(schemes) == 1:
        return schemes[0]
    project_name = project.stem.lower()
    for scheme in schemes:
        if scheme.lower() == project_name:
            return scheme
    return schemes[0]


def build_scan_command(binary: Path, project: Path, scheme: str, targets: str | None) -> list[str]:
    """Return the Periphery command requesting a JSON report."""

    command = [
        str(binary),
        "scan",
        "--format",
        "json",
        "--quiet",
        "--project",
        str(project),
        "--schemes",
        scheme,
    ]
    if targets:
        command.extend(["--targets", targets])
    return command


def run_periphery(
    binary: Path,
    project: Path,
    scheme: str,
    config: PeripheryConfig,
    output: OutputConfig,
) -> list[Issue]:
    """Run a Periphery scan of ``project`` and return the unused-code issues.

    Raises:
        LaunchError: If Periphery cannot be started.
        ToolExecutionError: If Periphery fails without printing a report.
    """

    use_emoji = output.emoji
    command = build_scan_command(binary, project, scheme, config.targets)
    if output.verbose:
        info(f"Periphery command: {' '.join(command)}", use_emoji=use_emoji)
        info(f"Working directory: {project.parent}", use_emoji=use_emoji)

    result = run_command(command, options=CommandOptions(cwd=project.parent))
    if not result.ok and not result.stdout:
        raise ToolExecutionError(PERIPHERY_NAME, result.exit_code, result.stderr)

    if output.verbose:
        info(f"Output size: {len(result.stdout)} characters", use_emoji=use_emoji)
        info(result.stdout[:_OUTPUT_PREVIEW_CHARS], use_emoji=use_emoji)

    if result.stdout.strip() in {"", "[]"}:
        info(
            f"Periphery found no unused code (scheme '{scheme}'; check that every file belongs to a target)",
            use_emoji=use_emoji,
        )
        return []

    context = ParseContext(verbose=output.verbose, use_emoji=use_emoji)
    return list(parse_periphery(result.stdout, context=context))


__all__ = [
    "PERIPHERY_NAME",
    "PROJECT_SUFFIXES",
    "build_scan_command",
    "choose_scheme",
    "ensure_project_path",
    "list_schemes",
    "parse_scheme_listing",
    "run_periphery",
]
