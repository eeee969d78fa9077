# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the analysis and tool integration layers."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class ReviewToolError(Exception):
    """Base class for errors raised by swiftreview."""


class ConfigError(ReviewToolError):
    """Raised when configuration input is invalid."""


class SourcePathError(ReviewToolError):
    """Raised when an input path handed to discovery does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Path does not exist: {path}")
        self.path = path


class LaunchError(ReviewToolError):
    """Raised when an external executable cannot be resolved or spawned."""

    def __init__(self, command: Sequence[str], reason: str) -> None:
        """Initialise the error with the offending command.

        Args:
            command: Command sequence that failed to launch.
            reason: Human readable explanation of the failure.
        """
        head = command[0] if command else "<empty>"
        super().__init__(f"Unable to launch '{head}': {reason}")
        self.command = tuple(command)
        self.reason = reason


class ToolExecutionError(ReviewToolError):
    """Raised when an external tool exits with a failure and produced no report."""

    def __init__(self, tool: str, exit_code: int, stderr: str) -> None:
        super().__init__(f"{tool} exited with status {exit_code}. stderr: {stderr.strip() or '<none>'}")
        self.tool = tool
        self.exit_code = exit_code
        self.stderr = stderr


class UnreadableSourceError(ReviewToolError):
    """Raised when a source file cannot be read or decoded."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Unable to read {path}: {reason}")
        self.path = path
        self.reason = reason


class MalformedOutputError(ReviewToolError):
    """Raised when structured tool output cannot be decoded, even after repair."""


class UnlocatableFindingError(ReviewToolError):
    """Raised when a tool record carries a location string of the wrong shape."""

    def __init__(self, location: str) -> None:
        super().__init__(f"Unable to parse location: {location!r}")
        self.location = location


__all__ = [
    "ConfigError",
    "LaunchError",
    "MalformedOutputError",
    "ReviewToolError",
    "SourcePathError",
    "ToolExecutionError",
    "UnlocatableFindingError",
    "UnreadableSourceError",
]
