# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import logging
import shutil

# Bandit: subprocess usage is intentional; we provide a controlled wrapper around
# external tool execution, normalising arguments and disabling ``shell=True``.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from ..errors import LaunchError

LOGGER = logging.getLogger(__name__)

TIMEOUT_EXIT_CODE: Final[int] = 124
_OUTPUT_ENCODING: Final[str] = "utf-8"


@dataclass(frozen=True, slots=True)
class CommandOptions:
    """Immutable command execution options.

    ``timeout`` defaults to ``None`` which blocks until the child exits.
    """

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    timeout: float | None = None
    discard_stdin: bool = True


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Exit status and fully drained output streams of a finished command."""

    args: tuple[str, ...]
    stdout: str
    stderr: str
    exit_code: int

    @property
    def output(self) -> str:
        """Return stdout followed by stderr."""
        return self.stdout + self.stderr

    @property
    def ok(self) -> bool:
        """Return ``True`` when the command exited with status ``0``."""
        return self.exit_code == 0


def _ensure_text(value: str | bytes | None) -> str:
    """Return ``value`` decoded to text when supplied as ``bytes``."""

    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return value.decode(_OUTPUT_ENCODING, errors="replace")


def _normalize_args(args: Sequence[str]) -> list[str]:
    """Normalise the subprocess argument sequence.

    Args:
        args: Raw command arguments supplied by the caller.

    Returns:
        list[str]: Argument list whose head is an absolute executable path.

    Raises:
        LaunchError: If no arguments are provided or the executable cannot be
            found on ``PATH``.
    """

    if not args:
        raise LaunchError((), "subprocess command requires at least one argument")

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        raise LaunchError(args, f"executable '{head}' was not found on PATH")
    return [resolved, *rest]


def run_command(args: Sequence[str], *, options: CommandOptions | None = None) -> CommandResult:
    """Execute ``args`` and return its exit status with both output streams.

    Both pipes are drained concurrently by :meth:`subprocess.Popen.communicate`
    while the child runs, so a child that fills one pipe while the other is
    idle never blocks. The call returns only after the child has exited and
    both streams have been read to the end.

    Args:
        args: Command and argument sequence to execute.
        options: Working directory, environment, and timeout settings.

    Returns:
        CommandResult: Exit status plus decoded stdout and stderr.

    Raises:
        LaunchError: If the executable cannot be resolved or spawned.
    """

    normalized = _normalize_args(args)
    resolved_options = options or CommandOptions()
    LOGGER.debug("running %s (cwd=%s)", normalized, resolved_options.cwd)

    try:
        # Bandit: commands originate from tool integrations; we pass argument
        # lists directly without shell expansion.
        process = subprocess.Popen(  # nosec B603 - controlled arguments, not user supplied
            normalized,
            cwd=str(resolved_options.cwd) if resolved_options.cwd is not None else None,
            env=dict(resolved_options.env) if resolved_options.env is not None else None,
            stdin=subprocess.DEVNULL if resolved_options.discard_stdin else None,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except OSError as exc:
        raise LaunchError(normalized, exc.strerror or str(exc)) from exc

    with process:
        try:
            stdout, stderr = process.communicate(timeout=resolved_options.timeout)
        except subprocess.TimeoutExpired:
            process.kill()
            stdout, stderr = process.communicate()
            timeout_msg = f"Command timed out after {resolved_options.timeout:.1f}s"
            stderr_text = _ensure_text(stderr)
            return CommandResult(
                args=tuple(normalized),
                stdout=_ensure_text(stdout),
                stderr=f"{stderr_text}\n{timeout_msg}" if stderr_text else timeout_msg,
                exit_code=TIMEOUT_EXIT_CODE,
            )

    return CommandResult(
        args=tuple(normalized),
        stdout=_ensure_text(stdout),
        stderr=_ensure_text(stderr),
        exit_code=process.returncode,
    )


__all__ = [
    "CommandOptions",
    "CommandResult",
    "TIMEOUT_EXIT_CODE",
    "run_command",
]
