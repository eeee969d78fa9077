# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Locate external analyzer binaries (explicit path, bundled ``bin/``, ``PATH``)."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Final

from swiftreview.core.errors import LaunchError
from swiftreview.core.runtime.process import run_command

BUNDLED_BIN_DIR: Final[str] = "bin"
VERSION_SUBCOMMAND: Final[str] = "version"


def is_executable(path: Path) -> bool:
    """Return ``True`` when ``path`` is a regular file the user may execute."""

    return path.is_file() and os.access(path, os.X_OK)


def bundled_candidates(name: str, cwd: Path) -> tuple[Path, ...]:
    """Return the bundled locations checked for ``name`` before ``PATH``."""

    return (cwd / BUNDLED_BIN_DIR / name,)


def resolve_executable(name: str, explicit: Path | None = None, *, cwd: Path | None = None) -> Path:
    """Return an absolute path to the ``name`` executable.

    An explicit path must exist and be executable. Otherwise a bundled copy
    under ``<cwd>/bin`` wins over one found on ``PATH``.

    Args:
        name: Executable name, e.g. ``swiftlint``.
        explicit: Path supplied by the user, if any.
        cwd: Directory searched for a bundled ``bin/`` folder.

    Returns:
        Path: Absolute path to the executable.

    Raises:
        LaunchError: If the executable cannot be found or is not executable.
    """

    if explicit is not None:
        candidate = explicit.expanduser().resolve()
        if not candidate.exists():
            raise LaunchError((str(candidate),), f"{name} not found at the given path")
        if not is_executable(candidate):
            raise LaunchError((str(candidate),), f"file is not executable (try: chmod +x {candidate})")
        return candidate

    for candidate in bundled_candidates(name, (cwd or Path.cwd()).resolve()):
        if is_executable(candidate):
            return candidate

    resolved = shutil.which(name)
    if resolved is None:
        raise LaunchError((name,), f"{name} is not installed (bundled bin/{name} or PATH)")
    return Path(resolved)


def tool_version(binary: Path) -> str | None:
    """Return the ``<binary> version`` output, or ``None`` when it fails."""

    try:
        result = run_command([str(binary), VERSION_SUBCOMMAND])
    except LaunchError:
        return None
    if not result.ok:
        return None
    return result.stdout.strip() or None


__all__ = ["bundled_candidates", "is_executable", "resolve_executable", "tool_version"]
