# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Filesystem discovery of Swift sources."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Final

from swiftreview.core.config import SWIFT_SUFFIX
from swiftreview.core.errors import SourcePathError

LOGGER = logging.getLogger(__name__)

HIDDEN_PREFIX: Final[str] = "."

# Directory suffixes that the platform presents as opaque packages.
PACKAGE_SUFFIXES: Final[frozenset[str]] = frozenset(
    {
        ".app",
        ".appex",
        ".bundle",
        ".docc",
        ".framework",
        ".photoslibrary",
        ".playground",
        ".swiftpm",
        ".xcassets",
        ".xcframework",
        ".xcodeproj",
        ".xcworkspace",
    }
)


def is_hidden(name: str) -> bool:
    """Return ``True`` for dot-prefixed entry names."""

    return name.startswith(HIDDEN_PREFIX)


def is_package_directory(path: Path) -> bool:
    """Return ``True`` when ``path`` names a package bundle directory."""

    return path.suffix.lower() in PACKAGE_SUFFIXES


def _walk(base: Path, suffix: str) -> Iterator[Path]:
    """Yield files below ``base`` in sorted order, pruning hidden and package entries."""

    for dirpath, dirnames, filenames in os.walk(base, topdown=True, followlinks=False):
        dir_path = Path(dirpath)
        dirnames[:] = sorted(
            name for name in dirnames if not is_hidden(name) and not is_package_directory(dir_path / name)
        )
        for filename in sorted(filenames):
            if is_hidden(filename) or not filename.endswith(suffix):
                continue
            yield dir_path / filename


def find_swift_files(path: Path, *, suffix: str = SWIFT_SUFFIX) -> list[Path]:
    """Return the source files reachable from ``path``.

    A file path is returned as-is when it carries ``suffix``. Directories are
    walked recursively in sorted order.

    Args:
        path: File or directory to scan.
        suffix: File name suffix selecting source files.

    Returns:
        list[Path]: Discovered files in walk order.

    Raises:
        SourcePathError: If ``path`` does not exist.
    """

    if not path.exists():
        raise SourcePathError(path)
    if not path.is_dir():
        if path.name.endswith(suffix):
            return [path]
        LOGGER.debug("%s is not a %s file", path, suffix)
        return []
    files = list(_walk(path, suffix))
    LOGGER.debug("discovered %d %s file(s) under %s", len(files), suffix, path)
    return files


__all__ = ["PACKAGE_SUFFIXES", "find_swift_files", "is_hidden", "is_package_directory"]
