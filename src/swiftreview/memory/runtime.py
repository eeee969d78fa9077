# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Detection of runtime lifetime-tracking instrumentation in Swift sources.

Runtime leak analysis is a manual workflow: the app is built with
LifetimeTracker and inspected by a developer. This module only checks that
the instrumentation is imported somewhere in the project.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Final

from swiftreview.core.errors import UnreadableSourceError
from swiftreview.core.models import Issue

from .rules import LIFETIME_TRACKER_NOT_FOUND
from .scanner import read_source

LIFETIME_TRACKER_IMPORT: Final[str] = "import LifetimeTracker"

RUNTIME_SETUP_STEPS: Final[tuple[str, ...]] = (
    "Add LifetimeTracker to the project: pod 'LifetimeTracker'",
    "Initialise it in AppDelegate inside #if DEBUG: LifetimeTracker.setup()",
    "Call trackLifetime() in the classes you want to monitor",
    "Run the app and watch the LifetimeTracker dashboard",
)


def uses_lifetime_tracker(files: Sequence[Path]) -> bool:
    """Return ``True`` when any readable file imports LifetimeTracker."""

    for path in files:
        try:
            text = read_source(path)
        except UnreadableSourceError:
            continue
        if LIFETIME_TRACKER_IMPORT in text:
            return True
    return False


def check_lifetime_tracker(files: Sequence[Path], project: Path) -> list[Issue]:
    """Return a project-level finding when no file imports LifetimeTracker."""

    if uses_lifetime_tracker(files):
        return []
    return [LIFETIME_TRACKER_NOT_FOUND.issue(str(project), None)]


__all__ = [
    "LIFETIME_TRACKER_IMPORT",
    "RUNTIME_SETUP_STEPS",
    "check_lifetime_tracker",
    "uses_lifetime_tracker",
]
