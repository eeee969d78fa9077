# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rule catalogue for memory-lifecycle findings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from swiftreview.core.models import Issue
from swiftreview.core.severity import Severity


@dataclass(frozen=True, slots=True)
class MemoryRule:
    """Identifier, severity, and wording shared by every finding of one kind."""

    rule_id: str
    label: str
    severity: Severity
    message: str

    def issue(self, file: str, line: int | None) -> Issue:
        """Return an :class:`Issue` for this rule at ``file:line``."""

        return Issue(
            file=file,
            line=line,
            column=None,
            severity=self.severity,
            rule=self.rule_id,
            message=self.message,
        )


POTENTIAL_RETAIN_CYCLE: Final[MemoryRule] = MemoryRule(
    rule_id="potential_retain_cycle",
    label="Potential retain cycles",
    severity=Severity.WARNING,
    message="Potential retain cycle: escaping closure uses self without [weak self]",
)
WEAK_SELF_USAGE: Final[MemoryRule] = MemoryRule(
    rule_id="weak_self_usage",
    label="Weak self usage",
    severity=Severity.INFO,
    message="[weak self] is captured but self is not unwrapped. Use guard let self = self or self?",
)
DELEGATE_NOT_WEAK: Final[MemoryRule] = MemoryRule(
    rule_id="delegate_not_weak",
    label="Delegate without weak",
    severity=Severity.WARNING,
    message="Delegate property should be weak to avoid a retain cycle",
)
STORED_CLOSURE_RETAIN_CYCLE: Final[MemoryRule] = MemoryRule(
    rule_id="stored_closure_retain_cycle",
    label="Stored closures with retain cycle",
    severity=Severity.WARNING,
    message="Stored closure uses self without a capture list. Add [weak self] or [unowned self]",
)
LIFETIME_TRACKER_NOT_FOUND: Final[MemoryRule] = MemoryRule(
    rule_id="lifetime_tracker_not_found",
    label="LifetimeTracker not found",
    severity=Severity.INFO,
    message="LifetimeTracker not found in the project. Add it for runtime leak analysis",
)

MEMORY_RULES: Final[tuple[MemoryRule, ...]] = (
    POTENTIAL_RETAIN_CYCLE,
    WEAK_SELF_USAGE,
    DELEGATE_NOT_WEAK,
    STORED_CLOSURE_RETAIN_CYCLE,
    LIFETIME_TRACKER_NOT_FOUND,
)
_LABELS: Final[dict[str, str]] = {rule.rule_id: rule.label for rule in MEMORY_RULES}


def rule_label(rule_id: str) -> str:
    """Return the display label for ``rule_id``, falling back to the id."""

    return _LABELS.get(rule_id, rule_id)


__all__ = [
    "DELEGATE_NOT_WEAK",
    "LIFETIME_TRACKER_NOT_FOUND",
    "MEMORY_RULES",
    "MemoryRule",
    "POTENTIAL_RETAIN_CYCLE",
    "STORED_CLOSURE_RETAIN_CYCLE",
    "WEAK_SELF_USAGE",
    "rule_label",
]
