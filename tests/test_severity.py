# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for severity normalisation."""

from __future__ import annotations

import pytest

from swiftreview.core.severity import Severity, map_severity, severity_icon


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("error", Severity.ERROR),
        ("Error", Severity.ERROR),
        (" warning ", Severity.WARNING),
        ("info", Severity.INFO),
        ("note", Severity.INFO),
        ("fatal", Severity.ERROR),
    ],
)
def test_map_severity_known_labels(label: str, expected: Severity) -> None:
    assert map_severity(label) is expected


@pytest.mark.parametrize("label", ["style", "", None, 3])
def test_map_severity_defaults_to_warning(label: object) -> None:
    assert map_severity(label) is Severity.WARNING


def test_map_severity_custom_default() -> None:
    assert map_severity("unknown", {}, Severity.INFO) is Severity.INFO


def test_every_severity_has_an_icon() -> None:
    assert {severity_icon(level) for level in Severity} == {"❌", "⚠️", "ℹ️"}
