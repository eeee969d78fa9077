# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import stat
from collections.abc import Callable
from pathlib import Path

import pytest

from swiftreview.core.models import Issue
from swiftreview.core.severity import Severity


@pytest.fixture
def make_issue() -> Callable[..., Issue]:
    """Return a factory building issues with sensible defaults."""

    def _factory(
        severity: Severity = Severity.WARNING,
        *,
        file: str = "Sources/App/View.swift",
        line: int | None = 1,
        column: int | None = None,
        rule: str = "demo_rule",
        message: str = "demo message",
    ) -> Issue:
        return Issue(file=file, line=line, column=column, severity=severity, rule=rule, message=message)

    return _factory


@pytest.fixture
def write_swift(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper writing Swift sources below ``tmp_path``."""

    def _write(relative: str, text: str) -> Path:
        target = tmp_path / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
        return target

    return _write


@pytest.fixture
def fake_binary(tmp_path: Path) -> Callable[[str], Path]:
    """Return a helper creating an executable placeholder file."""

    def _create(name: str) -> Path:
        target = tmp_path / "tools" / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
        target.chmod(target.stat().st_mode | stat.S_IXUSR)
        return target

    return _create
