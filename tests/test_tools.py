# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the SwiftLint and Periphery integrations."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

import pytest

from swiftreview.core.config import OutputConfig, PeripheryConfig, SwiftLintConfig
from swiftreview.core.errors import ConfigError, LaunchError, ToolExecutionError
from swiftreview.core.runtime.process import CommandOptions, CommandResult
from swiftreview.core.severity import Severity
from swiftreview.tools import locator
from swiftreview.tools.locator import resolve_executable, tool_version
from swiftreview.tools.periphery import (
    build_scan_command,
    choose_scheme,
    ensure_project_path,
    list_schemes,
    parse_scheme_listing,
    run_periphery,
)
from swiftreview.tools.swiftlint import build_lint_command, effective_config_file, run_swiftlint

QUIET = OutputConfig(emoji=False, color=False)

XCODEBUILD_LIST = """Information about project "App":
    Targets:
        App
        AppTests

    Build Configurations:
        Debug
        Release

    Schemes:
        App
        AppTests
"""


class RecordingRunner:
    """Stand-in for ``run_command`` returning canned results."""

    def __init__(self, *results: CommandResult) -> None:
        self._results = list(results)
        self.calls: list[tuple[list[str], CommandOptions | None]] = []

    def __call__(self, args: Sequence[str], *, options: CommandOptions | None = None) -> CommandResult:
        self.calls.append((list(args), options))
        return self._results.pop(0)


def _result(stdout: str = "", stderr: str = "", exit_code: int = 0) -> CommandResult:
    return CommandResult(args=("tool",), stdout=stdout, stderr=stderr, exit_code=exit_code)


def test_resolve_executable_prefers_explicit_path(fake_binary) -> None:
    binary = fake_binary("swiftlint")

    assert resolve_executable("swiftlint", binary) == binary.resolve()


def test_resolve_executable_rejects_missing_explicit_path(tmp_path: Path) -> None:
    with pytest.raises(LaunchError):
        resolve_executable("swiftlint", tmp_path / "nope")


def test_resolve_executable_rejects_non_executable(tmp_path: Path) -> None:
    target = tmp_path / "swiftlint"
    target.write_text("", encoding="utf-8")
    target.chmod(0o644)

    with pytest.raises(LaunchError) as excinfo:
        resolve_executable("swiftlint", target)

    assert "chmod +x" in excinfo.value.reason


def test_resolve_executable_uses_bundled_bin(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    bundled = tmp_path / "bin" / "periphery"
    bundled.parent.mkdir()
    bundled.write_text("#!/bin/sh\n", encoding="utf-8")
    bundled.chmod(0o755)
    monkeypatch.setattr(locator.shutil, "which", lambda name: None)

    assert resolve_executable("periphery", cwd=tmp_path) == bundled.resolve()


def test_resolve_executable_missing_everywhere(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(locator.shutil, "which", lambda name: None)

    with pytest.raises(LaunchError):
        resolve_executable("periphery", cwd=tmp_path)


def test_tool_version_returns_none_on_failure(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(locator, "run_command", RecordingRunner(_result(exit_code=1)))

    assert tool_version(tmp_path / "swiftlint") is None


def test_tool_version_strips_output(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(locator, "run_command", RecordingRunner(_result(stdout="0.57.0\n")))

    assert tool_version(tmp_path / "swiftlint") == "0.57.0"


def test_build_lint_command_for_directory_and_file(tmp_path: Path) -> None:
    source = tmp_path / "A.swift"
    source.write_text("", encoding="utf-8")
    binary = Path("/opt/swiftlint")

    assert build_lint_command(binary, tmp_path, None) == ["/opt/swiftlint", "lint", "--reporter", "json"]
    assert build_lint_command(binary, source, tmp_path / ".swiftlint.yml") == [
        "/opt/swiftlint",
        "lint",
        "--reporter",
        "json",
        "--config",
        str(tmp_path / ".swiftlint.yml"),
        str(source),
    ]


def test_effective_config_file_ignores_missing_file(tmp_path: Path) -> None:
    config = SwiftLintConfig(config_file=tmp_path / "missing.yml")

    assert effective_config_file(config, use_emoji=False) is None


def test_run_swiftlint_parses_stdout(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    report = json.dumps(
        [{"file": "A.swift", "line": 2, "character": 1, "severity": "Error", "rule_id": "force_cast", "reason": "no"}]
    )
    runner = RecordingRunner(_result(stdout=report, stderr="Linting Swift files", exit_code=2))
    monkeypatch.setattr("swiftreview.tools.swiftlint.run_command", runner)

    run = run_swiftlint(Path("/opt/swiftlint"), tmp_path, SwiftLintConfig(), QUIET)

    assert [issue.rule for issue in run.issues] == ["force_cast"]
    assert run.issues[0].severity is Severity.ERROR
    assert run.exit_code == 2
    ((args, options),) = runner.calls
    assert args[:4] == ["/opt/swiftlint", "lint", "--reporter", "json"]
    assert options is not None and options.cwd == tmp_path


def test_run_swiftlint_applies_fixes_first(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    runner = RecordingRunner(_result(), _result(stdout="[]"))
    monkeypatch.setattr("swiftreview.tools.swiftlint.run_command", runner)

    run = run_swiftlint(Path("/opt/swiftlint"), tmp_path, SwiftLintConfig(fix=True), QUIET)

    assert run.issues == []
    assert [call[0][1] for call in runner.calls] == ["--fix", "lint"]


def test_run_swiftlint_empty_output(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr("swiftreview.tools.swiftlint.run_command", RecordingRunner(_result(stdout="  ")))

    run = run_swiftlint(Path("/opt/swiftlint"), tmp_path, SwiftLintConfig(), QUIET)

    assert run.issues == []
    assert run.output_size == 0


def test_run_swiftlint_resolves_relative_paths(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    sources = tmp_path / "Sources"
    sources.mkdir()
    (sources / "A.swift").write_text("let a = 1\n", encoding="utf-8")
    (tmp_path / ".swiftlint.yml").write_text("disabled_rules: []\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    runner = RecordingRunner(_result(), _result(stdout="[]"))
    monkeypatch.setattr("swiftreview.tools.swiftlint.run_command", runner)
    config = SwiftLintConfig(config_file=Path(".swiftlint.yml"), fix=True)

    run_swiftlint(Path("/opt/swiftlint"), Path("Sources/A.swift"), config, QUIET)

    expected_config = str((tmp_path / ".swiftlint.yml").resolve())
    expected_target = str((sources / "A.swift").resolve())
    for args, options in runner.calls:
        assert args[-3:] == ["--config", expected_config, expected_target]
        assert options is not None and options.cwd == sources.resolve()
        # Every path argument must be reachable from the child's working directory.
        for argument in args[-3:]:
            if argument != "--config":
                assert (options.cwd / argument).exists()


def test_parse_scheme_listing() -> None:
    assert parse_scheme_listing(XCODEBUILD_LIST) == ["App", "AppTests"]
    assert parse_scheme_listing("no schemes here") == []


def test_list_schemes_uses_workspace_flag(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    runner = RecordingRunner(_result(stdout=XCODEBUILD_LIST))
    monkeypatch.setattr("swiftreview.tools.periphery.run_command", runner)
    project = tmp_path / "App.xcworkspace"

    assert list_schemes(project) == ["App", "AppTests"]
    ((args, options),) = runner.calls
    assert args == ["xcodebuild", "-workspace", str(project), "-list"]
    assert options is not None and options.cwd == tmp_path


def test_list_schemes_without_xcodebuild(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    def _missing(args: Sequence[str], *, options: CommandOptions | None = None) -> CommandResult:
        raise LaunchError(args, "not found")

    monkeypatch.setattr("swiftreview.tools.periphery.run_command", _missing)

    assert list_schemes(tmp_path / "App.xcodeproj") == []


def test_choose_scheme_prefers_project_name() -> None:
    project = Path("/work/App.xcodeproj")

    assert choose_scheme(project, ["AppTests", "app"]) == "app"
    assert choose_scheme(project, ["Other", "Another"]) == "Other"
    assert choose_scheme(project, ["Solo"]) == "Solo"
    assert choose_scheme(project, []) is None


def test_ensure_project_path_rejects_plain_directories(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        ensure_project_path(tmp_path)
    assert ensure_project_path(tmp_path / "App.xcodeproj") == tmp_path / "App.xcodeproj"


def test_build_scan_command_with_targets() -> None:
    command = build_scan_command(Path("/opt/periphery"), Path("/w/App.xcodeproj"), "App", "Core,UI")

    assert command == [
        "/opt/periphery",
        "scan",
        "--format",
        "json",
        "--quiet",
        "--project",
        "/w/App.xcodeproj",
        "--schemes",
        "App",
        "--targets",
        "Core,UI",
    ]


def test_run_periphery_parses_results(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    report = json.dumps([{"kind": "enum", "name": "Mode", "location": f"{tmp_path}/Mode.swift:4:6"}])
    monkeypatch.setattr("swiftreview.tools.periphery.run_command", RecordingRunner(_result(stdout=report)))

    issues = run_periphery(Path("/opt/periphery"), tmp_path / "App.xcodeproj", "App", PeripheryConfig(), QUIET)

    assert [(issue.rule, issue.line, issue.column) for issue in issues] == [("unused_enum", 4, 6)]


def test_run_periphery_no_findings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr("swiftreview.tools.periphery.run_command", RecordingRunner(_result(stdout="[]\n")))

    assert run_periphery(Path("/opt/periphery"), tmp_path / "App.xcodeproj", "App", PeripheryConfig(), QUIET) == []


def test_run_periphery_failure_without_report(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    runner = RecordingRunner(_result(stderr="error: build failed", exit_code=1))
    monkeypatch.setattr("swiftreview.tools.periphery.run_command", runner)

    with pytest.raises(ToolExecutionError) as excinfo:
        run_periphery(Path("/opt/periphery"), tmp_path / "App.xcodeproj", "App", PeripheryConfig(), QUIET)

    assert excinfo.value.exit_code == 1
    assert "build failed" in str(excinfo.value)
