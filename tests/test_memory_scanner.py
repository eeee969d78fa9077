# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the heuristic memory-lifecycle scanner."""

from __future__ import annotations

from pathlib import Path
from textwrap import dedent

from swiftreview.core.config import ScannerConfig
from swiftreview.core.severity import Severity
from swiftreview.memory import MemoryScanner, check_lifetime_tracker, rule_label
from swiftreview.memory.scanner import (
    detect_escaping_closures,
    detect_stored_closures,
    detect_strong_delegates,
    detect_unguarded_weak_self,
)

CONFIG = ScannerConfig()


def _lines(text: str) -> list[str]:
    return dedent(text).strip("\n").splitlines()


def test_escaping_closure_using_self_is_flagged() -> None:
    lines = [
        "    @escaping",
        "    doSomething(completion: {",
        "        self.value = 1",
        "    })",
    ]

    issues = detect_escaping_closures(lines, "A.swift", CONFIG)

    assert [(issue.rule, issue.line) for issue in issues] == [("potential_retain_cycle", 2)]
    assert issues[0].severity is Severity.WARNING
    assert detect_escaping_closures(lines[1:], "A.swift", CONFIG) == []


def test_escaping_annotation_on_previous_line_is_flagged() -> None:
    lines = _lines(
        """
        let handler: @escaping () -> Void =
            { doSomething()
                self.value = 1
            }
        """
    )

    issues = detect_escaping_closures(lines, "A.swift", CONFIG)

    assert [issue.line for issue in issues] == [2]


def test_non_escaping_closure_is_not_flagged() -> None:
    lines = _lines(
        """
        items.forEach {
            self.total += $0
        }
        """
    )

    assert detect_escaping_closures(lines, "A.swift", CONFIG) == []


def test_weak_capture_suppresses_retain_cycle_warning() -> None:
    lines = _lines(
        """
        fetch(completion: @escaping { [weak self] in
            self?.reload()
        })
        """
    )

    assert detect_escaping_closures(lines, "A.swift", CONFIG) == []


def test_self_beyond_lookahead_window_is_ignored() -> None:
    lines = ["run(work: @escaping {", *["    step()"] * 9, "    self.finish()", "})"]

    assert detect_escaping_closures(lines, "A.swift", CONFIG) == []
    widened = ScannerConfig(closure_lookahead=10)
    assert [issue.line for issue in detect_escaping_closures(lines, "A.swift", widened)] == [1]


def test_lookahead_clamps_at_end_of_file() -> None:
    assert detect_escaping_closures(["run(@escaping {"], "A.swift", CONFIG) == []


def test_unguarded_weak_self_reported_on_next_line() -> None:
    lines = _lines(
        """
        load { [weak self] result in
            self.apply(result)
        }
        """
    )

    issues = detect_unguarded_weak_self(lines, "A.swift", CONFIG)

    assert [(issue.rule, issue.line, issue.severity) for issue in issues] == [
        ("weak_self_usage", 2, Severity.INFO),
    ]


def test_guarded_or_optional_weak_self_is_accepted() -> None:
    lines = _lines(
        """
        load { [weak self] result in
            guard let self = self else { return }
        }
        load { [weak self] result in
            self?.apply(result)
        }
        load { [weak self] in }
        """
    )

    assert detect_unguarded_weak_self(lines, "A.swift", CONFIG) == []


def test_strong_delegate_is_flagged() -> None:
    issues = detect_strong_delegates(["    var delegate: SomeDelegate?"], "A.swift", CONFIG)

    assert [(issue.rule, issue.line, issue.severity) for issue in issues] == [
        ("delegate_not_weak", 1, Severity.WARNING),
    ]


def test_weak_or_unowned_delegate_is_accepted() -> None:
    lines = ["    weak var delegate: SomeDelegate?", "    unowned var dataDelegate: Source", "let delegate = x"]

    assert detect_strong_delegates(lines, "A.swift", CONFIG) == []


def test_stored_closure_capturing_self_is_flagged() -> None:
    lines = _lines(
        """
        var onTap: () -> Void = {
            if true {
                self.handle()
            }
        }
        """
    )

    issues = detect_stored_closures(lines, "A.swift", CONFIG)

    assert [(issue.rule, issue.line) for issue in issues] == [("stored_closure_retain_cycle", 1)]


def test_stored_closure_with_capture_list_is_accepted() -> None:
    lines = _lines(
        """
        var onTap: () -> Void = { [weak self] in
            self?.handle()
        }
        """
    )

    assert detect_stored_closures(lines, "A.swift", CONFIG) == []


def test_stored_closure_scan_stops_when_braces_balance() -> None:
    lines = _lines(
        """
        var onTap: () -> Void = {
            print("tap")
        }
        func other() { self.work() }
        """
    )

    assert detect_stored_closures(lines, "A.swift", CONFIG) == []


def test_stored_closure_scan_respects_limit() -> None:
    lines = ["var onTap: () -> Void = {", *["    step()"] * 4, "    self.handle()", "}"]

    assert detect_stored_closures(lines, "A.swift", ScannerConfig(stored_closure_scan_limit=5)) == []
    assert len(detect_stored_closures(lines, "A.swift", CONFIG)) == 1


def test_scan_text_concatenates_detectors_in_order() -> None:
    text = dedent(
        """
        class Controller {
            var delegate: ControllerDelegate?
            var onTap: () -> Void = {
                self.handle()
            }
            func load(completion: @escaping () -> Void) {
                fetch { [weak self] in
                    self.apply()
                }
            }
        }
        """
    ).lstrip("\n")

    issues = MemoryScanner().scan_text(text, "Controller.swift")

    assert [(issue.rule, issue.line) for issue in issues] == [
        ("potential_retain_cycle", 6),
        ("weak_self_usage", 8),
        ("delegate_not_weak", 2),
        ("stored_closure_retain_cycle", 3),
    ]
    assert all(issue.file == "Controller.swift" for issue in issues)


def test_scan_is_idempotent() -> None:
    text = "var delegate: D?\nvar cb: () -> Void = {\n  self.x()\n}\n"
    scanner = MemoryScanner()

    assert scanner.scan_text(text, "A.swift") == scanner.scan_text(text, "A.swift")


def test_scan_paths_skips_unreadable_files(tmp_path: Path, write_swift) -> None:
    good = write_swift("Good.swift", "var delegate: D?\n")
    bad = tmp_path / "Bad.swift"
    bad.write_bytes(b"\xff\xfe\x00invalid")
    missing = tmp_path / "Missing.swift"

    report = MemoryScanner(use_emoji=False).scan_paths([bad, good, missing])

    assert report.files_scanned == 1
    assert [issue.file for issue in report.issues] == [str(good)]
    assert [error.path for error in report.skipped] == [bad, missing]


def test_check_lifetime_tracker_reports_missing_import(tmp_path: Path, write_swift) -> None:
    source = write_swift("App.swift", "import UIKit\n")

    (issue,) = check_lifetime_tracker([source], tmp_path)

    assert issue.rule == "lifetime_tracker_not_found"
    assert issue.line is None
    assert issue.file == str(tmp_path)


def test_check_lifetime_tracker_accepts_import(tmp_path: Path, write_swift) -> None:
    source = write_swift("App.swift", "import LifetimeTracker\n")

    assert check_lifetime_tracker([source], tmp_path) == []


def test_rule_label_falls_back_to_identifier() -> None:
    assert rule_label("delegate_not_weak") == "Delegate without weak"
    assert rule_label("custom") == "custom"
