# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for duplicate merging, reporting limits and issue ordering."""

from __future__ import annotations

from metalint.core.models import Issue
from metalint.core.severity import Severity
from metalint.diagnostics import apply_limits, deduplicate, sort_issues


def _issue(pass_id: str, file: str, line: int, message: str, order: tuple[int, int], column: int = 0) -> Issue:
    return Issue(
        pass_id=pass_id,
        file=file,
        line=line,
        column=column,
        severity=Severity.WARNING,
        message=message,
        order=order,
    )


def test_duplicates_keep_first_and_merge_provenance() -> None:
    issues = [
        _issue("second", "a.py", 3, "same", (1, 0)),
        _issue("first", "a.py", 3, "same", (0, 0)),
        _issue("third", "a.py", 3, "same", (2, 0)),
        _issue("first", "a.py", 4, "same", (0, 1)),
    ]

    merged = deduplicate(issues)

    assert len(merged) == 2
    assert merged[0].pass_id == "first"
    assert merged[0].also_reported_by == ("second", "third")
    assert merged[0].provenance == frozenset({"first", "second", "third"})
    assert merged[1].line == 4


def test_different_messages_are_not_duplicates() -> None:
    merged = deduplicate([_issue("a", "a.py", 1, "x", (0, 0)), _issue("b", "a.py", 1, "y", (1, 0))])

    assert len(merged) == 2


def test_max_issues_per_pass() -> None:
    issues = [_issue("a", "a.py", line, f"m{line}", (0, line)) for line in range(1, 6)]
    issues.append(_issue("b", "a.py", 1, "other", (1, 0)))

    kept = apply_limits(issues, max_issues_per_pass=2)

    assert [(issue.pass_id, issue.line) for issue in kept] == [("a", 1), ("a", 2), ("b", 1)]


def test_max_same_issues() -> None:
    issues = [_issue("a", "a.py", line, "repeated", (0, line)) for line in range(1, 5)]
    issues.append(_issue("a", "a.py", 9, "unique", (0, 9)))

    kept = apply_limits(issues, max_same_issues=3)

    assert [issue.line for issue in kept] == [1, 2, 3, 9]


def test_zero_limits_are_unlimited() -> None:
    issues = [_issue("a", "a.py", line, "repeated", (0, line)) for line in range(1, 30)]

    assert len(apply_limits(issues)) == 29


def test_grouped_order_follows_plan() -> None:
    issues = [
        _issue("late", "a.py", 1, "x", (1, 0)),
        _issue("early", "b.py", 9, "y", (0, 1)),
        _issue("early", "z.py", 1, "z", (0, 0)),
    ]

    ordered = sort_issues(issues, positional=False)

    assert [issue.order for issue in ordered] == [(0, 0), (0, 1), (1, 0)]


def test_positional_order_breaks_ties_by_plan() -> None:
    issues = [
        _issue("p2", "b.py", 1, "x", (1, 0)),
        _issue("p1", "a.py", 2, "y", (0, 0)),
        _issue("p2", "a.py", 2, "z", (1, 1), column=4),
        _issue("p1", "a.py", 2, "w", (0, 1), column=4),
    ]

    ordered = sort_issues(issues, positional=True)

    assert [issue.message for issue in ordered] == ["y", "w", "z", "x"]
