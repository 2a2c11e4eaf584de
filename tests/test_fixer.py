# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for applying auto-fix replacements."""

from __future__ import annotations

from pathlib import Path

from metalint.core.models import InlineFix, Issue, Replacement
from metalint.core.severity import Severity
from metalint.diagnostics import IssueFixer
from metalint.passes import PassDescriptor, PassRegistry, default_registry


def _issue(path: Path, pass_id: str, line: int, replacement: Replacement, message: str = "msg") -> Issue:
    return Issue(
        pass_id=pass_id,
        file=path.name,
        line=line,
        severity=Severity.WARNING,
        message=message,
        replacement=replacement,
        abs_path=path,
    )


def _inline(start: int, length: int, text: str = "") -> Replacement:
    return Replacement(inline=InlineFix(start_col=start, length=length, new_text=text))


def test_inline_fixes_are_applied_bottom_up(tmp_path: Path) -> None:
    target = tmp_path / "mod.py"
    target.write_text("# wich langauge  \nx = 1\r\n", encoding="utf-8")
    issues = [
        _issue(target, "misspell", 1, _inline(2, 4, "which"), "a"),
        _issue(target, "misspell", 1, _inline(7, 8, "language"), "b"),
        _issue(target, "trailing-whitespace", 1, _inline(15, 2), "c"),
    ]

    result = IssueFixer(default_registry()).apply(issues)

    assert target.read_bytes() == b"# which language\nx = 1\r\n"
    assert len(result.fixed) == 3
    assert result.remaining == ()
    assert result.files_changed == (target,)


def test_overlapping_fix_keeps_first(tmp_path: Path) -> None:
    target = tmp_path / "mod.py"
    target.write_text("# wich\n", encoding="utf-8")
    first = _issue(target, "misspell", 1, _inline(2, 4, "which"), "first")
    second = _issue(target, "trailing-whitespace", 1, _inline(3, 3, "X"), "second")

    result = IssueFixer(default_registry()).apply([first, second])

    assert target.read_text(encoding="utf-8") == "# which\n"
    assert result.fixed == (first,)
    assert result.remaining == (second,)


def test_passes_without_autofix_are_untouched(tmp_path: Path) -> None:
    target = tmp_path / "mod.py"
    target.write_text("print(1)\n", encoding="utf-8")
    issue = _issue(target, "print-call", 1, Replacement(delete_line=True))

    result = IssueFixer(default_registry()).apply([issue])

    assert target.read_text(encoding="utf-8") == "print(1)\n"
    assert result.remaining == (issue,)


def test_line_replacements(tmp_path: Path) -> None:
    registry = PassRegistry([PassDescriptor("rewrite", "Rewrite", lambda context: None, supports_autofix=True)])
    target = tmp_path / "mod.py"
    target.write_text("a\nb\nc\n", encoding="utf-8")

    IssueFixer(registry).apply(
        [
            _issue(target, "rewrite", 1, Replacement(delete_line=True), "drop"),
            _issue(target, "rewrite", 3, Replacement(new_lines=("c1", "c2")), "split"),
        ],
    )

    assert target.read_text(encoding="utf-8") == "b\nc1\nc2\n"


def test_missing_file_is_reported_not_raised(tmp_path: Path) -> None:
    issue = _issue(tmp_path / "gone.py", "misspell", 1, _inline(0, 1, "x"))

    result = IssueFixer(default_registry()).apply([issue])

    assert result.fixed == ()
    assert result.remaining == (issue,)
