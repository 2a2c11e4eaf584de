# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for raw finding normalisation."""

from __future__ import annotations

from pathlib import Path

from metalint.config import LoadConfig
from metalint.core.models import InlineFix, RawFinding, Replacement
from metalint.core.severity import Severity, build_severity_rules
from metalint.diagnostics import FindingNormalizer
from metalint.execution import PassReport, PassStatus
from metalint.loader import SemanticModel, SemanticModelLoader
from metalint.passes import PassDescriptor


def _noop(context):
    return None


def _model(project: Path) -> SemanticModel:
    return SemanticModelLoader(LoadConfig(base_dir=project)).load(["..."])


def test_paths_are_relative_and_prefixed(write_tree) -> None:
    project = write_tree({"pkg/mod.py": "x = 1\n"})
    descriptor = PassDescriptor("demo", "Demo", _noop)
    finding = RawFinding(file=project / "pkg" / "mod.py", line=1, column=3, message="msg")

    plain = FindingNormalizer(model=_model(project)).normalize(finding, descriptor)
    prefixed = FindingNormalizer(model=_model(project), path_prefix="repo").normalize(finding, descriptor)

    assert plain.file == "pkg/mod.py"
    assert prefixed.file == "repo/pkg/mod.py"
    assert plain.abs_path == project / "pkg" / "mod.py"
    assert (plain.line, plain.column) == (1, 3)


def test_relative_finding_path_resolves_against_base(write_tree) -> None:
    project = write_tree({"mod.py": "x = 1\n"})
    issue = FindingNormalizer(model=_model(project)).normalize(
        RawFinding(file="mod.py", line=1, message="msg"),
        PassDescriptor("demo", "Demo", _noop),
    )

    assert issue.abs_path == project / "mod.py"
    assert issue.file == "mod.py"


def test_missing_position_defaults_to_first_line(write_tree) -> None:
    project = write_tree({"mod.py": "x = 1\n"})

    issue = FindingNormalizer(model=_model(project)).normalize(
        RawFinding(file="mod.py", message="whole file"),
        PassDescriptor("demo", "Demo", _noop),
    )

    assert (issue.line, issue.column) == (1, 0)


def test_severity_defaults_and_rules(write_tree) -> None:
    project = write_tree({"mod.py": "x = 1\n"})
    model = _model(project)
    plain = PassDescriptor("demo", "Demo", _noop)
    strict = PassDescriptor("strict", "Strict", _noop, default_severity=Severity.ERROR)
    normalizer = FindingNormalizer(
        model=model,
        default_severity=Severity.NOTE,
        severity_rules=build_severity_rules(["demo:^loud=error"]),
    )

    assert normalizer.normalize(RawFinding(file="mod.py", message="quiet"), plain).severity is Severity.NOTE
    assert normalizer.normalize(RawFinding(file="mod.py", message="loud noise"), plain).severity is Severity.ERROR
    assert normalizer.normalize(RawFinding(file="mod.py", message="quiet"), strict).severity is Severity.ERROR
    loose = RawFinding(file="mod.py", message="quiet", severity="WARNING")
    assert normalizer.normalize(loose, plain).severity is Severity.WARNING
    unknown = RawFinding(file="mod.py", message="quiet", severity="catastrophic")
    assert normalizer.normalize(unknown, plain).severity is Severity.NOTE


def test_directive_remaps_position_and_drops_fix(write_tree) -> None:
    project = write_tree({"gen.py": "#line templates/page.tpl:10:3\nvalue = 1 \n"})
    replacement = Replacement(inline=InlineFix(start_col=9, length=1))

    issue = FindingNormalizer(model=_model(project)).normalize(
        RawFinding(file="gen.py", line=2, column=10, message="trailing whitespace", replacement=replacement),
        PassDescriptor("demo", "Demo", _noop),
    )

    assert issue.file == "templates/page.tpl"
    assert (issue.line, issue.column) == (10, 12)
    assert issue.replacement is None


def test_reports_assign_plan_order(write_tree) -> None:
    project = write_tree({"mod.py": "x = 1\n"})
    first = PassDescriptor("first", "First", _noop)
    second = PassDescriptor("second", "Second", _noop)
    reports = [
        PassReport(first, PassStatus.SUCCEEDED, (RawFinding(file="mod.py", line=1, message="a"),)),
        PassReport(
            second,
            PassStatus.SUCCEEDED,
            (RawFinding(file="mod.py", line=1, message="b"), RawFinding(file="mod.py", line=1, message="c")),
        ),
    ]

    issues = FindingNormalizer(model=_model(project)).normalize_reports(reports)

    assert [issue.order for issue in issues] == [(0, 0), (1, 0), (1, 1)]
