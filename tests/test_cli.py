# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Smoke tests for the metalint command line interface."""

from __future__ import annotations

import json
import time
from pathlib import Path

import pytest
from typer.testing import CliRunner

from metalint.cli.app import app
from metalint.cli.options import parse_duration, split_csv
from metalint.orchestration import orchestrator as orchestrator_module
from metalint.passes import PassDescriptor, PassRegistry

_BUGGY = "import os\n\n\ndef handler():\n    try:\n        return 1\n    except:\n        print('x')\n"

runner = CliRunner()


@pytest.fixture
def in_project(project: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(project)
    return project


def _write(project: Path, name: str, text: str) -> None:
    target = project / name
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(text, encoding="utf-8")


def test_clean_project_exits_zero(in_project: Path) -> None:
    _write(in_project, "clean.py", '"""Clean."""\n\nVALUE = 1\n')

    result = runner.invoke(app, ["run", "--no-emoji", "./..."])

    assert result.exit_code == 0, result.output
    assert result.output.strip() == ""


def test_issues_exit_one_and_are_listed(in_project: Path) -> None:
    _write(in_project, "app/core.py", _BUGGY)

    result = runner.invoke(app, ["run", "--no-emoji", "--no-color", "./..."])

    assert result.exit_code == 1, result.output
    assert "app/core.py:7:5: bare `except:` clause; catch a specific exception (bare-except)" in result.output
    assert "app/core.py:1:1: `os` imported but unused (unused-import)" in result.output


def test_verbose_prints_active_presets(in_project: Path) -> None:
    _write(in_project, "clean.py", '"""Clean."""\n')

    result = runner.invoke(app, ["run", "-v", "--no-emoji", "-p", "style", "-p", "bugs,style", "./..."])

    assert "Active presets: [bugs style]" in result.output


def test_json_output(in_project: Path) -> None:
    _write(in_project, "app/core.py", _BUGGY)

    result = runner.invoke(app, ["run", "--out-format", "json", "--sort-results", "-E", "print-call", "./..."])

    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert payload["outcome"]["result"] == "issues-found"
    assert [issue["pass_id"] for issue in payload["issues"]] == [
        "unused-import",
        "bare-except",
        "print-call",
    ]
    assert "abs_path" not in payload["issues"][0]


def test_no_source_exit_code(in_project: Path) -> None:
    (in_project / "empty").mkdir()

    result = runner.invoke(app, ["run", "--no-emoji", "empty/..."])

    assert result.exit_code == 5
    assert "no Python files to analyze" in result.output


def test_missing_root_is_failure(in_project: Path) -> None:
    result = runner.invoke(app, ["run", "--no-emoji", "nowhere/..."])

    assert result.exit_code == 3
    assert "cannot find package" in result.output


def test_unknown_pass_is_configuration_error(in_project: Path) -> None:
    _write(in_project, "a.py", "x = 1\n")

    result = runner.invoke(app, ["run", "--no-emoji", "-E", "nope", "./..."])

    assert result.exit_code == 3
    assert "unknown pass" in result.output


def test_enable_all_with_disable_all_rejected(in_project: Path) -> None:
    _write(in_project, "a.py", "x = 1\n")

    result = runner.invoke(app, ["run", "--no-emoji", "--enable-all", "--disable-all", "./..."])

    assert result.exit_code == 3
    assert "must not be combined" in result.output


def test_invalid_duration_is_usage_error(in_project: Path) -> None:
    result = runner.invoke(app, ["run", "--deadline", "soon", "./..."])

    assert result.exit_code == 2


def test_deadline_exit_code(in_project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write(in_project, "a.py", "x = 1\n")

    def _stuck(context) -> None:
        time.sleep(10)

    registry = PassRegistry([PassDescriptor("stuck", "Stuck", _stuck, default_enabled=True)])
    monkeypatch.setattr(orchestrator_module, "default_registry", lambda: registry)

    result = runner.invoke(app, ["run", "--no-emoji", "--deadline", "100ms", "--grace", "50ms", "./..."])

    assert result.exit_code == 4
    assert "Timeout exceeded" in result.output


def test_json_output_stays_parseable_when_a_pass_fails(in_project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write(in_project, "a.py", "x = 1\n")

    def _broken(context) -> None:
        raise RuntimeError("kaboom")

    def _reporting(context) -> None:
        context.report("a.py", 1, 1, "found something")

    registry = PassRegistry(
        [
            PassDescriptor("broken", "Broken", _broken, default_enabled=True),
            PassDescriptor("reporting", "Reporting", _reporting, default_enabled=True),
        ]
    )
    monkeypatch.setattr(orchestrator_module, "default_registry", lambda: registry)

    result = runner.invoke(app, ["run", "--out-format", "json", "./..."])

    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    statuses = {summary["pass_id"]: summary["status"] for summary in payload["passes"]}
    assert statuses == {"broken": "failed", "reporting": "succeeded"}
    assert [issue["message"] for issue in payload["issues"]] == ["found something"]


def test_fix_flag_rewrites_files(in_project: Path) -> None:
    _write(in_project, "a.py", '"""Doc."""  \n')

    result = runner.invoke(app, ["run", "--no-emoji", "--disable-all", "-E", "trailing-whitespace", "--fix", "./..."])

    assert result.exit_code == 0, result.output
    assert (in_project / "a.py").read_text(encoding="utf-8") == '"""Doc."""\n'


def test_passes_command_lists_builtins() -> None:
    result = runner.invoke(app, ["passes", "--no-color"])

    assert result.exit_code == 0
    assert "typecheck" in result.output
    assert "misspell" in result.output


def test_passes_command_lists_presets() -> None:
    result = runner.invoke(app, ["passes", "--presets", "--no-color"])

    assert result.exit_code == 0
    assert "bugs" in result.output
    assert "comment" in result.output


@pytest.mark.parametrize(
    ("text", "seconds"),
    [("30", 30.0), ("1m30s", 90.0), ("250ms", 0.25), ("2h", 7200.0), ("0", None), ("0s", None)],
)
def test_parse_duration(text: str, seconds: float | None) -> None:
    assert parse_duration(text) == seconds


def test_split_csv_flattens_values() -> None:
    assert split_csv(["a,b", " c ", ""]) == ["a", "b", "c"]
    assert split_csv(None) == []
