# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for configuration and value models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from metalint.config import Config, ExclusionConfig, ExecutionConfig, SelectionConfig, default_parallel_jobs
from metalint.core.models import InlineFix, Issue, RawFinding, Replacement
from metalint.core.severity import Severity


def test_selection_identifiers_are_lowercased() -> None:
    selection = SelectionConfig(enable=[" Print-Call "], disable=["MISSPELL"], presets=["Style"])

    assert selection.enable == ["print-call"]
    assert selection.disable == ["misspell"]
    assert selection.presets == ["style"]
    assert selection.explicit is True
    assert SelectionConfig(disable=["x"]).explicit is False


def test_execution_defaults() -> None:
    execution = ExecutionConfig()

    assert execution.deadline_s == 60
    assert execution.grace_s == 2
    assert execution.jobs == default_parallel_jobs() >= 1


def test_execution_rejects_non_positive_deadline() -> None:
    with pytest.raises(ValidationError):
        ExecutionConfig(deadline_s=0)
    assert ExecutionConfig(deadline_s=None).deadline_s is None


def test_invalid_regex_rejected() -> None:
    with pytest.raises(ValidationError, match="invalid regular expression"):
        ExclusionConfig(skip_dirs=["("])


def test_config_defaults_root_and_settings_keys() -> None:
    config = Config(roots=[], pass_settings={"Line-Length": {"max_length": 100}})

    assert config.roots == ["."]
    assert config.pass_settings == {"line-length": {"max_length": 100}}


def test_replacement_requires_exactly_one_edit() -> None:
    with pytest.raises(ValidationError):
        Replacement()
    with pytest.raises(ValidationError):
        Replacement(delete_line=True, new_lines=("x",))
    assert Replacement(inline=InlineFix(start_col=0, length=1)).inline is not None


def test_issue_rejects_line_zero() -> None:
    with pytest.raises(ValidationError):
        Issue(pass_id="a", file="a.py", line=0, severity=Severity.NOTE, message="m")


def test_issue_provenance_helpers() -> None:
    issue = Issue(pass_id="a", file="a.py", line=1, severity=Severity.NOTE, message="m")

    merged = issue.with_provenance(["b", "a", "b"])

    assert merged.also_reported_by == ("b",)
    assert merged.location_key == ("a.py", 1, "m")
    assert issue.with_provenance(["a"]) is issue


def test_raw_finding_accepts_paths(tmp_path) -> None:
    finding = RawFinding(file=tmp_path / "a.py", message="m")

    assert finding.file == str(tmp_path / "a.py")
