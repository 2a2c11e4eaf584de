# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for concurrent pass execution, cancellation and deadlines."""

from __future__ import annotations

import sys
import threading
import time
from pathlib import Path

import pytest

from metalint.core.models import RawFinding
from metalint.errors import PassCancelled
from metalint.execution import CancellationToken, FindingSink, PassRunner, PassStatus
from metalint.loader import LoadMode, SemanticModel
from metalint.passes import PassDescriptor


@pytest.fixture
def model(tmp_path: Path) -> SemanticModel:
    return SemanticModel(roots=(".",), root_paths=(tmp_path,), base_dir=tmp_path, units=(), mode=LoadMode.SYNTAX)


def _descriptor(identifier: str, run) -> PassDescriptor:
    return PassDescriptor(identifier, identifier.title(), run)


def test_failing_pass_is_isolated(model: SemanticModel) -> None:
    def _boom(context):
        raise RuntimeError("kaboom")

    def _fine(context):
        context.report("a.py", 1, 1, "found something")

    result = PassRunner().run(
        [_descriptor("boom", _boom), _descriptor("fine", _fine)],
        model,
        jobs=2,
        deadline_s=None,
        grace_s=0,
    )

    boom, fine = result.reports
    assert boom.status is PassStatus.FAILED
    assert boom.error is not None
    assert boom.error.kind == "RuntimeError"
    assert "kaboom" in str(boom.error)
    assert fine.status is PassStatus.SUCCEEDED
    assert [finding.message for finding in fine.findings] == ["found something"]
    assert result.all_failed is False
    assert [report.pass_id for report in result.failed] == ["boom"]


def test_system_exit_in_pass_fails_only_that_pass(model: SemanticModel) -> None:
    def _exits(context):
        sys.exit(2)

    def _fine(context):
        context.report("a.py", 1, 1, "still runs")

    started = time.monotonic()
    result = PassRunner().run(
        [_descriptor("exits", _exits), _descriptor("fine", _fine)],
        model,
        jobs=1,
        deadline_s=5.0,
        grace_s=0,
    )
    elapsed = time.monotonic() - started

    exits, fine = result.reports
    assert result.deadline_exceeded is False
    assert elapsed < 5.0
    assert exits.status is PassStatus.FAILED
    assert exits.error is not None
    assert exits.error.kind == "SystemExit"
    assert fine.status is PassStatus.SUCCEEDED
    assert [finding.message for finding in fine.findings] == ["still runs"]


def test_returned_findings_are_collected(model: SemanticModel) -> None:
    def _returns(context):
        return [RawFinding(file="a.py", line=2, message="returned")]

    result = PassRunner().run([_descriptor("ret", _returns)], model, jobs=1, deadline_s=None, grace_s=0)

    assert result.finding_count() == 1
    assert result.reports[0].findings[0].message == "returned"


def test_reports_follow_plan_order(model: SemanticModel) -> None:
    def _slow(context):
        time.sleep(0.2)
        context.report("a.py", 1, None, "slow")

    def _quick(context):
        context.report("a.py", 1, None, "quick")

    result = PassRunner().run(
        [_descriptor("slow", _slow), _descriptor("quick", _quick)],
        model,
        jobs=2,
        deadline_s=None,
        grace_s=0,
    )

    assert [report.pass_id for report in result.reports] == ["slow", "quick"]


def test_all_failed_signal(model: SemanticModel) -> None:
    def _boom(context):
        raise ValueError("nope")

    passes = [_descriptor("one", _boom), _descriptor("two", _boom)]
    result = PassRunner().run(passes, model, jobs=2, deadline_s=None, grace_s=0)

    assert result.all_failed is True


def test_cooperative_pass_cancelled_at_deadline(model: SemanticModel) -> None:
    def _loop(context):
        context.report("a.py", 1, None, "before deadline")
        while True:
            context.checkpoint()
            context.token.wait(0.01)

    started = time.monotonic()
    result = PassRunner().run([_descriptor("loop", _loop)], model, jobs=1, deadline_s=0.2, grace_s=2)
    elapsed = time.monotonic() - started

    report = result.reports[0]
    assert result.deadline_exceeded is True
    assert report.status is PassStatus.CANCELLED
    assert [finding.message for finding in report.findings] == ["before deadline"]
    assert elapsed < 2


def test_non_cooperative_pass_abandoned_after_grace(model: SemanticModel) -> None:
    def _sleeper(context):
        context.report("a.py", 1, None, "partial")
        time.sleep(10)

    started = time.monotonic()
    result = PassRunner().run([_descriptor("sleeper", _sleeper)], model, jobs=1, deadline_s=0.1, grace_s=0.1)
    elapsed = time.monotonic() - started

    report = result.reports[0]
    assert report.status is PassStatus.ABANDONED
    assert [finding.message for finding in report.findings] == ["partial"]
    assert result.deadline_exceeded is True
    assert elapsed < 2


def test_pending_passes_skipped_after_deadline(model: SemanticModel) -> None:
    def _sleeper(context):
        time.sleep(10)

    def _never(context):
        context.report("a.py", 1, None, "should not run")

    result = PassRunner().run(
        [_descriptor("sleeper", _sleeper), _descriptor("never", _never)],
        model,
        jobs=1,
        deadline_s=0.1,
        grace_s=0.05,
    )

    assert result.reports[1].status is PassStatus.SKIPPED
    assert result.reports[1].findings == ()


def test_emits_after_abandonment_do_not_change_report(model: SemanticModel) -> None:
    release = threading.Event()
    finished = threading.Event()

    def _straggler(context):
        context.report("a.py", 1, None, "early")
        release.wait(5)
        context.report("a.py", 2, None, "late")
        finished.set()

    result = PassRunner().run([_descriptor("straggler", _straggler)], model, jobs=1, deadline_s=0.1, grace_s=0.05)
    release.set()
    finished.wait(5)

    report = result.reports[0]
    assert report.status is PassStatus.ABANDONED
    assert [finding.message for finding in report.findings] == ["early"]


def test_settings_reach_the_pass(model: SemanticModel) -> None:
    seen: dict[str, object] = {}

    def _configured(context):
        seen["limit"] = context.setting("limit", 10)
        seen["strict"] = context.setting("strict", False)

    PassRunner().run(
        [_descriptor("configured", _configured)],
        model,
        jobs=1,
        deadline_s=None,
        grace_s=0,
        settings={"configured": {"limit": "42", "strict": "yes"}},
    )

    assert seen == {"limit": 42, "strict": True}


def test_empty_plan_returns_no_reports(model: SemanticModel) -> None:
    result = PassRunner().run([], model, jobs=4, deadline_s=1, grace_s=0)

    assert result.reports == ()
    assert result.deadline_exceeded is False


def test_sink_rejects_emits_after_seal() -> None:
    sink = FindingSink("demo")
    assert sink.emit(RawFinding(file="a.py", message="kept")) is True

    snapshot = sink.seal()

    assert sink.emit(RawFinding(file="a.py", message="dropped")) is False
    assert [finding.message for finding in snapshot] == ["kept"]
    assert sink.late_emits == 1
    assert len(sink) == 1


def test_cancellation_token_keeps_first_reason() -> None:
    token = CancellationToken()
    token.cancel("deadline exceeded")
    token.cancel("other")

    assert token.cancelled
    assert token.reason == "deadline exceeded"
    with pytest.raises(PassCancelled, match="deadline exceeded"):
        token.raise_if_cancelled()
