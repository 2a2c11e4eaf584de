# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Report payload returned by the orchestrator."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..core.models import Issue
from ..execution.runner import PassReport, PassStatus
from .outcome import RunOutcome, TerminalResult


class PassSummary(BaseModel):
    """Serializable summary of one pass report."""

    model_config = ConfigDict(frozen=True)

    pass_id: str
    status: PassStatus
    findings: int = 0
    elapsed_s: float = 0.0
    error: str | None = None
    fatal: bool = False

    @classmethod
    def from_report(cls, report: PassReport, *, fatal: bool = False) -> PassSummary:
        """Return the summary of ``report``."""

        return cls(
            pass_id=report.pass_id,
            status=report.status,
            findings=len(report.findings),
            elapsed_s=round(report.elapsed_s, 6),
            error=str(report.error) if report.error is not None else None,
            fatal=fatal,
        )


class RunReport(BaseModel):
    """Ordered issues, outcome and per-pass details of one run."""

    model_config = ConfigDict(frozen=True)

    issues: tuple[Issue, ...] = ()
    outcome: RunOutcome = Field(default_factory=RunOutcome)
    passes: tuple[PassSummary, ...] = ()
    presets: tuple[str, ...] = ()
    plan: tuple[str, ...] = ()
    load_error: str | None = None
    load_errors: tuple[str, ...] = ()
    fixed: int = 0
    elapsed_s: float = 0.0

    @property
    def result(self) -> TerminalResult:
        """Return the terminal result of the run."""

        return self.outcome.result

    @property
    def exit_code(self) -> int:
        """Return the process exit code of the run."""

        return self.outcome.exit_code


__all__ = ["PassSummary", "RunReport"]
