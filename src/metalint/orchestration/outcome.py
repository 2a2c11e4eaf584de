# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Map run-level signals to a single terminal result."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Final

from pydantic import BaseModel, ConfigDict, Field

from ..config.models import ExecutionConfig, FailurePolicy


class TerminalResult(str, Enum):
    """Single outcome of a run, each with a stable exit code."""

    SUCCESS = "success"
    ISSUES_FOUND = "issues-found"
    FAILURE = "failure"
    DEADLINE_EXCEEDED = "deadline-exceeded"
    NO_SOURCE_FOUND = "no-source-found"

    @property
    def exit_code(self) -> int:
        """Return the process exit code for this result."""

        return _EXIT_CODES[self]


_EXIT_CODES: Final[MappingProxyType[TerminalResult, int]] = MappingProxyType(
    {
        TerminalResult.SUCCESS: 0,
        TerminalResult.ISSUES_FOUND: 1,
        TerminalResult.FAILURE: 3,
        TerminalResult.DEADLINE_EXCEEDED: 4,
        TerminalResult.NO_SOURCE_FOUND: 5,
    },
)


class RunOutcome(BaseModel):
    """Run-level signals together with the resolved terminal result."""

    model_config = ConfigDict(frozen=True)

    issue_count: int = Field(default=0, ge=0)
    pass_failed: bool = False
    fatal_failure: bool = False
    deadline_exceeded: bool = False
    no_source_found: bool = False
    result: TerminalResult = TerminalResult.SUCCESS

    @property
    def exit_code(self) -> int:
        """Return the exit code of :attr:`result`."""

        return self.result.exit_code


@dataclass(frozen=True, slots=True)
class FailureClassifier:
    """Decide whether a failed pass makes the run fail."""

    policy: FailurePolicy = FailurePolicy.TOLERATE
    fatal_passes: frozenset[str] = frozenset()
    tolerated_passes: frozenset[str] = frozenset()

    @classmethod
    def from_config(cls, config: ExecutionConfig) -> FailureClassifier:
        """Build a classifier from execution settings."""

        return cls(
            policy=config.failure_policy,
            fatal_passes=frozenset(config.fatal_passes),
            tolerated_passes=frozenset(config.tolerated_passes),
        )

    def is_fatal(self, pass_id: str) -> bool:
        """Return ``True`` when a failure of ``pass_id`` fails the run."""

        if pass_id in self.fatal_passes:
            return True
        return self.policy is FailurePolicy.FATAL and pass_id not in self.tolerated_passes

    def any_fatal(self, failed: Iterable[str]) -> bool:
        """Return ``True`` when any of the ``failed`` pass identifiers is fatal."""

        return any(self.is_fatal(pass_id) for pass_id in failed)


def resolve_outcome(
    *,
    issue_count: int = 0,
    pass_failed: bool = False,
    fatal_failure: bool = False,
    deadline_exceeded: bool = False,
    no_source_found: bool = False,
) -> RunOutcome:
    """Return the outcome for the supplied signals.

    Precedence is fixed: no source found, then deadline exceeded, then a
    fatal internal failure, then issues found, then success.

    Args:
        issue_count: Number of issues in the final report.
        pass_failed: Whether any pass raised.
        fatal_failure: Whether a failure is fatal under the run's policy.
        deadline_exceeded: Whether the global deadline fired.
        no_source_found: Whether the roots contained no code units.

    Returns:
        RunOutcome: Signals plus the single terminal result.
    """

    if no_source_found:
        result = TerminalResult.NO_SOURCE_FOUND
    elif deadline_exceeded:
        result = TerminalResult.DEADLINE_EXCEEDED
    elif fatal_failure:
        result = TerminalResult.FAILURE
    elif issue_count > 0:
        result = TerminalResult.ISSUES_FOUND
    else:
        result = TerminalResult.SUCCESS
    return RunOutcome(
        issue_count=issue_count,
        pass_failed=pass_failed,
        fatal_failure=fatal_failure,
        deadline_exceeded=deadline_exceeded,
        no_source_found=no_source_found,
        result=result,
    )


__all__ = ["FailureClassifier", "RunOutcome", "TerminalResult", "resolve_outcome"]
