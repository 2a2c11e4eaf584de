# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run orchestration and outcome resolution."""

from __future__ import annotations

from .orchestrator import Orchestrator, OrchestratorHooks
from .outcome import FailureClassifier, RunOutcome, TerminalResult, resolve_outcome
from .report import PassSummary, RunReport

__all__ = [
    "FailureClassifier",
    "Orchestrator",
    "OrchestratorHooks",
    "PassSummary",
    "RunOutcome",
    "RunReport",
    "TerminalResult",
    "resolve_outcome",
]
