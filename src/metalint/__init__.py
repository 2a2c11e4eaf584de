# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Meta-linter that runs many analysis passes over one shared semantic model."""

from __future__ import annotations

from .config import Config
from .core.models import Issue, RawFinding, Replacement
from .core.severity import Severity
from .errors import ConfigurationError, LoadFailure, MetalintError, NoSourceFound
from .orchestration import Orchestrator, RunOutcome, RunReport, TerminalResult

__all__ = [
    "Config",
    "ConfigurationError",
    "Issue",
    "LoadFailure",
    "MetalintError",
    "NoSourceFound",
    "Orchestrator",
    "RawFinding",
    "Replacement",
    "RunOutcome",
    "RunReport",
    "Severity",
    "TerminalResult",
]
