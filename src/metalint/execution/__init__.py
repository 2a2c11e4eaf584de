# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Pass scheduling and execution."""

from __future__ import annotations

from .cancellation import CancellationToken
from .context import PassContext
from .runner import PassError, PassReport, PassRunner, PassStatus, RunnerResult
from .sink import FindingSink

__all__ = [
    "CancellationToken",
    "FindingSink",
    "PassContext",
    "PassError",
    "PassReport",
    "PassRunner",
    "PassStatus",
    "RunnerResult",
]
