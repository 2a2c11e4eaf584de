# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for metalint runs."""

from __future__ import annotations

from .models import (
    Config,
    DiffConfig,
    ExcludeRule,
    ExclusionConfig,
    ExecutionConfig,
    FailurePolicy,
    LoadConfig,
    OutputConfig,
    SelectionConfig,
    SeverityConfig,
    default_parallel_jobs,
)

__all__ = [
    "Config",
    "DiffConfig",
    "ExcludeRule",
    "ExclusionConfig",
    "ExecutionConfig",
    "FailurePolicy",
    "LoadConfig",
    "OutputConfig",
    "SelectionConfig",
    "SeverityConfig",
    "default_parallel_jobs",
]
