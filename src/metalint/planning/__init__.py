# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Execution planning."""

from __future__ import annotations

from .plan import ExecutionPlan, PassDecision
from .resolver import PlanResolver, build_plan

__all__ = ["ExecutionPlan", "PassDecision", "PlanResolver", "build_plan"]
