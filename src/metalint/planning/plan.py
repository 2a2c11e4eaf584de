# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolved execution plan."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from ..loader.model import LoadMode
from ..passes.descriptor import PassDescriptor

type DecisionAction = Literal["run", "skip"]


@dataclass(frozen=True, slots=True)
class PassDecision:
    """Why a registered pass was included in or left out of the plan."""

    identifier: str
    action: DecisionAction
    reasons: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ExecutionPlan:
    """Ordered passes to run plus the options the runner needs."""

    passes: tuple[PassDescriptor, ...]
    presets: tuple[str, ...] = ()
    fast: bool = False
    deadline_s: float | None = None
    grace_s: float = 0.0
    jobs: int = 1
    sort_results: bool = False
    decisions: tuple[PassDecision, ...] = ()

    @property
    def identifiers(self) -> tuple[str, ...]:
        """Return planned pass identifiers in plan order."""

        return tuple(descriptor.identifier for descriptor in self.passes)

    @property
    def load_mode(self) -> LoadMode:
        """Return the model depth required by the planned passes."""

        if any(descriptor.requires_typed_model for descriptor in self.passes):
            return LoadMode.TYPED
        return LoadMode.SYNTAX

    def __len__(self) -> int:
        return len(self.passes)


__all__ = ["DecisionAction", "ExecutionPlan", "PassDecision"]
