# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Turn a pass selection into a concrete execution plan."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from ..config.models import Config, SelectionConfig
from ..errors import ConfigurationError
from ..passes.registry import PassRegistry
from .plan import ExecutionPlan, PassDecision

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class PlanResolver:
    """Resolve enable/disable/preset selections against a registry.

    Resolution starts from every pass (``enable_all``), the default-enabled
    passes, or nothing (``disable_all``); adds the passes of each preset and
    every explicitly enabled pass; removes explicitly disabled passes; and
    finally, in fast mode, drops passes that need the typed model. The plan
    keeps registry order.
    """

    registry: PassRegistry
    last_decisions: tuple[PassDecision, ...] = field(default=(), init=False, repr=False)

    def resolve(self, selection: SelectionConfig) -> tuple[tuple[str, ...], tuple[str, ...]]:
        """Return ``(pass identifiers, presets)`` for ``selection``.

        Args:
            selection: User selection.

        Returns:
            tuple[tuple[str, ...], tuple[str, ...]]: Planned identifiers in
            registry order and the deduplicated, sorted preset names.

        Raises:
            ConfigurationError: If the selection is contradictory, references an
                unknown pass or preset, or explicitly asks for passes but leaves
                nothing to run.
        """

        if selection.enable_all and selection.disable_all:
            raise ConfigurationError("--enable-all and --disable-all options must not be combined")
        self._check_known(selection.enable, "enable")
        self._check_known(selection.disable, "disable")
        presets = tuple(sorted(set(selection.presets)))
        known_categories = set(self.registry.categories())
        unknown_presets = [preset for preset in presets if preset not in known_categories]
        if unknown_presets:
            raise ConfigurationError(
                f"unknown preset(s): {', '.join(unknown_presets)}; "
                f"available presets: {', '.join(sorted(known_categories))}",
            )

        reasons: dict[str, list[str]] = {identifier: [] for identifier in self.registry}
        selected: set[str] = set()
        if selection.enable_all:
            selected.update(self.registry)
            self._note(reasons, self.registry, "enable-all")
        elif not selection.disable_all:
            defaults = [descriptor.identifier for descriptor in self.registry.default_enabled()]
            selected.update(defaults)
            self._note(reasons, defaults, "enabled by default")
        for preset in presets:
            members = [descriptor.identifier for descriptor in self.registry.by_category(preset)]
            selected.update(members)
            self._note(reasons, members, f"preset {preset}")
        enabled = [self.registry[identifier].identifier for identifier in selection.enable]
        selected.update(enabled)
        self._note(reasons, enabled, "explicitly enabled")

        disabled = {self.registry[identifier].identifier for identifier in selection.disable}
        for identifier in disabled & selected:
            reasons[identifier].append("explicitly disabled")
        selected -= disabled

        if selection.fast:
            slow = {identifier for identifier in selected if self.registry[identifier].requires_typed_model}
            for identifier in slow:
                reasons[identifier].append("requires the typed model; skipped in fast mode")
            selected -= slow

        ordered = tuple(identifier for identifier in self.registry if identifier in selected)
        self.last_decisions = tuple(
            PassDecision(
                identifier=identifier,
                action="run" if identifier in selected else "skip",
                reasons=tuple(reasons[identifier]) or ("not selected",),
            )
            for identifier in self.registry
        )
        for decision in self.last_decisions:
            LOGGER.debug("%s: %s (%s)", decision.identifier, decision.action, "; ".join(decision.reasons))

        if not ordered and selection.explicit:
            raise ConfigurationError("no passes left to run after applying enable, disable and fast options")
        return ordered, presets

    def build_plan(self, config: Config) -> ExecutionPlan:
        """Return the :class:`ExecutionPlan` for ``config``.

        Args:
            config: Validated run configuration.

        Returns:
            ExecutionPlan: Ordered passes plus resolved run options.

        Raises:
            ConfigurationError: If the selection cannot be resolved.
        """

        identifiers, presets = self.resolve(config.selection)
        return ExecutionPlan(
            passes=tuple(self.registry[identifier] for identifier in identifiers),
            presets=presets,
            fast=config.selection.fast,
            deadline_s=config.execution.deadline_s,
            grace_s=config.execution.grace_s,
            jobs=config.execution.jobs,
            sort_results=config.output.sort_results,
            decisions=self.last_decisions,
        )

    def _check_known(self, identifiers: Iterable[str], option: str) -> None:
        unknown = [identifier for identifier in identifiers if identifier not in self.registry]
        if unknown:
            raise ConfigurationError(f"{option}: unknown pass(es): {', '.join(unknown)}")

    @staticmethod
    def _note(reasons: dict[str, list[str]], identifiers: Iterable[str], reason: str) -> None:
        for identifier in identifiers:
            reasons[identifier].append(reason)


def build_plan(config: Config, registry: PassRegistry) -> ExecutionPlan:
    """Return the execution plan for ``config`` against ``registry``."""

    return PlanResolver(registry).build_plan(config)


__all__ = ["PlanResolver", "build_plan"]
