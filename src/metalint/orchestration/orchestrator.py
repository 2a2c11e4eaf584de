# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""High level orchestration for one metalint run."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from ..config.models import Config, LoadConfig
from ..core.models import Issue
from ..core.severity import build_severity_rules
from ..diagnostics.changes import build_changed_lines
from ..diagnostics.filtering import build_filter_engine
from ..diagnostics.fixer import IssueFixer
from ..diagnostics.normalizer import FindingNormalizer
from ..diagnostics.pipeline import IssuePipeline
from ..errors import ConfigurationError, LoadFailure, NoSourceFound
from ..execution.runner import PassReport, PassRunner, RunnerResult
from ..filesystem.paths import canonical_path
from ..loader.builder import SemanticModelLoader
from ..loader.handle import ModelHandle
from ..loader.model import LoadMode, SemanticModel
from ..passes.catalog import default_registry
from ..passes.registry import PassRegistry
from ..planning.plan import ExecutionPlan
from ..planning.resolver import PlanResolver
from .outcome import FailureClassifier, resolve_outcome
from .report import PassSummary, RunReport

type LoaderFactory = Callable[[LoadConfig, LoadMode], SemanticModelLoader]


def _default_loader_factory(config: LoadConfig, mode: LoadMode) -> SemanticModelLoader:
    return SemanticModelLoader(config, mode=mode)


@dataclass(slots=True)
class OrchestratorHooks:
    """Lifecycle callbacks invoked around orchestration phases."""

    after_plan: Callable[[ExecutionPlan], None] | None = None
    after_load: Callable[[SemanticModel], None] | None = None
    after_pass: Callable[[PassReport], None] | None = None
    after_execution: Callable[[RunReport], None] | None = None


class Orchestrator:
    """Plan, load, execute and post-process one run."""

    def __init__(
        self,
        registry: PassRegistry | None = None,
        *,
        loader_factory: LoaderFactory | None = None,
        runner: PassRunner | None = None,
        hooks: OrchestratorHooks | None = None,
        debug_logger: Callable[[str], None] | None = None,
    ) -> None:
        """Create an orchestrator.

        Args:
            registry: Passes available to the run; defaults to the built-ins.
            loader_factory: Callable creating the semantic model loader.
            runner: Pass runner; a default :class:`PassRunner` when omitted.
            hooks: Optional lifecycle callbacks.
            debug_logger: Optional sink for debug messages.
        """

        self._registry = registry if registry is not None else default_registry()
        self._loader_factory = loader_factory or _default_loader_factory
        self._runner = runner or PassRunner()
        self._hooks = hooks or OrchestratorHooks()
        self._debug_logger = debug_logger

    @property
    def registry(self) -> PassRegistry:
        """Return the registry passes are planned from."""

        return self._registry

    def _debug(self, message: str) -> None:
        if self._debug_logger:
            self._debug_logger(message)

    def plan(self, cfg: Config) -> ExecutionPlan:
        """Return the execution plan for ``cfg``.

        Raises:
            ConfigurationError: If the selection cannot be resolved.
        """

        plan = PlanResolver(self._registry).build_plan(cfg)
        self._debug(f"plan: {', '.join(plan.identifiers) or '<empty>'} (load mode {plan.load_mode.value})")
        if self._hooks.after_plan:
            self._hooks.after_plan(plan)
        return plan

    def run(self, cfg: Config) -> RunReport:
        """Execute the run described by ``cfg``.

        Args:
            cfg: Validated run configuration.

        Returns:
            RunReport: Ordered issues, outcome and pass summaries. Load
            failures and missing sources become terminal reports.

        Raises:
            ConfigurationError: If the configuration cannot be turned into a plan.
        """

        started = time.monotonic()
        plan = self.plan(cfg)
        try:
            severity_rules = build_severity_rules(cfg.severity.rules)
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc
        changes = build_changed_lines(cfg.diff, canonical_path(cfg.base_dir()))

        handle = ModelHandle(self._loader_factory(cfg.load, plan.load_mode), cfg.roots)
        try:
            try:
                model = handle.get()
            except NoSourceFound as exc:
                self._debug(str(exc))
                return self._finish(
                    RunReport(
                        outcome=resolve_outcome(no_source_found=True),
                        presets=plan.presets,
                        plan=plan.identifiers,
                        elapsed_s=time.monotonic() - started,
                    ),
                )
            except LoadFailure as exc:
                self._debug(f"load failure: {exc}")
                return self._finish(
                    RunReport(
                        outcome=resolve_outcome(fatal_failure=True),
                        presets=plan.presets,
                        plan=plan.identifiers,
                        load_error=str(exc),
                        elapsed_s=time.monotonic() - started,
                    ),
                )
            if self._hooks.after_load:
                self._hooks.after_load(model)
            self._debug(f"model: {len(model.units)} unit(s), {model.file_count} file(s)")

            result = self._runner.run(
                plan.passes,
                model,
                jobs=plan.jobs,
                deadline_s=plan.deadline_s,
                grace_s=plan.grace_s,
                settings=cfg.pass_settings,
            )
            if self._hooks.after_pass:
                for pass_report in result.reports:
                    self._hooks.after_pass(pass_report)

            pipeline = IssuePipeline(
                normalizer=FindingNormalizer(
                    model=model,
                    path_prefix=cfg.output.path_prefix,
                    default_severity=cfg.severity.default,
                    severity_rules=severity_rules,
                ),
                filters=build_filter_engine(cfg, model, self._registry, changes),
                output=cfg.output,
                fixer=IssueFixer(self._registry) if cfg.output.fix else None,
            )
            issues = pipeline.run(result.reports)
            report = self._build_report(cfg, plan, model, result, issues, pipeline, started)
        finally:
            handle.release()
        return self._finish(report)

    def _build_report(
        self,
        cfg: Config,
        plan: ExecutionPlan,
        model: SemanticModel,
        result: RunnerResult,
        issues: list[Issue],
        pipeline: IssuePipeline,
        started: float,
    ) -> RunReport:
        classifier = FailureClassifier.from_config(cfg.execution)
        failed = [report.pass_id for report in result.failed]
        fatal = classifier.any_fatal(failed) or result.all_failed
        outcome = resolve_outcome(
            issue_count=len(issues),
            pass_failed=bool(failed),
            fatal_failure=fatal,
            deadline_exceeded=result.deadline_exceeded,
        )
        summaries = tuple(
            PassSummary.from_report(
                report,
                fatal=report.pass_id in failed and (result.all_failed or classifier.is_fatal(report.pass_id)),
            )
            for report in result.reports
        )
        return RunReport(
            issues=tuple(issues),
            outcome=outcome,
            passes=summaries,
            presets=plan.presets,
            plan=plan.identifiers,
            load_errors=tuple(str(error) for error in model.load_errors),
            fixed=len(pipeline.last_fix.fixed) if pipeline.last_fix is not None else 0,
            elapsed_s=time.monotonic() - started,
        )

    def _finish(self, report: RunReport) -> RunReport:
        self._debug(f"outcome: {report.result.value} ({len(report.issues)} issue(s))")
        if self._hooks.after_execution:
            self._hooks.after_execution(report)
        return report


__all__ = ["LoaderFactory", "Orchestrator", "OrchestratorHooks"]
