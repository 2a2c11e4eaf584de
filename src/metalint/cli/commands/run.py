# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""``metalint run`` command implementation."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Annotated, Final

import typer
from pydantic import ValidationError

from ...config import (
    Config,
    DiffConfig,
    ExclusionConfig,
    ExecutionConfig,
    FailurePolicy,
    LoadConfig,
    OutputConfig,
    SelectionConfig,
    SeverityConfig,
    default_parallel_jobs,
)
from ...config.constants import DEFAULT_DEADLINE_SECONDS, DEFAULT_GRACE_SECONDS
from ...errors import ConfigurationError
from ...orchestration import Orchestrator, OrchestratorHooks, RunReport, TerminalResult
from ...planning import ExecutionPlan
from ...reporting import OutputFormat, build_pass_table, render_json, render_text
from ..options import parse_duration, split_csv
from ..shared import CLILogger, build_cli_logger, configure_engine_logging

_FAILURE_EXIT: Final[int] = TerminalResult.FAILURE.exit_code


def run_command(
    roots: Annotated[list[str] | None, typer.Argument(help="Paths to analyse; append /... to recurse.")] = None,
    enable: Annotated[list[str] | None, typer.Option("--enable", "-E", help="Enable specific passes.")] = None,
    disable: Annotated[list[str] | None, typer.Option("--disable", "-D", help="Disable specific passes.")] = None,
    preset: Annotated[list[str] | None, typer.Option("--preset", "-p", help="Enable passes of a category.")] = None,
    enable_all: Annotated[bool, typer.Option("--enable-all", help="Enable every registered pass.")] = False,
    disable_all: Annotated[bool, typer.Option("--disable-all", help="Start from an empty pass set.")] = False,
    fast: Annotated[bool, typer.Option("--fast", help="Skip passes that need the typed model.")] = False,
    deadline: Annotated[
        str,
        typer.Option("--deadline", help="Global time budget, e.g. 30s or 1m30s; 0 disables."),
    ] = f"{int(DEFAULT_DEADLINE_SECONDS)}s",
    grace: Annotated[
        str,
        typer.Option("--grace", help="Time granted to cancelled passes before abandoning them."),
    ] = f"{int(DEFAULT_GRACE_SECONDS)}s",
    jobs: Annotated[int | None, typer.Option("--jobs", "-j", min=1, help="Number of concurrent passes.")] = None,
    tests: Annotated[bool, typer.Option("--tests/--no-tests", help="Analyse test modules.")] = True,
    sort_results: Annotated[bool, typer.Option("--sort-results", help="Sort issues by file and position.")] = False,
    path_prefix: Annotated[str, typer.Option("--path-prefix", help="Prefix added to reported paths.")] = "",
    skip_dirs: Annotated[list[str] | None, typer.Option("--skip-dirs", help="Directory regexes to skip.")] = None,
    skip_dirs_use_default: Annotated[
        bool,
        typer.Option("--skip-dirs-use-default/--no-skip-dirs-use-default", help="Also skip vendor-like dirs."),
    ] = True,
    skip_files: Annotated[list[str] | None, typer.Option("--skip-files", help="File regexes to skip.")] = None,
    exclude: Annotated[list[str] | None, typer.Option("--exclude", "-e", help="Message regexes to exclude.")] = None,
    exclude_use_default: Annotated[
        bool,
        typer.Option("--exclude-use-default/--no-exclude-use-default", help="Apply curated default excludes."),
    ] = True,
    include: Annotated[list[str] | None, typer.Option("--include", help="Re-enable default excludes by id.")] = None,
    new_from_patch: Annotated[
        Path | None,
        typer.Option("--new-from-patch", help="Only report issues on lines added by this patch."),
    ] = None,
    new_from_rev: Annotated[
        str | None,
        typer.Option("--new-from-rev", help="Only report issues on lines changed since this revision."),
    ] = None,
    max_issues_per_pass: Annotated[int, typer.Option("--max-issues-per-pass", min=0)] = 0,
    max_same_issues: Annotated[int, typer.Option("--max-same-issues", min=0)] = 0,
    severity_rule: Annotated[
        list[str] | None,
        typer.Option("--severity-rule", help="Override severities with pass:regex=level."),
    ] = None,
    failure_policy: Annotated[
        FailurePolicy,
        typer.Option("--failure-policy", case_sensitive=False, help="How pass failures affect the outcome."),
    ] = FailurePolicy.TOLERATE,
    fatal_pass: Annotated[
        list[str] | None,
        typer.Option("--fatal-pass", help="Passes whose failure always fails the run."),
    ] = None,
    fix: Annotated[bool, typer.Option("--fix", help="Apply auto-fixes where supported.")] = False,
    out_format: Annotated[OutputFormat, typer.Option("--out-format", case_sensitive=False)] = OutputFormat.TEXT,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Print presets and pass timings.")] = False,
    debug: Annotated[bool, typer.Option("--debug", help="Print engine debug logging.")] = False,
    no_emoji: Annotated[bool, typer.Option("--no-emoji", help="Disable emoji in messages.")] = False,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable coloured output.")] = False,
) -> None:
    """Run the planned passes and report the merged issues."""

    logger = build_cli_logger(emoji=not no_emoji, debug=debug, no_color=no_color)
    logger.diagnostics = configure_engine_logging(
        debug=debug,
        no_color=no_color,
        quiet=out_format is OutputFormat.JSON,
    )
    try:
        config = Config(
            roots=roots or ["."],
            load=LoadConfig(tests=tests),
            selection=SelectionConfig(
                enable=split_csv(enable),
                disable=split_csv(disable),
                presets=split_csv(preset),
                enable_all=enable_all,
                disable_all=disable_all,
                fast=fast,
            ),
            execution=ExecutionConfig(
                deadline_s=parse_duration(deadline),
                grace_s=parse_duration(grace) or 0.0,
                jobs=jobs or default_parallel_jobs(),
                failure_policy=failure_policy,
                fatal_passes=split_csv(fatal_pass),
            ),
            output=OutputConfig(
                sort_results=sort_results,
                path_prefix=path_prefix,
                max_issues_per_pass=max_issues_per_pass,
                max_same_issues=max_same_issues,
                fix=fix,
            ),
            exclusions=ExclusionConfig(
                skip_dirs=split_csv(skip_dirs),
                skip_dirs_use_default=skip_dirs_use_default,
                skip_files=split_csv(skip_files),
                exclude=list(exclude or []),
                use_default_excludes=exclude_use_default,
                include=split_csv(include),
            ),
            severity=SeverityConfig(rules=list(severity_rule or [])),
            diff=DiffConfig(patch_path=new_from_patch, new_from_rev=new_from_rev),
        )
    except ValidationError as exc:
        logger.fail(f"invalid configuration: {exc}")
        raise typer.Exit(code=_FAILURE_EXIT) from exc

    hooks = OrchestratorHooks(after_plan=_announce_plan(logger) if verbose else None)
    orchestrator = Orchestrator(hooks=hooks, debug_logger=logger.debug)
    try:
        report = orchestrator.run(config)
    except ConfigurationError as exc:
        logger.fail(f"configuration error: {exc}")
        raise typer.Exit(code=_FAILURE_EXIT) from exc

    if out_format is OutputFormat.JSON:
        logger.echo(render_json(report))
    else:
        _emit_text_report(report, logger, verbose=verbose)
    raise typer.Exit(code=report.exit_code)


def _announce_plan(logger: CLILogger) -> Callable[[ExecutionPlan], None]:
    def _announce(plan: ExecutionPlan) -> None:
        logger.info(f"Active presets: [{' '.join(plan.presets)}]")
        logger.info(f"Active {len(plan)} passes: [{' '.join(plan.identifiers)}]")

    return _announce


def _emit_text_report(report: RunReport, logger: CLILogger, *, verbose: bool) -> None:
    render_text(report.issues, logger.console)
    for summary in report.passes:
        if summary.error is not None:
            logger.warn(f"pass {summary.pass_id} failed: {summary.error}")
    if verbose:
        logger.section("Passes")
        logger.console.print(build_pass_table(report.passes))
        if report.fixed:
            logger.ok(f"Fixed {report.fixed} issue(s)")
    result = report.result
    if result is TerminalResult.DEADLINE_EXCEEDED:
        logger.warn("Timeout exceeded: try increasing it by passing --deadline option")
    elif result is TerminalResult.NO_SOURCE_FOUND:
        logger.fail("no Python files to analyze")
    elif report.load_error is not None:
        logger.fail(f"failed to load source: {report.load_error}")
    elif result is TerminalResult.FAILURE:
        logger.fail("run failed: every pass failed or a fatal pass failed")
    elif verbose and result is TerminalResult.SUCCESS:
        logger.ok("No issues found")


__all__ = ["run_command"]
