# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render run reports for humans and machines."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Final

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..core.models import Issue
from ..core.severity import Severity
from ..orchestration.report import PassSummary, RunReport

_SEVERITY_STYLES: Final[dict[Severity, str]] = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
    Severity.NOTICE: "cyan",
    Severity.NOTE: "dim",
}


class OutputFormat(str, Enum):
    """Supported report formats."""

    TEXT = "text"
    JSON = "json"


def format_issue_line(issue: Issue) -> str:
    """Return ``path:line[:col]: message (pass)`` for ``issue``.

    The column is omitted when it is unknown.
    """

    location = f"{issue.file}:{issue.line}"
    if issue.column:
        location = f"{location}:{issue.column}"
    return f"{location}: {issue.message} ({issue.pass_id})"


def render_text(issues: Iterable[Issue], console: Console) -> None:
    """Print one styled line per issue."""

    for issue in issues:
        text = Text(format_issue_line(issue))
        style = _SEVERITY_STYLES.get(issue.severity)
        if style:
            text.stylize(style, 0, len(issue.file))
        console.print(text, soft_wrap=True)


def render_json(report: RunReport) -> str:
    """Return the JSON serialisation of ``report``."""

    return report.model_dump_json(indent=2)


def build_pass_table(passes: Iterable[PassSummary]) -> Table:
    """Return a table of per-pass status, finding count and timing."""

    table = Table(title="Passes", show_lines=False)
    table.add_column("Pass")
    table.add_column("Status")
    table.add_column("Findings", justify="right")
    table.add_column("Time", justify="right")
    for summary in passes:
        status = summary.status.value if summary.error is None else f"{summary.status.value}: {summary.error}"
        table.add_row(summary.pass_id, status, str(summary.findings), f"{summary.elapsed_s:.3f}s")
    return table


__all__ = ["OutputFormat", "build_pass_table", "format_issue_line", "render_json", "render_text"]
