# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Deterministic issue ordering."""

from __future__ import annotations

from collections.abc import Iterable

from ..core.models import Issue


def positional_key(issue: Issue) -> tuple[str, int, int, tuple[int, int]]:
    """Return the ``(file, line, column, report order)`` sort key."""

    return (issue.file, issue.line, issue.column, issue.order)


def sort_issues(issues: Iterable[Issue], *, positional: bool) -> list[Issue]:
    """Return ``issues`` in grouped or positional order.

    Grouped order follows the plan and then each pass's report order.
    Positional order sorts by file, line and column with ties broken by the
    grouped order. Both are total and ignore pass completion order.

    Args:
        issues: Issues to order.
        positional: ``True`` for positional order, ``False`` for grouped.

    Returns:
        list[Issue]: Ordered issues.
    """

    if positional:
        return sorted(issues, key=positional_key)
    return sorted(issues, key=lambda issue: issue.order)


__all__ = ["positional_key", "sort_issues"]
