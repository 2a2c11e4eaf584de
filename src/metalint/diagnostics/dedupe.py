# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Merge duplicate issues and apply reporting limits."""

from __future__ import annotations

from collections.abc import Iterable

from ..core.models import Issue


def deduplicate(issues: Iterable[Issue]) -> list[Issue]:
    """Collapse issues sharing file, line and message.

    The issue that comes first in plan order is kept; the pass identifiers of
    the others are appended to its ``also_reported_by`` provenance.

    Args:
        issues: Normalised issues.

    Returns:
        list[Issue]: Unique issues in plan order.
    """

    merged: dict[tuple[str, int, str], Issue] = {}
    for issue in sorted(issues, key=lambda item: item.order):
        key = issue.location_key
        first = merged.get(key)
        if first is None:
            merged[key] = issue
        else:
            merged[key] = first.with_provenance((issue.pass_id, *issue.also_reported_by))
    return list(merged.values())


def apply_limits(issues: Iterable[Issue], *, max_issues_per_pass: int = 0, max_same_issues: int = 0) -> list[Issue]:
    """Drop issues beyond the configured limits, keeping the earliest ones.

    Args:
        issues: Issues in plan order.
        max_issues_per_pass: Maximum issues kept per pass, ``0`` for unlimited.
        max_same_issues: Maximum issues with the same pass and message, ``0``
            for unlimited.

    Returns:
        list[Issue]: Issues within the limits.
    """

    per_pass: dict[str, int] = {}
    per_text: dict[tuple[str, str], int] = {}
    kept: list[Issue] = []
    for issue in issues:
        text_key = (issue.pass_id, issue.message)
        if max_issues_per_pass and per_pass.get(issue.pass_id, 0) >= max_issues_per_pass:
            continue
        if max_same_issues and per_text.get(text_key, 0) >= max_same_issues:
            continue
        per_pass[issue.pass_id] = per_pass.get(issue.pass_id, 0) + 1
        per_text[text_key] = per_text.get(text_key, 0) + 1
        kept.append(issue)
    return kept


__all__ = ["apply_limits", "deduplicate"]
