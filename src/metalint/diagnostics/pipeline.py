# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Sequential post-processing of pass findings."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from ..config.models import OutputConfig
from ..core.models import Issue
from ..execution.runner import PassReport
from .dedupe import apply_limits, deduplicate
from .filtering import FilterEngine
from .fixer import FixResult, IssueFixer
from .normalizer import FindingNormalizer
from .sorting import sort_issues

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class IssuePipeline:
    """Normalise, filter, deduplicate, limit, fix and sort findings.

    Attributes:
        normalizer: Converts raw findings into canonical issues.
        filters: Exclusion engine.
        output: Limits, fix flag and sort mode.
        fixer: Applies replacements when ``output.fix`` is set.
    """

    normalizer: FindingNormalizer
    filters: FilterEngine
    output: OutputConfig = field(default_factory=OutputConfig)
    fixer: IssueFixer | None = None
    last_fix: FixResult | None = field(default=None, init=False)

    def run(self, reports: Sequence[PassReport]) -> list[Issue]:
        """Return the final ordered issues for ``reports`` given in plan order."""

        issues = self.normalizer.normalize_reports(reports)
        normalized = len(issues)
        issues = self.filters.apply(issues)
        filtered = len(issues)
        issues = deduplicate(issues)
        issues = apply_limits(
            issues,
            max_issues_per_pass=self.output.max_issues_per_pass,
            max_same_issues=self.output.max_same_issues,
        )
        if self.output.fix and self.fixer is not None:
            self.last_fix = self.fixer.apply(issues)
            issues = list(self.last_fix.remaining)
        LOGGER.debug(
            "pipeline: %d normalised, %d after filters, %d reported",
            normalized,
            filtered,
            len(issues),
        )
        return sort_issues(issues, positional=self.output.sort_results)


__all__ = ["IssuePipeline"]
