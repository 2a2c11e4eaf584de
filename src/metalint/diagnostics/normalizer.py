# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Convert raw pass findings into canonical :class:`Issue` records."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..core.models import Issue, RawFinding
from ..core.severity import Severity, SeverityRuleView, apply_severity_rules, coerce_severity
from ..execution.runner import PassReport
from ..filesystem.paths import canonical_path, display_path
from ..loader.model import SemanticModel
from ..passes.descriptor import PassDescriptor


@dataclass(slots=True)
class FindingNormalizer:
    """Normalise findings against one semantic model.

    Attributes:
        model: Model whose base directory and line directives apply.
        path_prefix: Optional prefix joined in front of display paths.
        default_severity: Severity used when neither finding nor pass sets one.
        severity_rules: Per-pass ``regex -> severity`` overrides.
    """

    model: SemanticModel
    path_prefix: str = ""
    default_severity: Severity = Severity.WARNING
    severity_rules: SeverityRuleView | None = None

    def normalize(self, finding: RawFinding, descriptor: PassDescriptor, order: tuple[int, int] = (0, 0)) -> Issue:
        """Return the canonical issue for ``finding``.

        Args:
            finding: Raw finding emitted by the pass.
            descriptor: Metadata of the reporting pass.
            order: Plan index and report sequence used for stable ordering.

        Returns:
            Issue: Canonical record, positioned at line 1 when the finding had
            no usable position.
        """

        path = canonical_path(finding.file, base_dir=self.model.base_dir)
        line = finding.line if finding.line is not None and finding.line >= 1 else 1
        column = finding.column if finding.column is not None and finding.column >= 0 else 0
        replacement = finding.replacement

        source = self.model.file(path)
        if source is not None and source.directives:
            position = source.directives.remap(line, column)
            if position.remapped:
                path, line, column = position.path, max(position.line, 1), max(position.column, 0)
                replacement = None

        fallback = descriptor.default_severity or self.default_severity
        severity = coerce_severity(finding.severity, fallback)
        severity = apply_severity_rules(
            descriptor.identifier,
            finding.message,
            severity,
            rules=self.severity_rules,
        )
        return Issue(
            pass_id=descriptor.identifier,
            file=display_path(path, base_dir=self.model.base_dir, prefix=self.path_prefix),
            line=line,
            column=column,
            severity=severity,
            message=finding.message,
            replacement=replacement,
            abs_path=path,
            order=order,
        )

    def normalize_reports(self, reports: Sequence[PassReport]) -> list[Issue]:
        """Normalise every finding of ``reports`` (given in plan order).

        Args:
            reports: Pass reports in plan order.

        Returns:
            list[Issue]: Issues in grouped order, one per raw finding.
        """

        issues: list[Issue] = []
        for plan_index, report in enumerate(reports):
            for sequence, finding in enumerate(report.findings):
                issues.append(self.normalize(finding, report.descriptor, (plan_index, sequence)))
        return issues


__all__ = ["FindingNormalizer"]
