# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Apply auto-fix replacements attached to issues."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from ..core.models import Issue, Replacement
from ..passes.registry import PassRegistry
from .sorting import positional_key

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FixResult:
    """Issues left after fixing plus what was changed."""

    remaining: tuple[Issue, ...]
    fixed: tuple[Issue, ...] = ()
    files_changed: tuple[Path, ...] = ()


@dataclass(slots=True)
class _FileEdits:
    accepted: list[Issue] = field(default_factory=list)
    whole_lines: set[int] = field(default_factory=set)
    spans: dict[int, list[tuple[int, int]]] = field(default_factory=lambda: defaultdict(list))

    def try_add(self, issue: Issue, replacement: Replacement) -> bool:
        line = issue.line
        if line in self.whole_lines:
            return False
        if replacement.inline is None:
            if self.spans.get(line):
                return False
            self.whole_lines.add(line)
        else:
            start = replacement.inline.start_col
            end = start + replacement.inline.length
            for other_start, other_end in self.spans.get(line, []):
                if start < other_end and other_start < end or start == other_start:
                    return False
            self.spans[line].append((start, end))
        self.accepted.append(issue)
        return True


@dataclass(slots=True)
class IssueFixer:
    """Rewrite files on disk for issues of autofix-capable passes."""

    registry: PassRegistry

    def apply(self, issues: Sequence[Issue]) -> FixResult:
        """Apply every non-overlapping replacement and drop the fixed issues.

        Args:
            issues: Issues after filtering and deduplication.

        Returns:
            FixResult: Remaining issues in input order plus the fixed ones.
        """

        per_file: dict[Path, _FileEdits] = {}
        for issue in sorted(issues, key=positional_key):
            if issue.replacement is None or issue.abs_path is None:
                continue
            descriptor = self.registry.try_get(issue.pass_id)
            if descriptor is None or not descriptor.supports_autofix:
                continue
            edits = per_file.setdefault(issue.abs_path, _FileEdits())
            if not edits.try_add(issue, issue.replacement):
                LOGGER.debug("skipping overlapping fix for %s:%d", issue.file, issue.line)

        fixed: list[Issue] = []
        changed: list[Path] = []
        for path, edits in per_file.items():
            if not edits.accepted:
                continue
            try:
                self._rewrite(path, edits.accepted)
            except OSError as exc:
                LOGGER.warning("cannot apply fixes to %s: %s", path, exc)
                continue
            fixed.extend(edits.accepted)
            changed.append(path)
        fixed_ids = {id(issue) for issue in fixed}
        remaining = tuple(issue for issue in issues if id(issue) not in fixed_ids)
        return FixResult(remaining=remaining, fixed=tuple(fixed), files_changed=tuple(changed))

    @staticmethod
    def _rewrite(path: Path, issues: Sequence[Issue]) -> None:
        with path.open(encoding="utf-8", newline="") as handle:
            lines = handle.read().splitlines(keepends=True)

        def _bottom_up(issue: Issue) -> tuple[int, int]:
            replacement = issue.replacement
            column = replacement.inline.start_col if replacement and replacement.inline else 0
            return (issue.line, column)

        for issue in sorted(issues, key=_bottom_up, reverse=True):
            replacement = issue.replacement
            index = issue.line - 1
            if replacement is None or not 0 <= index < len(lines):
                continue
            original = lines[index]
            body = original.rstrip("\r\n")
            ending = original[len(body) :]
            if replacement.delete_line:
                del lines[index]
            elif replacement.new_lines is not None:
                lines[index : index + 1] = [text + (ending or "\n") for text in replacement.new_lines]
            elif replacement.inline is not None:
                fix = replacement.inline
                body = body[: fix.start_col] + fix.new_text + body[fix.start_col + fix.length :]
                lines[index] = f"{body}{ending}"
        with path.open("w", encoding="utf-8", newline="") as handle:
            handle.write("".join(lines))


__all__ = ["FixResult", "IssueFixer"]
