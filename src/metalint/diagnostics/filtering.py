# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Exclusion rules applied to normalised issues."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final, Protocol

from ..config.constants import DEFAULT_EXCLUDES, DEFAULT_SKIP_DIRS, DefaultExclude
from ..config.models import Config, ExcludeRule
from ..core.models import Issue
from ..filesystem.paths import is_within
from ..loader.generated import GeneratedFileDetector
from ..loader.model import SemanticModel
from ..passes.registry import PassRegistry
from .changes import ChangedLines

LOGGER = logging.getLogger(__name__)

_NOLINT: Final[re.Pattern[str]] = re.compile(r"#\s*nolint\b(?::\s*(?P<ids>[\w\-]+(?:\s*,\s*[\w\-]+)*))?", re.IGNORECASE)


class IssueFilter(Protocol):
    """Predicate returning ``True`` for issues that must be dropped."""

    name: str

    def excludes(self, issue: Issue) -> bool:
        """Return ``True`` when ``issue`` is excluded."""
        ...


def _relative_key(path: Path | None, base_dir: Path) -> str:
    if path is None:
        return ""
    try:
        return path.relative_to(base_dir).as_posix()
    except ValueError:
        return path.as_posix()


@dataclass(frozen=True, slots=True)
class SkipDirsFilter:
    """Drop issues located under an excluded directory.

    Patterns match the directory of the file relative to the base directory.
    A pattern that matches an explicitly named root does not skip files under
    that root.
    """

    patterns: tuple[re.Pattern[str], ...]
    base_dir: Path
    roots: tuple[Path, ...] = ()
    name: str = "skip-dirs"

    def excludes(self, issue: Issue) -> bool:
        if issue.abs_path is None:
            return False
        directory = _relative_key(issue.abs_path.parent, self.base_dir)
        for pattern in self.patterns:
            if pattern.search(directory) is None:
                continue
            if any(self._root_matches(pattern, root, issue.abs_path) for root in self.roots):
                continue
            return True
        return False

    def _root_matches(self, pattern: re.Pattern[str], root: Path, path: Path) -> bool:
        if not is_within(path, root):
            return False
        return pattern.search(_relative_key(root, self.base_dir)) is not None


@dataclass(frozen=True, slots=True)
class SkipFilesFilter:
    """Drop issues whose relative file path matches a pattern."""

    patterns: tuple[re.Pattern[str], ...]
    base_dir: Path
    name: str = "skip-files"

    def excludes(self, issue: Issue) -> bool:
        relative = _relative_key(issue.abs_path, self.base_dir)
        return any(pattern.search(relative) for pattern in self.patterns)


@dataclass(frozen=True, slots=True)
class GeneratedFilter:
    """Drop issues in autogenerated files unless the pass opts out."""

    model: SemanticModel
    registry: PassRegistry
    detector: GeneratedFileDetector
    exempt_categories: frozenset[str] = frozenset()
    name: str = "generated"

    def excludes(self, issue: Issue) -> bool:
        if issue.abs_path is None:
            return False
        descriptor = self.registry.try_get(issue.pass_id)
        if descriptor is not None and self.exempt_categories.intersection(descriptor.categories):
            return False
        source = self.model.file(issue.abs_path)
        if source is not None:
            return source.generated
        return self.detector.is_generated(issue.abs_path)


@dataclass(frozen=True, slots=True)
class ChangedLinesFilter:
    """Drop issues on lines outside the configured diff."""

    changes: ChangedLines
    base_dir: Path
    name: str = "diff"

    def excludes(self, issue: Issue) -> bool:
        return not self.changes.contains(_relative_key(issue.abs_path, self.base_dir), issue.line)


@dataclass(frozen=True, slots=True)
class DefaultExcludeFilter:
    """Drop issues matching a curated default exclude that was not re-enabled."""

    entries: tuple[DefaultExclude, ...]
    name: str = "default-excludes"
    _compiled: tuple[tuple[str, re.Pattern[str]], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        compiled = tuple((entry.pass_id, re.compile(entry.pattern)) for entry in self.entries)
        object.__setattr__(self, "_compiled", compiled)

    def excludes(self, issue: Issue) -> bool:
        return any(
            pass_id == issue.pass_id and pattern.search(issue.message) for pass_id, pattern in self._compiled
        )


@dataclass(frozen=True, slots=True)
class ExcludePatternFilter:
    """Drop issues whose message matches a global exclude pattern."""

    patterns: tuple[re.Pattern[str], ...]
    name: str = "exclude"

    def excludes(self, issue: Issue) -> bool:
        return any(pattern.search(issue.message) for pattern in self.patterns)


@dataclass(frozen=True, slots=True)
class ExcludeRulesFilter:
    """Drop issues matched by a per-pass exclude rule."""

    rules: tuple[ExcludeRule, ...]
    base_dir: Path
    name: str = "exclude-rules"

    def excludes(self, issue: Issue) -> bool:
        relative = _relative_key(issue.abs_path, self.base_dir)
        return any(rule.matches(pass_id=issue.pass_id, path=relative, message=issue.message) for rule in self.rules)


@dataclass(frozen=True, slots=True)
class NolintFilter:
    """Honour ``# nolint`` and ``# nolint: a, b`` comments on the reported line."""

    model: SemanticModel
    name: str = "nolint"

    def excludes(self, issue: Issue) -> bool:
        if issue.abs_path is None:
            return False
        source = self.model.file(issue.abs_path)
        if source is None:
            return False
        match = _NOLINT.search(source.line_text(issue.line))
        if match is None:
            return False
        ids = match.group("ids")
        if ids is None:
            return True
        return issue.pass_id in {item.strip().lower() for item in ids.split(",")}


@dataclass(slots=True)
class FilterEngine:
    """Apply every filter independently to each issue.

    An issue survives when no filter excludes it, so the result does not
    depend on filter order and applying the engine twice changes nothing.
    """

    filters: tuple[IssueFilter, ...]
    excluded_counts: dict[str, int] = field(default_factory=dict)

    def apply(self, issues: Iterable[Issue]) -> list[Issue]:
        """Return the issues no filter excludes, preserving input order."""

        kept: list[Issue] = []
        for issue in issues:
            hits = [flt.name for flt in self.filters if flt.excludes(issue)]
            if not hits:
                kept.append(issue)
                continue
            for name in hits:
                self.excluded_counts[name] = self.excluded_counts.get(name, 0) + 1
        for name, count in sorted(self.excluded_counts.items()):
            LOGGER.debug("filter %s excluded %d issue(s)", name, count)
        return kept


def _compile(patterns: Sequence[str]) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(pattern) for pattern in patterns)


def build_filter_engine(
    config: Config,
    model: SemanticModel,
    registry: PassRegistry,
    changes: ChangedLines | None = None,
) -> FilterEngine:
    """Return the filter engine configured by ``config``.

    Args:
        config: Run configuration.
        model: Loaded semantic model.
        registry: Registry used to look up pass categories.
        changes: Optional diff restriction.

    Returns:
        FilterEngine: Engine holding every enabled filter.
    """

    exclusions = config.exclusions
    base_dir = model.base_dir
    filters: list[IssueFilter] = []
    skip_dirs = [*exclusions.skip_dirs]
    if exclusions.skip_dirs_use_default:
        skip_dirs.extend(DEFAULT_SKIP_DIRS)
    if skip_dirs:
        filters.append(SkipDirsFilter(patterns=_compile(skip_dirs), base_dir=base_dir, roots=model.root_paths))
    if exclusions.skip_files:
        filters.append(SkipFilesFilter(patterns=_compile(exclusions.skip_files), base_dir=base_dir))
    if exclusions.exclude_generated:
        filters.append(
            GeneratedFilter(
                model=model,
                registry=registry,
                detector=GeneratedFileDetector(),
                exempt_categories=frozenset(category.lower() for category in exclusions.generated_exempt_categories),
            ),
        )
    if changes is not None:
        filters.append(ChangedLinesFilter(changes=changes, base_dir=base_dir))
    if exclusions.use_default_excludes:
        included = set(exclusions.include)
        entries = tuple(entry for entry in DEFAULT_EXCLUDES if entry.identifier not in included)
        if entries:
            filters.append(DefaultExcludeFilter(entries=entries))
    if exclusions.exclude:
        filters.append(ExcludePatternFilter(patterns=_compile(exclusions.exclude)))
    if exclusions.rules:
        filters.append(ExcludeRulesFilter(rules=tuple(exclusions.rules), base_dir=base_dir))
    if exclusions.nolint:
        filters.append(NolintFilter(model=model))
    return FilterEngine(filters=tuple(filters))


__all__ = [
    "ChangedLinesFilter",
    "DefaultExcludeFilter",
    "ExcludePatternFilter",
    "ExcludeRulesFilter",
    "FilterEngine",
    "GeneratedFilter",
    "IssueFilter",
    "NolintFilter",
    "SkipDirsFilter",
    "SkipFilesFilter",
    "build_filter_engine",
]
