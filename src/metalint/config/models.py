# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models describing one metalint run."""

from __future__ import annotations

import math
import os
import re
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..core.models import JsonValue
from ..core.severity import Severity, add_custom_rule
from .constants import DEFAULT_DEADLINE_SECONDS, DEFAULT_EXCLUDE_IDS, DEFAULT_GRACE_SECONDS


def default_parallel_jobs() -> int:
    """Return a CPU count scaled down for concurrent pass execution.

    Returns:
        int: Rounded-down count representing roughly 75% of available CPU
        cores while guaranteeing a minimum of one worker.

    """
    cores = os.cpu_count() or 1
    return max(1, math.floor(cores * 0.75))


def _validate_patterns(values: list[str]) -> list[str]:
    for pattern in values:
        try:
            re.compile(pattern)
        except re.error as exc:
            raise ValueError(f"invalid regular expression '{pattern}': {exc}") from exc
    return values


def _normalise_identifiers(values: list[str]) -> list[str]:
    return [value.strip().lower() for value in values if value.strip()]


class FailurePolicy(str, Enum):
    """Describe how internal pass failures influence the run outcome."""

    TOLERATE = "tolerate"
    FATAL = "fatal"


class LoadConfig(BaseModel):
    """Control how the semantic model is discovered and loaded."""

    model_config = ConfigDict(validate_assignment=True)

    base_dir: Path | None = None
    tests: bool = True


class SelectionConfig(BaseModel):
    """User selection of passes and presets."""

    model_config = ConfigDict(validate_assignment=True)

    enable: list[str] = Field(default_factory=list)
    disable: list[str] = Field(default_factory=list)
    presets: list[str] = Field(default_factory=list)
    enable_all: bool = False
    disable_all: bool = False
    fast: bool = False

    @field_validator("enable", "disable", "presets")
    @classmethod
    def _lower(cls, values: list[str]) -> list[str]:
        return _normalise_identifiers(values)

    @property
    def explicit(self) -> bool:
        """Return ``True`` when any pass or preset was requested by name."""

        return bool(self.enable or self.presets or self.enable_all)


class ExecutionConfig(BaseModel):
    """Scheduling, deadline and failure policy settings."""

    model_config = ConfigDict(validate_assignment=True)

    deadline_s: float | None = Field(default=DEFAULT_DEADLINE_SECONDS, gt=0)
    grace_s: float = Field(default=DEFAULT_GRACE_SECONDS, ge=0)
    jobs: int = Field(default_factory=default_parallel_jobs, ge=1)
    failure_policy: FailurePolicy = FailurePolicy.TOLERATE
    fatal_passes: list[str] = Field(default_factory=list)
    tolerated_passes: list[str] = Field(default_factory=list)

    @field_validator("fatal_passes", "tolerated_passes")
    @classmethod
    def _lower(cls, values: list[str]) -> list[str]:
        return _normalise_identifiers(values)


class OutputConfig(BaseModel):
    """Shape of the final issue list."""

    model_config = ConfigDict(validate_assignment=True)

    sort_results: bool = False
    path_prefix: str = ""
    max_issues_per_pass: int = Field(default=0, ge=0)
    max_same_issues: int = Field(default=0, ge=0)
    fix: bool = False


class ExcludeRule(BaseModel):
    """Suppress issues matching every field the rule sets."""

    model_config = ConfigDict(frozen=True)

    passes: tuple[str, ...] = ()
    path: str | None = None
    path_except: str | None = None
    text: str | None = None

    @field_validator("passes", mode="before")
    @classmethod
    def _lower_passes(cls, values: tuple[str, ...] | list[str]) -> tuple[str, ...]:
        return tuple(_normalise_identifiers(list(values)))

    @field_validator("path", "path_except", "text")
    @classmethod
    def _check_pattern(cls, value: str | None) -> str | None:
        if value is not None:
            _validate_patterns([value])
        return value

    @model_validator(mode="after")
    def _not_empty(self) -> ExcludeRule:
        if not (self.passes or self.path or self.path_except or self.text):
            raise ValueError("exclude rule must set at least one of passes, path, path_except or text")
        return self

    def matches(self, *, pass_id: str, path: str, message: str) -> bool:
        """Return ``True`` when the rule suppresses the described issue.

        Args:
            pass_id: Identifier of the reporting pass.
            path: Display path relative to the base directory.
            message: Issue message.

        Returns:
            bool: ``True`` when every configured field matches.
        """

        if self.passes and pass_id not in self.passes:
            return False
        if self.path is not None and re.search(self.path, path) is None:
            return False
        if self.path_except is not None and re.search(self.path_except, path) is not None:
            return False
        return self.text is None or re.search(self.text, message) is not None


class ExclusionConfig(BaseModel):
    """Issue exclusion settings evaluated by the filter engine."""

    model_config = ConfigDict(validate_assignment=True)

    skip_dirs: list[str] = Field(default_factory=list)
    skip_dirs_use_default: bool = True
    skip_files: list[str] = Field(default_factory=list)
    exclude: list[str] = Field(default_factory=list)
    use_default_excludes: bool = True
    include: list[str] = Field(default_factory=list)
    rules: list[ExcludeRule] = Field(default_factory=list)
    exclude_generated: bool = True
    generated_exempt_categories: list[str] = Field(default_factory=list)
    nolint: bool = True

    @field_validator("skip_dirs", "skip_files", "exclude")
    @classmethod
    def _check_patterns(cls, values: list[str]) -> list[str]:
        return _validate_patterns(values)

    @field_validator("include")
    @classmethod
    def _known_defaults(cls, values: list[str]) -> list[str]:
        upper = [value.strip().upper() for value in values if value.strip()]
        unknown = sorted(set(upper) - DEFAULT_EXCLUDE_IDS)
        if unknown:
            raise ValueError(f"unknown default exclude id(s): {', '.join(unknown)}")
        return upper


class SeverityConfig(BaseModel):
    """Severity defaulting and override rules."""

    model_config = ConfigDict(validate_assignment=True)

    default: Severity = Severity.WARNING
    rules: list[str] = Field(default_factory=list)

    @field_validator("rules")
    @classmethod
    def _check_rules(cls, values: list[str]) -> list[str]:
        scratch: dict[str, list[tuple[re.Pattern[str], Severity]]] = {}
        for rule in values:
            error = add_custom_rule(rule, rules=scratch)
            if error is not None:
                raise ValueError(error)
        return values


class DiffConfig(BaseModel):
    """Restrict reported issues to changed lines."""

    model_config = ConfigDict(validate_assignment=True)

    changed_lines: dict[str, list[int]] | None = None
    patch: str | None = None
    patch_path: Path | None = None
    new_from_rev: str | None = None

    @property
    def active(self) -> bool:
        """Return ``True`` when any diff source is configured."""

        return any(
            value is not None for value in (self.changed_lines, self.patch, self.patch_path, self.new_from_rev)
        )


class Config(BaseModel):
    """Top-level, already validated configuration for one run."""

    model_config = ConfigDict(validate_assignment=True)

    roots: list[str] = Field(default_factory=lambda: ["."])
    load: LoadConfig = Field(default_factory=LoadConfig)
    selection: SelectionConfig = Field(default_factory=SelectionConfig)
    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    exclusions: ExclusionConfig = Field(default_factory=ExclusionConfig)
    severity: SeverityConfig = Field(default_factory=SeverityConfig)
    diff: DiffConfig = Field(default_factory=DiffConfig)
    pass_settings: dict[str, dict[str, JsonValue]] = Field(default_factory=dict)

    @field_validator("roots")
    @classmethod
    def _default_root(cls, values: list[str]) -> list[str]:
        return values or ["."]

    @field_validator("pass_settings")
    @classmethod
    def _lower_keys(cls, values: dict[str, dict[str, JsonValue]]) -> dict[str, dict[str, JsonValue]]:
        return {key.strip().lower(): value for key, value in values.items()}

    def base_dir(self) -> Path:
        """Return the directory display paths are made relative to."""

        return self.load.base_dir if self.load.base_dir is not None else Path.cwd()


__all__ = [
    "Config",
    "DiffConfig",
    "ExcludeRule",
    "ExclusionConfig",
    "ExecutionConfig",
    "FailurePolicy",
    "LoadConfig",
    "OutputConfig",
    "SelectionConfig",
    "SeverityConfig",
    "default_parallel_jobs",
]
