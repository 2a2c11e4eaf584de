# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Issue post-processing: normalisation, filtering, dedupe, fixing and sorting."""

from __future__ import annotations

from .changes import ChangedLines, build_changed_lines, parse_unified_diff
from .dedupe import apply_limits, deduplicate
from .filtering import FilterEngine, build_filter_engine
from .fixer import FixResult, IssueFixer
from .normalizer import FindingNormalizer
from .pipeline import IssuePipeline
from .sorting import sort_issues

__all__ = [
    "ChangedLines",
    "FilterEngine",
    "FindingNormalizer",
    "FixResult",
    "IssueFixer",
    "IssuePipeline",
    "apply_limits",
    "build_changed_lines",
    "build_filter_engine",
    "deduplicate",
    "parse_unified_diff",
    "sort_issues",
]
