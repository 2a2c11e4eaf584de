# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core value types shared across metalint."""

from __future__ import annotations

from .models import InlineFix, Issue, JsonValue, RawFinding, Replacement
from .severity import Severity

__all__ = ["InlineFix", "Issue", "JsonValue", "RawFinding", "Replacement", "Severity"]
