# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Filesystem helpers."""

from __future__ import annotations

from .paths import canonical_path, display_path, is_within, normalize_path_key

__all__ = ["canonical_path", "display_path", "is_within", "normalize_path_key"]
