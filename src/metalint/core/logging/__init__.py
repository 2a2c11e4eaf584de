# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared logging helpers for user-facing console output."""

from __future__ import annotations

from .public import StatusLevel, emoji, fail, info, ok, section, status, warn

__all__ = ["StatusLevel", "emoji", "fail", "info", "ok", "section", "status", "warn"]
