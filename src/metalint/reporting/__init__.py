# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Report rendering."""

from __future__ import annotations

from .formatters import OutputFormat, build_pass_table, format_issue_line, render_json, render_text

__all__ = ["OutputFormat", "build_pass_table", "format_issue_line", "render_json", "render_text"]
