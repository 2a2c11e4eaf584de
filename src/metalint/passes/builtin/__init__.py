# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Built-in AST passes shipped with metalint."""

from __future__ import annotations

from .bugs import run_bare_except, run_mutable_default
from .imports import run_star_import, run_unused_import
from .misspell import run_misspell
from .style import run_docstring, run_line_length, run_print_call, run_trailing_whitespace
from .typecheck import run_typecheck

__all__ = [
    "run_bare_except",
    "run_docstring",
    "run_line_length",
    "run_misspell",
    "run_mutable_default",
    "run_print_call",
    "run_star_import",
    "run_trailing_whitespace",
    "run_typecheck",
    "run_unused_import",
]
