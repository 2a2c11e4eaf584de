# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Descriptors for the built-in passes."""

from __future__ import annotations

from typing import Final

from ..core.severity import Severity
from .builtin import (
    run_bare_except,
    run_docstring,
    run_line_length,
    run_misspell,
    run_mutable_default,
    run_print_call,
    run_star_import,
    run_trailing_whitespace,
    run_typecheck,
    run_unused_import,
)
from .descriptor import PassDescriptor
from .registry import PassRegistry

BUILTIN_PASSES: Final[tuple[PassDescriptor, ...]] = (
    PassDescriptor(
        identifier="typecheck",
        name="Typecheck",
        run=run_typecheck,
        description="Report syntax errors and unresolvable imports found while loading",
        categories=("bugs",),
        requires_typed_model=True,
        default_enabled=True,
        default_severity=Severity.ERROR,
    ),
    PassDescriptor(
        identifier="unused-import",
        name="Unused import",
        run=run_unused_import,
        description="Report imported names that are never used",
        categories=("unused", "import"),
        requires_typed_model=True,
        default_enabled=True,
    ),
    PassDescriptor(
        identifier="star-import",
        name="Star import",
        run=run_star_import,
        description="Report wildcard imports",
        categories=("style", "import"),
    ),
    PassDescriptor(
        identifier="bare-except",
        name="Bare except",
        run=run_bare_except,
        description="Report except clauses without an exception type",
        categories=("bugs", "error"),
        default_enabled=True,
    ),
    PassDescriptor(
        identifier="mutable-default",
        name="Mutable default",
        run=run_mutable_default,
        description="Report mutable argument defaults",
        categories=("bugs",),
        default_enabled=True,
    ),
    PassDescriptor(
        identifier="print-call",
        name="Print call",
        run=run_print_call,
        description="Report calls to print",
        categories=("style",),
    ),
    PassDescriptor(
        identifier="line-length",
        name="Line length",
        run=run_line_length,
        description="Report lines longer than the configured limit",
        categories=("style",),
    ),
    PassDescriptor(
        identifier="trailing-whitespace",
        name="Trailing whitespace",
        run=run_trailing_whitespace,
        description="Report trailing spaces and tabs",
        categories=("format", "style"),
        supports_autofix=True,
    ),
    PassDescriptor(
        identifier="docstring",
        name="Docstring",
        run=run_docstring,
        description="Report public symbols without docstrings",
        categories=("style", "comment"),
    ),
    PassDescriptor(
        identifier="misspell",
        name="Misspell",
        run=run_misspell,
        description="Report commonly misspelled words in comments and strings",
        categories=("style", "comment"),
        supports_autofix=True,
    ),
)


def default_registry() -> PassRegistry:
    """Return a fresh registry holding the built-in passes."""

    return PassRegistry(BUILTIN_PASSES)


__all__ = ["BUILTIN_PASSES", "default_registry"]
