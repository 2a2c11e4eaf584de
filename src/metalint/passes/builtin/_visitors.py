# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared AST visitor utilities for built-in passes."""

from __future__ import annotations

import ast
from collections.abc import Callable
from typing import TYPE_CHECKING, Final

from ...core.models import Replacement
from ...loader.model import SourceFile

if TYPE_CHECKING:
    from ...execution.context import PassContext

_VISIT_METHOD_NAME: Final[str] = "visit"


def _dispatch_alias(name: str) -> str:
    """Return the CamelCase dispatch name used by ``ast.NodeVisitor``.

    Args:
        name: Original snake_case visitor name (e.g. ``visit_import_from``).

    Returns:
        The camel-cased variant required for ``NodeVisitor`` dispatch
        (``visit_ImportFrom`` for the previous example).
    """

    prefix, _, remainder = name.partition("_")
    if not remainder:
        return name
    camel = "".join(part.capitalize() for part in remainder.split("_"))
    return f"{prefix}_{camel}"


class BaseAstPassVisitor(ast.NodeVisitor):
    """Common functionality for AST-based passes.

    Subclasses define snake_case ``visit_*`` methods; ``__init_subclass__``
    mirrors them to the CamelCase names ``ast.NodeVisitor`` dispatches on.
    """

    def __init_subclass__(cls) -> None:
        super().__init_subclass__()
        for attr, value in list(vars(cls).items()):
            if not callable(value) or not attr.startswith("visit_") or attr == _VISIT_METHOD_NAME:
                continue
            if any(ch.isupper() for ch in attr):
                continue
            alias = _dispatch_alias(attr)
            if not hasattr(cls, alias):
                setattr(cls, alias, value)

    def __init__(self, source: SourceFile, context: PassContext) -> None:
        self._source = source
        self._context = context

    def record_issue(self, node: ast.AST, message: str, *, replacement: Replacement | None = None) -> None:
        """Report a finding anchored to ``node``.

        Args:
            node: AST node responsible for the finding.
            message: Human-readable description of the problem.
            replacement: Optional auto-fix edit.
        """

        line = getattr(node, "lineno", None)
        offset = getattr(node, "col_offset", None)
        self._context.report(
            self._source.path,
            line,
            offset + 1 if offset is not None else None,
            message,
            replacement=replacement,
        )


type VisitorFactory = Callable[[SourceFile, PassContext], BaseAstPassVisitor]


def run_ast_pass(context: PassContext, visitor_factory: VisitorFactory) -> None:
    """Run one visitor per parsed file, checking for cancellation between files.

    Args:
        context: Context of the running pass.
        visitor_factory: Callable creating a visitor for a file.
    """

    for source in context.iter_files():
        if source.tree is None:
            continue
        visitor_factory(source, context).visit(source.tree)


__all__ = ["BaseAstPassVisitor", "VisitorFactory", "run_ast_pass"]
