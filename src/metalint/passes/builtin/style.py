# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Formatting and documentation style passes."""

from __future__ import annotations

import ast
import io
import tokenize
from typing import TYPE_CHECKING, Final

from ...core.models import InlineFix, Replacement
from ...loader.model import SourceFile
from ._visitors import BaseAstPassVisitor, run_ast_pass

if TYPE_CHECKING:
    from ...execution.context import PassContext

DEFAULT_MAX_LINE_LENGTH: Final[int] = 120


class _PrintCallVisitor(BaseAstPassVisitor):
    def visit_call(self, node: ast.Call) -> None:
        if isinstance(node.func, ast.Name) and node.func.id == "print":
            self.record_issue(node, "use of `print` found")
        self.generic_visit(node)


def run_print_call(context: PassContext) -> None:
    """Report calls to the ``print`` builtin."""

    run_ast_pass(context, _PrintCallVisitor)


def run_line_length(context: PassContext) -> None:
    """Report lines longer than the ``max_length`` setting."""

    limit = context.setting("max_length", DEFAULT_MAX_LINE_LENGTH)
    for source in context.iter_files(parsed_only=False):
        for number, text in enumerate(source.lines, start=1):
            width = len(text.expandtabs())
            if width > limit:
                context.report(source.path, number, None, f"line is {width} characters")


def _string_interior_lines(source: SourceFile) -> set[int]:
    """Return lines whose end lies inside a multi-line string literal."""

    interior: set[int] = set()
    try:
        for token in tokenize.generate_tokens(io.StringIO(source.text).readline):
            if token.type == tokenize.STRING and token.end[0] > token.start[0]:
                interior.update(range(token.start[0], token.end[0]))
    except (tokenize.TokenError, SyntaxError):
        return interior
    return interior


def run_trailing_whitespace(context: PassContext) -> None:
    """Report trailing spaces and tabs outside multi-line string literals."""

    for source in context.iter_files():
        interior = _string_interior_lines(source)
        for number, text in enumerate(source.lines, start=1):
            stripped = text.rstrip(" \t")
            if stripped == text or number in interior:
                continue
            context.report(
                source.path,
                number,
                len(stripped) + 1,
                "trailing whitespace",
                replacement=Replacement(
                    inline=InlineFix(start_col=len(stripped), length=len(text) - len(stripped), new_text=""),
                ),
            )


class _DocstringVisitor(BaseAstPassVisitor):
    def visit_module(self, node: ast.Module) -> None:
        if ast.get_docstring(node) is None and node.body:
            self._context.report(self._source.path, 1, None, "module should have a docstring")
        for child in node.body:
            self._check_definition(child, owner=None)

    def _check_definition(self, node: ast.stmt, owner: str | None) -> None:
        if not isinstance(node, ast.FunctionDef | ast.AsyncFunctionDef | ast.ClassDef):
            return
        if node.name.startswith("_"):
            return
        kind = "class" if isinstance(node, ast.ClassDef) else "method" if owner else "function"
        qualified = f"{owner}.{node.name}" if owner else node.name
        if ast.get_docstring(node) is None:
            self.record_issue(node, f"public {kind} `{qualified}` should have a docstring")
        if isinstance(node, ast.ClassDef):
            for child in node.body:
                self._check_definition(child, owner=qualified)


def run_docstring(context: PassContext) -> None:
    """Report public modules, classes and functions without docstrings."""

    run_ast_pass(context, _DocstringVisitor)


__all__ = [
    "DEFAULT_MAX_LINE_LENGTH",
    "run_docstring",
    "run_line_length",
    "run_print_call",
    "run_trailing_whitespace",
]
