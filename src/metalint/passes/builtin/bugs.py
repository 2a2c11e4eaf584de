# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Passes catching common runtime bugs."""

from __future__ import annotations

import ast
from typing import TYPE_CHECKING, Final

from ._visitors import BaseAstPassVisitor, run_ast_pass

if TYPE_CHECKING:
    from ...execution.context import PassContext

_MUTABLE_FACTORIES: Final[frozenset[str]] = frozenset({"list", "dict", "set", "bytearray"})


class _BareExceptVisitor(BaseAstPassVisitor):
    def visit_except_handler(self, node: ast.ExceptHandler) -> None:
        if node.type is None:
            self.record_issue(node, "bare `except:` clause; catch a specific exception")
        self.generic_visit(node)


def _is_mutable(node: ast.expr | None) -> bool:
    if isinstance(node, ast.List | ast.Dict | ast.Set | ast.ListComp | ast.DictComp | ast.SetComp):
        return True
    return (
        isinstance(node, ast.Call)
        and isinstance(node.func, ast.Name)
        and node.func.id in _MUTABLE_FACTORIES
    )


class _MutableDefaultVisitor(BaseAstPassVisitor):
    def visit_function_def(self, node: ast.FunctionDef | ast.AsyncFunctionDef) -> None:
        defaults = [*node.args.defaults, *node.args.kw_defaults]
        for default in defaults:
            if default is not None and _is_mutable(default):
                self.record_issue(default, f"mutable default argument in `{node.name}`")
        self.generic_visit(node)

    def visit_async_function_def(self, node: ast.AsyncFunctionDef) -> None:
        self.visit_function_def(node)


def run_bare_except(context: PassContext) -> None:
    """Report ``except:`` clauses without an exception type."""

    run_ast_pass(context, _BareExceptVisitor)


def run_mutable_default(context: PassContext) -> None:
    """Report mutable literals used as argument defaults."""

    run_ast_pass(context, _MutableDefaultVisitor)


__all__ = ["run_bare_except", "run_mutable_default"]
