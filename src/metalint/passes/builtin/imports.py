# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Import hygiene passes."""

from __future__ import annotations

import ast
from typing import TYPE_CHECKING, Final

from ._visitors import BaseAstPassVisitor, run_ast_pass

if TYPE_CHECKING:
    from ...execution.context import PassContext

_FUTURE_MODULE: Final[str] = "__future__"


def run_unused_import(context: PassContext) -> None:
    """Report imported names that are never loaded and not re-exported.

    Relies on the symbol tables of the typed model.
    """

    for source in context.iter_files():
        symbols = source.symbols
        if symbols is None:
            continue
        exported = set(symbols.exported or ())
        for binding in symbols.imports:
            if binding.star or binding.source_module == _FUTURE_MODULE:
                continue
            if binding.name in symbols.loaded_names or binding.name in exported:
                continue
            if binding.name == "_":
                continue
            suffix = " in package `__init__`" if source.is_package_init else ""
            context.report(
                source.path,
                binding.line,
                binding.column,
                f"`{binding.raw}` imported but unused{suffix}",
            )


class _StarImportVisitor(BaseAstPassVisitor):
    def visit_import_from(self, node: ast.ImportFrom) -> None:
        if any(alias.name == "*" for alias in node.names):
            module = "." * node.level + (node.module or "")
            self.record_issue(node, f"wildcard import from `{module}`")


def run_star_import(context: PassContext) -> None:
    """Report ``from module import *`` statements."""

    run_ast_pass(context, _StarImportVisitor)


__all__ = ["run_star_import", "run_unused_import"]
