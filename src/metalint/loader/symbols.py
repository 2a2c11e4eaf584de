# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Module-level symbol and import resolution used by the typed model."""

from __future__ import annotations

import ast
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ImportBinding:
    """Name bound in a module by an ``import`` statement.

    Attributes:
        name: Local name introduced by the import (``*`` for star imports).
        target: Dotted target the name refers to, relative imports unresolved.
        source_module: Module named by a ``from`` import, ``None`` for plain imports.
        line: One-based line of the import statement.
        column: One-based column of the import statement.
        star: Whether the binding came from ``from x import *``.
        level: Relative import level, ``0`` for absolute imports.
        raw: Text of the alias as written (``a.b`` or ``a.b as c``).
    """

    name: str
    target: str
    source_module: str | None
    line: int
    column: int
    star: bool = False
    level: int = 0
    raw: str = ""


@dataclass(frozen=True, slots=True)
class ModuleSymbols:
    """Symbol information for one module."""

    definitions: frozenset[str]
    imports: tuple[ImportBinding, ...]
    loaded_names: frozenset[str]
    exported: tuple[str, ...] | None

    @property
    def imported_modules(self) -> frozenset[str]:
        """Return the absolute module names referenced by import statements."""

        modules: set[str] = set()
        for binding in self.imports:
            if binding.level:
                continue
            modules.add(binding.source_module if binding.source_module is not None else binding.target)
        return frozenset(modules)


class _SymbolCollector(ast.NodeVisitor):
    def __init__(self) -> None:
        self.definitions: set[str] = set()
        self.imports: list[ImportBinding] = []
        self.loaded: set[str] = set()
        self.exported: list[str] | None = None
        self._depth = 0

    def visit_Import(self, node: ast.Import) -> None:
        for alias in node.names:
            local = alias.asname or alias.name.split(".", 1)[0]
            raw = f"{alias.name} as {alias.asname}" if alias.asname else alias.name
            self.imports.append(
                ImportBinding(
                    name=local,
                    target=alias.name,
                    source_module=None,
                    line=node.lineno,
                    column=node.col_offset + 1,
                    raw=raw,
                ),
            )

    def visit_ImportFrom(self, node: ast.ImportFrom) -> None:
        module = node.module or ""
        for alias in node.names:
            star = alias.name == "*"
            local = alias.asname or alias.name
            target = f"{module}.{alias.name}" if module and not star else module or alias.name
            raw = f"{alias.name} as {alias.asname}" if alias.asname else alias.name
            self.imports.append(
                ImportBinding(
                    name=local,
                    target=target,
                    source_module=module,
                    line=node.lineno,
                    column=node.col_offset + 1,
                    star=star,
                    level=node.level,
                    raw=raw,
                ),
            )

    def visit_FunctionDef(self, node: ast.FunctionDef) -> None:
        self._define(node.name)
        self._nested(node)

    def visit_AsyncFunctionDef(self, node: ast.AsyncFunctionDef) -> None:
        self._define(node.name)
        self._nested(node)

    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        self._define(node.name)
        self._nested(node)

    def visit_Assign(self, node: ast.Assign) -> None:
        for target in node.targets:
            if self._depth == 0 and isinstance(target, ast.Name) and target.id == "__all__":
                self.exported = _literal_strings(node.value)
        self.generic_visit(node)

    def visit_Name(self, node: ast.Name) -> None:
        if isinstance(node.ctx, ast.Load):
            self.loaded.add(node.id)
        elif self._depth == 0:
            self.definitions.add(node.id)

    def _define(self, name: str) -> None:
        if self._depth == 0:
            self.definitions.add(name)

    def _nested(self, node: ast.AST) -> None:
        self._depth += 1
        try:
            self.generic_visit(node)
        finally:
            self._depth -= 1


def _literal_strings(node: ast.expr) -> list[str] | None:
    if not isinstance(node, ast.List | ast.Tuple):
        return None
    names: list[str] = []
    for element in node.elts:
        if isinstance(element, ast.Constant) and isinstance(element.value, str):
            names.append(element.value)
    return names


def collect_module_symbols(tree: ast.Module) -> ModuleSymbols:
    """Return the symbol table for a parsed module.

    Args:
        tree: Parsed module.

    Returns:
        ModuleSymbols: Definitions, import bindings, loaded names and ``__all__``.
    """

    collector = _SymbolCollector()
    collector.visit(tree)
    exported = tuple(collector.exported) if collector.exported is not None else None
    return ModuleSymbols(
        definitions=frozenset(collector.definitions),
        imports=tuple(collector.imports),
        loaded_names=frozenset(collector.loaded),
        exported=exported,
    )


def resolve_relative(module: str, *, is_package: bool, level: int, target: str | None) -> str | None:
    """Resolve a relative import to an absolute dotted name.

    Args:
        module: Dotted name of the importing module.
        is_package: Whether the importing module is a package ``__init__``.
        level: Number of leading dots in the import.
        target: Module named after the dots, possibly empty.

    Returns:
        str | None: Absolute module name, or ``None`` when the import climbs
        above the top-level package.
    """

    parts = module.split(".") if module else []
    if not is_package:
        parts = parts[:-1]
    climb = level - 1
    if climb > len(parts) or (climb == len(parts) and not target):
        return None
    base = parts[: len(parts) - climb] if climb else parts
    if target:
        base = [*base, *target.split(".")]
    return ".".join(base) if base else None


__all__ = ["ImportBinding", "ModuleSymbols", "collect_module_symbols", "resolve_relative"]
