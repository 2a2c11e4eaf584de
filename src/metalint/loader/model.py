# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Immutable representation of the loaded target code."""

from __future__ import annotations

import ast
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType

from .directives import LineDirectiveMap
from .symbols import ModuleSymbols


class LoadMode(str, Enum):
    """Depth of analysis performed while building the model."""

    SYNTAX = "syntax"
    TYPED = "typed"


@dataclass(frozen=True, slots=True)
class LoadError:
    """Non-fatal problem recorded while loading a file."""

    path: Path
    line: int
    column: int
    message: str

    def __str__(self) -> str:
        return f"{self.path}:{self.line}:{self.column}: {self.message}"


@dataclass(frozen=True, slots=True)
class SourceFile:
    """One parsed Python module."""

    path: Path
    module: str
    text: str
    lines: tuple[str, ...]
    tree: ast.Module | None
    syntax_error: LoadError | None
    is_test: bool
    generated: bool
    directives: LineDirectiveMap
    symbols: ModuleSymbols | None = None

    @property
    def is_package_init(self) -> bool:
        """Return ``True`` for ``__init__.py`` modules."""

        return self.path.name == "__init__.py"

    def line_text(self, line: int) -> str:
        """Return the physical text of ``line`` or an empty string when out of range."""

        if 1 <= line <= len(self.lines):
            return self.lines[line - 1]
        return ""


@dataclass(frozen=True, slots=True)
class CodeUnit:
    """One package directory (or a single explicitly named module)."""

    import_path: str
    directory: Path
    files: tuple[SourceFile, ...]
    imports: frozenset[str] = frozenset()
    is_package: bool = False


@dataclass(frozen=True, slots=True)
class SemanticModel:
    """Shared, read-only model handed to every pass."""

    roots: tuple[str, ...]
    root_paths: tuple[Path, ...]
    base_dir: Path
    units: tuple[CodeUnit, ...]
    mode: LoadMode
    load_errors: tuple[LoadError, ...] = ()
    _files: Mapping[Path, SourceFile] = field(init=False, repr=False, compare=False)
    _units: Mapping[str, CodeUnit] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        files = {source.path: source for unit in self.units for source in unit.files}
        units = {unit.import_path: unit for unit in self.units}
        object.__setattr__(self, "_files", MappingProxyType(files))
        object.__setattr__(self, "_units", MappingProxyType(units))

    @property
    def typed(self) -> bool:
        """Return ``True`` when symbol information is available."""

        return self.mode is LoadMode.TYPED

    def file(self, path: Path) -> SourceFile | None:
        """Return the loaded file at canonical ``path`` if present."""

        return self._files.get(path)

    def unit(self, import_path: str) -> CodeUnit | None:
        """Return the unit with import identity ``import_path`` if present."""

        return self._units.get(import_path)

    def iter_files(self) -> Iterator[SourceFile]:
        """Yield every loaded file in unit order."""

        for unit in self.units:
            yield from unit.files

    @property
    def file_count(self) -> int:
        """Return the number of loaded files."""

        return len(self._files)


__all__ = ["CodeUnit", "LoadError", "LoadMode", "SemanticModel", "SourceFile"]
