# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Build a :class:`SemanticModel` from root specifications."""

from __future__ import annotations

import ast
import io
import logging
import tokenize
from collections.abc import Sequence
from dataclasses import dataclass, field
from fnmatch import fnmatch
from pathlib import Path

from ..config.constants import PACKAGE_MARKER, PYTHON_SOURCE_SUFFIX, TEST_FILE_PATTERNS
from ..config.models import LoadConfig
from ..errors import LoadFailure, NoSourceFound
from ..filesystem.paths import canonical_path
from .directives import LineDirectiveMap
from .generated import GeneratedFileDetector
from .model import CodeUnit, LoadError, LoadMode, SemanticModel, SourceFile
from .roots import RootSpec, iter_source_dirs, parse_root
from .symbols import collect_module_symbols, resolve_relative

LOGGER = logging.getLogger(__name__)


def is_test_file(name: str) -> bool:
    """Return ``True`` when ``name`` follows a test module naming convention."""

    return any(fnmatch(name, pattern) for pattern in TEST_FILE_PATTERNS)


def package_chain(directory: Path) -> list[str]:
    """Return the dotted package components ending at ``directory``.

    Args:
        directory: Candidate package directory.

    Returns:
        list[str]: Package names from the outermost ancestor, empty when
        ``directory`` is not a package.
    """

    parts: list[str] = []
    current = directory
    while (current / PACKAGE_MARKER).is_file():
        parts.insert(0, current.name)
        if current.parent == current:
            break
        current = current.parent
    return parts


@dataclass(slots=True)
class _PendingUnit:
    import_path: str
    directory: Path
    is_package: bool
    files: list[SourceFile] = field(default_factory=list)


class SemanticModelLoader:
    """Discover and parse the code units named by a set of roots."""

    def __init__(self, config: LoadConfig | None = None, *, mode: LoadMode = LoadMode.SYNTAX) -> None:
        """Create a loader.

        Args:
            config: Loading options; defaults include test files.
            mode: Whether symbol information should be resolved.
        """

        self._config = config or LoadConfig()
        self._mode = mode
        self._generated = GeneratedFileDetector()

    @property
    def mode(self) -> LoadMode:
        """Return the load mode used by :meth:`load`."""

        return self._mode

    def base_dir(self) -> Path:
        """Return the canonical base directory for relative roots and display paths."""

        return canonical_path(self._config.base_dir if self._config.base_dir is not None else Path.cwd())

    def load(self, roots: Sequence[str]) -> SemanticModel:
        """Build the semantic model covering ``roots``.

        Args:
            roots: Root specifications; ``/...`` marks recursive descent.

        Returns:
            SemanticModel: Immutable model of every discovered code unit.

        Raises:
            LoadFailure: If a root does not exist or cannot be read.
            NoSourceFound: If the roots contain no Python modules.
        """

        roots = tuple(roots) or (".",)
        base_dir = self.base_dir()
        specs = [parse_root(raw, base_dir=base_dir) for raw in roots]
        errors: list[LoadError] = []
        pending: dict[Path, _PendingUnit] = {}
        for spec in specs:
            self._collect(spec, base_dir, pending, errors)
        units_in_progress = [unit for unit in pending.values() if unit.files]
        if not units_in_progress:
            raise NoSourceFound(roots)
        units = self._finalise(units_in_progress, errors)
        LOGGER.debug(
            "loaded %d unit(s) with %d load error(s) in %s mode",
            len(units),
            len(errors),
            self._mode.value,
        )
        return SemanticModel(
            roots=roots,
            root_paths=tuple(spec.path for spec in specs),
            base_dir=base_dir,
            units=units,
            mode=self._mode,
            load_errors=tuple(errors),
        )

    def _collect(
        self,
        spec: RootSpec,
        base_dir: Path,
        pending: dict[Path, _PendingUnit],
        errors: list[LoadError],
    ) -> None:
        if not spec.path.exists():
            raise LoadFailure(f"cannot find package {spec.raw!r}: {spec.path} does not exist", path=spec.path)
        if spec.path.is_file():
            if spec.path.suffix != PYTHON_SOURCE_SUFFIX:
                raise LoadFailure(f"{spec.raw!r} is not a Python source file", path=spec.path)
            owner = pending.get(spec.path.parent)
            if spec.path in pending or (owner is not None and any(f.path == spec.path for f in owner.files)):
                return
            chain = package_chain(spec.path.parent)
            if chain:
                module = ".".join(chain if spec.path.name == PACKAGE_MARKER else [*chain, spec.path.stem])
            else:
                module = spec.path.stem
            unit = _PendingUnit(import_path=module, directory=spec.path.parent, is_package=False)
            unit.files.append(self._parse(spec.path, module, errors))
            pending[spec.path] = unit
            return
        for directory, names in iter_source_dirs(spec):
            if directory in pending:
                continue
            selected = [name for name in names if self._config.tests or not is_test_file(name)]
            chain = package_chain(directory)
            unit = _PendingUnit(
                import_path=".".join(chain) if chain else _relative_identity(directory, base_dir),
                directory=directory,
                is_package=bool(chain),
            )
            for name in selected:
                path = canonical_path(directory / name)
                claimed = pending.pop(path, None)
                if claimed is not None:
                    unit.files.extend(claimed.files)
                    continue
                stem = Path(name).stem
                if chain:
                    module = unit.import_path if name == PACKAGE_MARKER else f"{unit.import_path}.{stem}"
                else:
                    module = stem
                unit.files.append(self._parse(path, module, errors))
            pending[directory] = unit

    def _parse(self, path: Path, module: str, errors: list[LoadError]) -> SourceFile:
        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise LoadFailure(f"cannot read {path}: {exc}", path=path, cause=exc) from exc
        syntax_error: LoadError | None = None
        tree: ast.Module | None = None
        try:
            encoding, _ = tokenize.detect_encoding(io.BytesIO(raw).readline)
            text = raw.decode(encoding)
        except (SyntaxError, UnicodeDecodeError, LookupError) as exc:
            text = raw.decode("utf-8", errors="replace")
            syntax_error = LoadError(path, 1, 0, f"cannot decode source: {exc}")
        if syntax_error is None:
            try:
                tree = ast.parse(text, filename=str(path))
            except SyntaxError as exc:
                syntax_error = LoadError(path, exc.lineno or 1, exc.offset or 0, exc.msg)
            except ValueError as exc:
                syntax_error = LoadError(path, 1, 0, str(exc))
        if syntax_error is not None:
            LOGGER.debug("recorded load error: %s", syntax_error)
            errors.append(syntax_error)
        symbols = collect_module_symbols(tree) if tree is not None and self._mode is LoadMode.TYPED else None
        return SourceFile(
            path=path,
            module=module,
            text=text,
            lines=tuple(text.splitlines()),
            tree=tree,
            syntax_error=syntax_error,
            is_test=is_test_file(path.name),
            generated=self._generated.is_generated(path, text),
            directives=LineDirectiveMap.parse(text, path),
            symbols=symbols,
        )

    def _finalise(self, pending: list[_PendingUnit], errors: list[LoadError]) -> tuple[CodeUnit, ...]:
        if self._mode is not LoadMode.TYPED:
            return tuple(
                CodeUnit(
                    import_path=unit.import_path,
                    directory=unit.directory,
                    files=tuple(unit.files),
                    is_package=unit.is_package,
                )
                for unit in pending
            )
        owners = {source.module: unit.import_path for unit in pending for source in unit.files}
        for unit in pending:
            if unit.is_package:
                owners.setdefault(unit.import_path, unit.import_path)
        units: list[CodeUnit] = []
        for unit in pending:
            edges: set[str] = set()
            for source in unit.files:
                edges.update(self._resolve_edges(source, unit, owners, errors))
            edges.discard(unit.import_path)
            units.append(
                CodeUnit(
                    import_path=unit.import_path,
                    directory=unit.directory,
                    files=tuple(unit.files),
                    imports=frozenset(edges),
                    is_package=unit.is_package,
                ),
            )
        return tuple(units)

    @staticmethod
    def _resolve_edges(
        source: SourceFile,
        unit: _PendingUnit,
        owners: dict[str, str],
        errors: list[LoadError],
    ) -> set[str]:
        edges: set[str] = set()
        if source.symbols is None:
            return edges
        for binding in source.symbols.imports:
            if binding.level:
                if not unit.is_package:
                    errors.append(
                        LoadError(source.path, binding.line, binding.column, "relative import outside of a package"),
                    )
                    continue
                absolute = resolve_relative(
                    source.module,
                    is_package=source.is_package_init,
                    level=binding.level,
                    target=binding.source_module,
                )
                if absolute is None or absolute not in owners:
                    dots = "." * binding.level
                    errors.append(
                        LoadError(
                            source.path,
                            binding.line,
                            binding.column,
                            f"could not resolve relative import '{dots}{binding.source_module or ''}'",
                        ),
                    )
                    continue
            else:
                absolute = binding.source_module or binding.target
            owner = _owner(absolute, owners)
            if owner is not None:
                edges.add(owner)
        return edges


def _owner(module: str, owners: dict[str, str]) -> str | None:
    parts = module.split(".")
    while parts:
        owner = owners.get(".".join(parts))
        if owner is not None:
            return owner
        parts.pop()
    return None


def _relative_identity(directory: Path, base_dir: Path) -> str:
    try:
        relative = directory.relative_to(base_dir).as_posix()
    except ValueError:
        return directory.as_posix()
    return relative or "."


__all__ = ["SemanticModelLoader", "is_test_file", "package_chain"]
