# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for semantic model discovery and loading."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from metalint.config import LoadConfig
from metalint.errors import LoadFailure, NoSourceFound
from metalint.loader import LoadMode, ModelHandle, SemanticModelLoader, parse_root


def _loader(project: Path, *, tests: bool = True, mode: LoadMode = LoadMode.SYNTAX) -> SemanticModelLoader:
    return SemanticModelLoader(LoadConfig(base_dir=project, tests=tests), mode=mode)


def test_parse_root_recursive_markers(project: Path) -> None:
    assert parse_root("...", base_dir=project).recursive is True
    assert parse_root("...", base_dir=project).path == project
    spec = parse_root("pkg/...", base_dir=project)
    assert spec.recursive is True
    assert spec.path == project / "pkg"
    assert parse_root("pkg", base_dir=project).recursive is False


def test_non_recursive_root_loads_single_directory(write_tree) -> None:
    project = write_tree({"a.py": "x = 1\n", "sub/b.py": "y = 2\n"})

    model = _loader(project).load(["."])

    assert [source.path.name for source in model.iter_files()] == ["a.py"]


def test_recursive_root_discovers_packages(write_tree) -> None:
    project = write_tree(
        {
            "pkg/__init__.py": "",
            "pkg/core.py": "VALUE = 1\n",
            "pkg/sub/__init__.py": "",
            "pkg/sub/leaf.py": "LEAF = 2\n",
            ".hidden/skip.py": "x = 1\n",
            "__pycache__/cached.py": "x = 1\n",
        },
    )

    model = _loader(project).load(["..."])

    assert model.unit("pkg") is not None
    assert model.unit("pkg.sub") is not None
    modules = sorted(source.module for source in model.iter_files())
    assert modules == ["pkg", "pkg.core", "pkg.sub", "pkg.sub.leaf"]


def test_symlink_cycle_terminates(write_tree) -> None:
    project = write_tree({"pkg/__init__.py": "", "pkg/mod.py": "X = 1\n"})
    os.symlink(project / "pkg", project / "pkg" / "loop", target_is_directory=True)

    model = _loader(project).load(["..."])

    assert model.file_count == 2


def test_missing_root_is_load_failure(project: Path) -> None:
    with pytest.raises(LoadFailure, match="cannot find package"):
        _loader(project).load(["missing/..."])


def _deny_listing(monkeypatch: pytest.MonkeyPatch, denied: Path) -> None:
    real_scandir = os.scandir

    def _scandir(path=".", *args, **kwargs):
        if os.fspath(path) == os.fspath(denied):
            raise PermissionError(13, "Permission denied", os.fspath(path))
        return real_scandir(path, *args, **kwargs)

    monkeypatch.setattr(os, "scandir", _scandir)


def test_unreadable_recursive_root_is_load_failure(write_tree, monkeypatch: pytest.MonkeyPatch) -> None:
    project = write_tree({"pkg/a.py": "x = 1\n"})
    _deny_listing(monkeypatch, project / "pkg")

    with pytest.raises(LoadFailure, match="cannot read directory") as excinfo:
        _loader(project).load(["pkg/..."])

    assert isinstance(excinfo.value.cause, PermissionError)


def test_unreadable_nested_directory_is_skipped(write_tree, monkeypatch: pytest.MonkeyPatch) -> None:
    project = write_tree({"pkg/a.py": "x = 1\n", "pkg/sub/b.py": "y = 2\n"})
    _deny_listing(monkeypatch, project / "pkg" / "sub")

    model = _loader(project).load(["pkg/..."])

    assert [source.path.name for source in model.iter_files()] == ["a.py"]


@pytest.mark.parametrize("roots", [["pkg/a.py", "pkg"], ["pkg", "pkg/a.py"]])
def test_file_and_directory_roots_load_file_once(write_tree, roots: list[str]) -> None:
    project = write_tree({"pkg/a.py": "x = 1\n", "pkg/b.py": "y = 2\n"})

    model = _loader(project).load(roots)

    assert sorted(source.path.name for source in model.iter_files()) == ["a.py", "b.py"]
    assert len(model.units) == 1


def test_non_python_file_root_is_load_failure(write_tree) -> None:
    project = write_tree({"notes.txt": "hello\n"})

    with pytest.raises(LoadFailure):
        _loader(project).load(["notes.txt"])


def test_empty_directory_raises_no_source_found(project: Path) -> None:
    (project / "docs").mkdir()

    with pytest.raises(NoSourceFound):
        _loader(project).load(["..."])


def test_test_files_included_by_default(write_tree) -> None:
    project = write_tree({"mod.py": "X = 1\n", "test_mod.py": "def test_x():\n    pass\n"})

    included = _loader(project).load(["."])
    excluded = _loader(project, tests=False).load(["."])

    assert {source.path.name for source in included.iter_files()} == {"mod.py", "test_mod.py"}
    assert {source.path.name for source in excluded.iter_files()} == {"mod.py"}
    assert any(source.is_test for source in included.iter_files())


def test_syntax_error_recorded_not_raised(write_tree) -> None:
    project = write_tree({"broken.py": "def oops(:\n    pass\n", "ok.py": "X = 1\n"})

    model = _loader(project).load(["."])

    assert len(model.load_errors) == 1
    error = model.load_errors[0]
    assert error.path.name == "broken.py"
    assert error.line == 1
    broken = model.file(project / "broken.py")
    assert broken is not None
    assert broken.tree is None


def test_typed_mode_computes_import_edges(write_tree) -> None:
    project = write_tree(
        {
            "app/__init__.py": "",
            "app/main.py": "from lib import helper\nimport json\n\nhelper.run(json)\n",
            "lib/__init__.py": "",
            "lib/helper.py": "def run(value):\n    return value\n",
        },
    )

    model = _loader(project, mode=LoadMode.TYPED).load(["..."])

    app = model.unit("app")
    assert app is not None
    assert app.imports == frozenset({"lib"})
    main = model.file(project / "app" / "main.py")
    assert main is not None
    assert main.symbols is not None
    assert "helper" in main.symbols.loaded_names


def test_syntax_mode_skips_symbols(write_tree) -> None:
    project = write_tree({"pkg/__init__.py": "import os\n"})

    model = _loader(project).load(["..."])

    assert all(source.symbols is None for source in model.iter_files())
    assert model.typed is False


def test_unresolvable_relative_import_recorded(write_tree) -> None:
    project = write_tree(
        {
            "pkg/__init__.py": "",
            "pkg/mod.py": "from .missing import thing\n",
            "loose.py": "from . import sibling\n",
        },
    )

    model = _loader(project, mode=LoadMode.TYPED).load(["..."])

    messages = sorted(error.message for error in model.load_errors)
    assert messages == [
        "could not resolve relative import '.missing'",
        "relative import outside of a package",
    ]


def test_model_handle_builds_once(write_tree) -> None:
    project = write_tree({"a.py": "X = 1\n"})
    handle = ModelHandle(_loader(project), ["."])

    first = handle.get()
    second = handle.get()

    assert first is second
    assert handle.build_count == 1
    assert handle.ready


def test_model_handle_caches_load_error(project: Path) -> None:
    handle = ModelHandle(_loader(project), ["missing"])

    with pytest.raises(LoadFailure):
        handle.get()
    with pytest.raises(LoadFailure):
        handle.get()
    assert handle.build_count == 1


def test_generated_header_detected(write_tree) -> None:
    project = write_tree(
        {
            "gen.py": "# Code generated by protoc. DO NOT EDIT.\nX = 1\n",
            "doc_gen.py": '"""Automatically generated module."""\nY = 2\n',
            "plain.py": '"""Plain module."""\n',
        },
    )

    model = _loader(project).load(["."])

    flags = {source.path.name: source.generated for source in model.iter_files()}
    assert flags["gen.py"] is True
    assert flags["doc_gen.py"] is True
    assert flags["plain.py"] is False
