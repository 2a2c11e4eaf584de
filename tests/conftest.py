# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from textwrap import dedent

import pytest

from metalint.config import Config, LoadConfig

type TreeWriter = Callable[[Mapping[str, str]], Path]


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Return the canonical directory used as the analysed project root."""
    root = tmp_path.resolve() / "project"
    root.mkdir()
    return root


@pytest.fixture
def write_tree(project: Path) -> TreeWriter:
    """Return a helper writing ``{relative path: source}`` files under the project."""

    def _write(files: Mapping[str, str]) -> Path:
        for name, text in files.items():
            target = project / name
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(dedent(text), encoding="utf-8")
        return project

    return _write


@pytest.fixture
def make_config(project: Path) -> Callable[..., Config]:
    """Return a factory building configs anchored at the project directory."""

    def _make(**overrides: object) -> Config:
        data: dict[str, object] = {"roots": ["..."], "load": LoadConfig(base_dir=project)}
        data.update(overrides)
        return Config.model_validate(data)

    return _make
