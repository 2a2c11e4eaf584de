# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared constants for metalint configuration and discovery."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

ALWAYS_EXCLUDE_DIRS: Final[frozenset[str]] = frozenset(
    {
        ".git",
        ".hg",
        ".svn",
        "node_modules",
        ".venv",
        "venv",
        "__pycache__",
        ".mypy_cache",
        ".pytest_cache",
        ".ruff_cache",
        ".tox",
        ".nox",
        ".cache",
        ".eggs",
    },
)

PYTHON_SOURCE_SUFFIX: Final[str] = ".py"
PACKAGE_MARKER: Final[str] = "__init__.py"
RECURSIVE_MARKER: Final[str] = "..."
TEST_FILE_PATTERNS: Final[tuple[str, ...]] = ("test_*.py", "*_test.py", "conftest.py")

DEFAULT_SKIP_DIRS: Final[tuple[str, ...]] = (
    r"(^|/)vendor($|/)",
    r"(^|/)third_party($|/)",
    r"(^|/)testdata($|/)",
    r"(^|/)examples($|/)",
    r"(^|/)builtin($|/)",
    r"(^|/)site-packages($|/)",
)

DEFAULT_DEADLINE_SECONDS: Final[float] = 60.0
DEFAULT_GRACE_SECONDS: Final[float] = 2.0


@dataclass(frozen=True, slots=True)
class DefaultExclude:
    """Curated message pattern that is excluded unless re-enabled by id."""

    identifier: str
    pass_id: str
    pattern: str
    why: str


DEFAULT_EXCLUDES: Final[tuple[DefaultExclude, ...]] = (
    DefaultExclude(
        identifier="EXC0001",
        pass_id="docstring",
        pattern=r"module should have a docstring",
        why="Module docstrings are noisy for small helper modules",
    ),
    DefaultExclude(
        identifier="EXC0002",
        pass_id="docstring",
        pattern=r"public (function|method|class) .+ should have a docstring",
        why="Annoying requirement to document every public symbol",
    ),
    DefaultExclude(
        identifier="EXC0003",
        pass_id="unused-import",
        pattern=r"imported but unused in package `__init__`",
        why="Package initialisers re-export names on purpose",
    ),
    DefaultExclude(
        identifier="EXC0004",
        pass_id="misspell",
        pattern=r"(?i)`(behaviour|colour|initialise|normalise|honour)` is a misspelling",
        why="British spellings are accepted",
    ),
)

DEFAULT_EXCLUDE_IDS: Final[frozenset[str]] = frozenset(entry.identifier for entry in DEFAULT_EXCLUDES)


__all__ = [
    "ALWAYS_EXCLUDE_DIRS",
    "DEFAULT_DEADLINE_SECONDS",
    "DEFAULT_EXCLUDES",
    "DEFAULT_EXCLUDE_IDS",
    "DEFAULT_GRACE_SECONDS",
    "DEFAULT_SKIP_DIRS",
    "DefaultExclude",
    "PACKAGE_MARKER",
    "PYTHON_SOURCE_SUFFIX",
    "RECURSIVE_MARKER",
    "TEST_FILE_PATTERNS",
]
