# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Root specification parsing and package directory discovery."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from ..config.constants import ALWAYS_EXCLUDE_DIRS, PYTHON_SOURCE_SUFFIX, RECURSIVE_MARKER
from ..errors import LoadFailure
from ..filesystem.paths import canonical_path

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RootSpec:
    """Parsed root argument.

    Attributes:
        raw: Root exactly as supplied by the caller.
        path: Canonical filesystem path the root names.
        recursive: Whether nested packages are included.
    """

    raw: str
    path: Path
    recursive: bool


def parse_root(raw: str, *, base_dir: Path) -> RootSpec:
    """Return the :class:`RootSpec` for ``raw``.

    ``...`` alone names the base directory recursively; a trailing ``/...``
    marks any other root as recursive.

    Args:
        raw: Root argument.
        base_dir: Directory relative roots resolve against.

    Returns:
        RootSpec: Canonical root specification.
    """

    text = raw.strip() or "."
    recursive = False
    if text == RECURSIVE_MARKER:
        text, recursive = ".", True
    elif text.endswith(f"/{RECURSIVE_MARKER}"):
        text = text[: -len(RECURSIVE_MARKER) - 1] or "/"
        recursive = True
    return RootSpec(raw=raw, path=canonical_path(text, base_dir=base_dir), recursive=recursive)


def _pruned(name: str) -> bool:
    return name in ALWAYS_EXCLUDE_DIRS or name.startswith(".") or name.endswith(".egg-info")


def iter_source_dirs(root: RootSpec) -> Iterator[tuple[Path, list[str]]]:
    """Yield ``(directory, python file names)`` pairs reachable from ``root``.

    Directory symlinks are followed; each canonical directory is visited at
    most once so symlink cycles terminate.

    Args:
        root: Directory root to walk.

    Yields:
        tuple[Path, list[str]]: Canonical directory and its sorted ``.py`` files.

    Raises:
        LoadFailure: If ``root`` cannot be listed.
    """

    if not root.recursive:
        try:
            names = sorted(os.listdir(root.path))
        except OSError as exc:
            raise LoadFailure(f"cannot read directory {root.path}: {exc}", path=root.path, cause=exc) from exc
        yield root.path, [name for name in names if _is_python_file(root.path / name)]
        return

    visited: set[str] = set()
    listed_root = False

    def _on_error(exc: OSError) -> None:
        if not listed_root:
            raise LoadFailure(f"cannot read directory {root.path}: {exc}", path=root.path, cause=exc) from exc
        LOGGER.debug("skipping unreadable directory: %s", exc)

    for current, dirnames, filenames in os.walk(root.path, followlinks=True, onerror=_on_error):
        listed_root = True
        real = os.path.realpath(current)
        if real in visited:
            LOGGER.debug("symlink cycle detected at %s", current)
            dirnames[:] = []
            continue
        visited.add(real)
        dirnames[:] = sorted(name for name in dirnames if not _pruned(name))
        directory = Path(real)
        files = sorted(name for name in filenames if _is_python_file(directory / name))
        yield directory, files


def _is_python_file(path: Path) -> bool:
    return path.suffix == PYTHON_SOURCE_SUFFIX and path.is_file()


__all__ = ["RootSpec", "iter_source_dirs", "parse_root"]
