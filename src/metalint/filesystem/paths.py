# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helpers for reasoning about filesystem paths."""

from __future__ import annotations

import os
from functools import lru_cache
from os import PathLike
from pathlib import Path
from typing import Final

_Pathish = str | PathLike[str] | Path
_DEFAULT_CACHE_SIZE: Final[int] = 4096


@lru_cache(maxsize=_DEFAULT_CACHE_SIZE)
def _best_effort_resolve(path: Path) -> Path:
    try:
        return path.resolve(strict=False)
    except (OSError, RuntimeError):
        return path.absolute() if not path.is_absolute() else path


def canonical_path(path: _Pathish, *, base_dir: _Pathish | None = None) -> Path:
    """Return the absolute, symlink-resolved form of ``path``.

    Args:
        path: Filesystem path supplied by the caller.
        base_dir: Directory used to anchor relative inputs. Defaults to
            ``Path.cwd()`` when omitted.

    Returns:
        Path: Canonical absolute path.

    Raises:
        ValueError: If ``path`` is ``None``.
    """

    if path is None:
        raise ValueError("path must not be None")
    raw_path = Path(path).expanduser()
    if raw_path.is_absolute():
        return _best_effort_resolve(raw_path)
    base = Path.cwd() if base_dir is None else Path(base_dir).expanduser()
    return _best_effort_resolve(_best_effort_resolve(base) / raw_path)


def normalize_path_key(path: _Pathish, *, base_dir: _Pathish | None = None) -> str:
    """Return a POSIX key for ``path`` relative to ``base_dir`` where possible.

    Args:
        path: Path for which to build the key.
        base_dir: Optional base directory used for relativisation.

    Returns:
        str: POSIX-style normalised representation.
    """

    base = canonical_path(Path.cwd() if base_dir is None else base_dir)
    candidate = canonical_path(path, base_dir=base)
    try:
        return candidate.relative_to(base).as_posix()
    except ValueError:
        try:
            return Path(os.path.relpath(candidate, base)).as_posix()
        except ValueError:
            return candidate.as_posix()


def display_path(path: _Pathish, *, base_dir: _Pathish, prefix: str = "") -> str:
    """Return the user-facing form of ``path``.

    Paths under ``base_dir`` become relative. Paths outside it keep their
    absolute form. ``prefix`` is joined in front of the result when set.

    Args:
        path: Canonical path of the reported file.
        base_dir: Directory the display path is relative to.
        prefix: Optional path prefix prepended to the result.

    Returns:
        str: POSIX path used in issue output.
    """

    candidate = canonical_path(path, base_dir=base_dir)
    base = canonical_path(base_dir)
    try:
        shown = candidate.relative_to(base).as_posix()
    except ValueError:
        shown = candidate.as_posix()
    if prefix:
        return (Path(prefix) / shown).as_posix()
    return shown


def is_within(path: _Pathish, directory: _Pathish) -> bool:
    """Return ``True`` when ``path`` lives inside ``directory``."""

    try:
        Path(path).relative_to(Path(directory))
    except ValueError:
        return False
    return True


__all__ = ("canonical_path", "display_path", "is_within", "normalize_path_key")
