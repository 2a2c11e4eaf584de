# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Detection of autogenerated source files."""

from __future__ import annotations

import re
import threading
from pathlib import Path
from typing import Final

_GENERATED_MARKERS: Final[tuple[str, ...]] = (
    "code generated",
    "do not edit",
    "autogenerated",
    "auto-generated",
    "automatically generated",
    "generated by",
    "@generated",
)
_DOCSTRING_OPENER: Final[re.Pattern[str]] = re.compile(r"^[rRbBuU]{0,2}(\"\"\"|''')")


def _leading_header(text: str) -> list[str]:
    """Return the comment block and module docstring lines at the top of ``text``."""

    header: list[str] = []
    lines = text.splitlines()
    index = 0
    while index < len(lines):
        stripped = lines[index].strip()
        if not stripped or stripped.startswith("#"):
            header.append(stripped)
            index += 1
            continue
        break
    if index < len(lines):
        opener = _DOCSTRING_OPENER.match(lines[index].strip())
        if opener is not None:
            quote = opener.group(1)
            first = lines[index].strip()[opener.end() :]
            header.append(first)
            if quote not in first:
                index += 1
                while index < len(lines):
                    header.append(lines[index])
                    if quote in lines[index]:
                        break
                    index += 1
    return header


def is_generated_source(text: str) -> bool:
    """Return ``True`` when ``text`` declares itself as generated code.

    Args:
        text: Full source text of a module.

    Returns:
        bool: ``True`` when the leading comments or module docstring carry a
        generated-code marker.
    """

    header = " ".join(_leading_header(text)).lower()
    return any(marker in header for marker in _GENERATED_MARKERS)


class GeneratedFileDetector:
    """Thread-safe, caching front end for :func:`is_generated_source`."""

    def __init__(self) -> None:
        self._cache: dict[Path, bool] = {}
        self._lock = threading.Lock()

    def is_generated(self, path: Path, text: str | None = None) -> bool:
        """Return whether ``path`` is generated, reading it when ``text`` is omitted.

        Args:
            path: Canonical path of the module.
            text: Already loaded source text, when available.

        Returns:
            bool: ``True`` for generated files; unreadable files count as not generated.
        """

        with self._lock:
            cached = self._cache.get(path)
        if cached is not None:
            return cached
        if text is None:
            try:
                text = path.read_text(encoding="utf-8", errors="replace")
            except OSError:
                return False
        result = is_generated_source(text)
        with self._lock:
            self._cache[path] = result
        return result


__all__ = ["GeneratedFileDetector", "is_generated_source"]
