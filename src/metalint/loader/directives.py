# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Line directive parsing and position remapping."""

from __future__ import annotations

import re
from bisect import bisect_right
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from ..filesystem.paths import canonical_path

_DIRECTIVE_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^#line (?P<file>.*?):(?P<line>\d+)(?::(?P<col>\d+))?\s*$",
)


@dataclass(frozen=True, slots=True)
class SourcePosition:
    """Position after directive remapping."""

    path: Path
    line: int
    column: int
    remapped: bool = False


@dataclass(frozen=True, slots=True)
class LineDirective:
    """One ``#line FILE:LINE[:COL]`` comment.

    Attributes:
        at_line: Physical line number of the directive comment.
        path: Canonical target file.
        line: Target line reported for the line following the directive.
        column: Target column for that following line, or ``None``.
    """

    at_line: int
    path: Path
    line: int
    column: int | None


class LineDirectiveMap:
    """Translate physical positions of one file into directive positions."""

    __slots__ = ("_directives", "_keys", "_path")

    def __init__(self, path: Path, directives: tuple[LineDirective, ...] = ()) -> None:
        self._path = path
        self._directives = tuple(sorted(directives, key=lambda item: item.at_line))
        self._keys = [item.at_line for item in self._directives]

    @classmethod
    def parse(cls, text: str, path: Path) -> LineDirectiveMap:
        """Collect the directives declared in ``text``.

        Args:
            text: Source text of the file.
            path: Canonical path of the file; relative targets resolve
                against its directory.

        Returns:
            LineDirectiveMap: Map for the file, possibly empty.
        """

        directives: list[LineDirective] = []
        current = path
        for number, raw in enumerate(text.splitlines(), start=1):
            if not raw.startswith("#line "):
                continue
            match = _DIRECTIVE_PATTERN.match(raw)
            if match is None:
                continue
            target_line = int(match.group("line"))
            if target_line < 1:
                continue
            name = match.group("file").strip()
            if name:
                current = canonical_path(name, base_dir=path.parent)
            column = match.group("col")
            directives.append(
                LineDirective(
                    at_line=number,
                    path=current,
                    line=target_line,
                    column=int(column) if column is not None else None,
                ),
            )
        return cls(path, tuple(directives))

    @property
    def directives(self) -> tuple[LineDirective, ...]:
        """Return the parsed directives in file order."""

        return self._directives

    def __bool__(self) -> bool:
        return bool(self._directives)

    def remap(self, line: int, column: int) -> SourcePosition:
        """Return the reported position for a physical ``line``/``column``.

        Args:
            line: One-based physical line number.
            column: One-based physical column, ``0`` when unknown.

        Returns:
            SourcePosition: Remapped position, or the physical one when no
            directive precedes ``line``.
        """

        index = bisect_right(self._keys, line - 1) - 1
        if index < 0:
            return SourcePosition(self._path, line, column)
        directive = self._directives[index]
        offset = line - directive.at_line - 1
        new_column = column
        if offset == 0 and directive.column is not None:
            new_column = directive.column + column - 1 if column else directive.column
        return SourcePosition(directive.path, directive.line + offset, new_column, remapped=True)


__all__ = ["LineDirective", "LineDirectiveMap", "SourcePosition"]
