# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for ``#line`` directive remapping."""

from __future__ import annotations

from pathlib import Path

from metalint.loader import LineDirectiveMap


def test_positions_before_directive_are_untouched(tmp_path: Path) -> None:
    source = tmp_path / "gen.py"
    mapping = LineDirectiveMap.parse("x = 1\n#line template.tpl:10\ny = 2\n", source)

    position = mapping.remap(1, 5)

    assert position.path == source
    assert (position.line, position.column) == (1, 5)
    assert position.remapped is False


def test_line_after_directive_maps_to_target(tmp_path: Path) -> None:
    source = tmp_path / "gen.py"
    text = "x = 1\n#line template.tpl:10:4\ny = 2\nz = 3\n"
    mapping = LineDirectiveMap.parse(text, source)

    first = mapping.remap(3, 2)
    later = mapping.remap(4, 2)

    assert first.path == (tmp_path / "template.tpl").resolve()
    assert (first.line, first.column) == (10, 5)
    assert (later.line, later.column) == (11, 2)
    assert first.remapped and later.remapped


def test_unknown_column_uses_directive_column(tmp_path: Path) -> None:
    mapping = LineDirectiveMap.parse("#line other.tpl:3:7\nvalue = 1\n", tmp_path / "gen.py")

    position = mapping.remap(2, 0)

    assert (position.line, position.column) == (3, 7)


def test_empty_file_keeps_current_target(tmp_path: Path) -> None:
    text = "#line first.tpl:1\na = 1\n#line :40\nb = 2\n"
    mapping = LineDirectiveMap.parse(text, tmp_path / "gen.py")

    position = mapping.remap(4, 1)

    assert position.path == (tmp_path / "first.tpl").resolve()
    assert position.line == 40


def test_malformed_directives_are_ignored(tmp_path: Path) -> None:
    mapping = LineDirectiveMap.parse("#line nothing here\n#line file.tpl:0\nx = 1\n", tmp_path / "gen.py")

    assert not mapping
    assert mapping.remap(3, 1).remapped is False
