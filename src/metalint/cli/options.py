# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsing helpers for CLI option values."""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Final

import typer

_DURATION_PART: Final[re.Pattern[str]] = re.compile(r"(\d+(?:\.\d+)?)(ms|s|m|h)")
_UNIT_SECONDS: Final[dict[str, float]] = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}


def parse_duration(value: str) -> float | None:
    """Return ``value`` in seconds, ``None`` for a zero (disabled) duration.

    Accepts bare numbers (seconds) and unit sequences such as ``1ms``,
    ``2s`` or ``1m30s``.

    Raises:
        typer.BadParameter: If ``value`` is not a duration.
    """

    text = value.strip().lower()
    try:
        seconds = float(text)
    except ValueError:
        position = 0
        seconds = 0.0
        for match in _DURATION_PART.finditer(text):
            if match.start() != position:
                break
            seconds += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
            position = match.end()
        if position != len(text) or not text:
            raise typer.BadParameter(f"invalid duration {value!r}") from None
    if seconds < 0:
        raise typer.BadParameter(f"duration must not be negative: {value!r}")
    return seconds or None


def split_csv(values: Iterable[str] | None) -> list[str]:
    """Flatten repeated and comma separated option values."""

    items: list[str] = []
    for value in values or ():
        items.extend(part.strip() for part in value.split(",") if part.strip())
    return items


__all__ = ["parse_duration", "split_csv"]
