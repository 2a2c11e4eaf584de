# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rich console provisioning keyed by output preferences."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

from rich.console import Console

type ColorSystem = Literal["auto", "standard", "256", "truecolor", "windows"]


def detect_tty() -> bool:
    """Return ``True`` when stdout appears to be backed by a terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@dataclass(frozen=True, slots=True)
class ConsoleSettings:
    """Output preferences a console is built for.

    Attributes:
        color: Whether ANSI colour output is allowed.
        emoji: Whether rich should render ``:emoji:`` codes.
        highlight: Whether rich auto-highlights numbers and paths.
        stderr: Whether the console writes to ``sys.stderr``.
    """

    color: bool = True
    emoji: bool = True
    highlight: bool = False
    stderr: bool = False


class RichConsoleManager:
    """Hand out :class:`Console` instances for :class:`ConsoleSettings`.

    Terminal consoles are cached per settings value. When stdout is not a
    terminal a new console is returned on every call and it writes to whatever
    ``sys.stdout`` is at print time, so redirected or captured streams receive
    the output.
    """

    def __init__(self) -> None:
        self._terminal: dict[ConsoleSettings, Console] = {}

    def get(self, settings: ConsoleSettings) -> Console:
        """Return a console honouring ``settings``."""

        if not detect_tty():
            return Console(
                no_color=True,
                emoji=settings.emoji,
                highlight=settings.highlight,
                soft_wrap=True,
                stderr=settings.stderr,
            )
        console = self._terminal.get(settings)
        if console is None:
            color_system: ColorSystem | None = "auto" if settings.color else None
            console = Console(
                color_system=color_system,
                force_terminal=True,
                no_color=not settings.color,
                emoji=settings.emoji,
                highlight=settings.highlight,
                soft_wrap=True,
                stderr=settings.stderr,
            )
            self._terminal[settings] = console
        return console

    def clear(self) -> None:
        """Forget cached terminal consoles."""

        self._terminal.clear()


@lru_cache(maxsize=1)
def get_console_manager() -> RichConsoleManager:
    """Return the process-wide :class:`RichConsoleManager`."""

    return RichConsoleManager()


def console_for(*, color: bool, emoji: bool, stderr: bool = False) -> Console:
    """Shortcut for ``get_console_manager().get(ConsoleSettings(...))``."""

    return get_console_manager().get(ConsoleSettings(color=color, emoji=emoji, stderr=stderr))


__all__ = ["ConsoleSettings", "RichConsoleManager", "console_for", "detect_tty", "get_console_manager"]
