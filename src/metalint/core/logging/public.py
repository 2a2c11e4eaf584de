# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing status lines with optional colour and emoji prefixes.

Messages are printed as :class:`rich.text.Text`, never as markup, so issue
text such as ``[bugs style]`` or ``except:`` reaches the terminal verbatim.
"""

from __future__ import annotations

from enum import Enum

from rich.console import Console
from rich.rule import Rule
from rich.text import Text

from ...runtime.console.manager import console_for, detect_tty


class StatusLevel(Enum):
    """Status line kinds with their emoji prefix and colour."""

    INFO = ("ℹ️ ", "cyan")
    OK = ("✅ ", "green")
    WARN = ("⚠️ ", "yellow")
    FAIL = ("❌ ", "red")

    def __init__(self, symbol: str, style: str) -> None:
        self.symbol = symbol
        self.style = style


def emoji(symbol: str, enable: bool) -> str:
    """Return ``symbol`` when emoji output is enabled, otherwise ``""``."""

    return symbol if enable else ""


def status(
    level: StatusLevel,
    msg: str,
    *,
    use_emoji: bool,
    use_color: bool | None = None,
    console: Console | None = None,
) -> None:
    """Print one status line.

    Args:
        level: Kind of message; selects the prefix and colour.
        msg: Message text, printed literally.
        use_emoji: Whether to prefix the message with the level's emoji.
        use_color: Force colour on or off; ``None`` follows the terminal.
        console: Console to print to; defaults to the shared console for the
            requested preferences.
    """

    color_enabled = detect_tty() if use_color is None else use_color
    target = console or console_for(color=color_enabled, emoji=use_emoji)
    text = Text(emoji(level.symbol, use_emoji))
    text.append(msg)
    if color_enabled:
        text.stylize(level.style)
    target.print(text)


def section(title: str, *, use_color: bool, console: Console | None = None) -> None:
    """Print a header separating blocks of console output."""

    target = console or console_for(color=use_color, emoji=True)
    target.print()
    if use_color:
        target.print(Rule(Text(title)))
    else:
        target.print(Text(f"--- {title} ---"))


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None, console: Console | None = None) -> None:
    status(StatusLevel.INFO, msg, use_emoji=use_emoji, use_color=use_color, console=console)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None, console: Console | None = None) -> None:
    status(StatusLevel.OK, msg, use_emoji=use_emoji, use_color=use_color, console=console)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None, console: Console | None = None) -> None:
    status(StatusLevel.WARN, msg, use_emoji=use_emoji, use_color=use_color, console=console)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None, console: Console | None = None) -> None:
    status(StatusLevel.FAIL, msg, use_emoji=use_emoji, use_color=use_color, console=console)


__all__ = ["StatusLevel", "emoji", "fail", "info", "ok", "section", "status", "warn"]
