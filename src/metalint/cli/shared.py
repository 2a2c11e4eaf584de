# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (logging, errors)."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from ..core.logging import StatusLevel, section, status
from ..runtime.console import console_for

_ENGINE_LOGGER = "metalint"


@dataclass(slots=True)
class CLILogger:
    """Adapter around project logging helpers respecting CLI emoji settings.

    Status messages, tables and rendered issues go to :attr:`console`;
    debug lines go to :attr:`diagnostics` when it is set.
    """

    console: Console
    use_emoji: bool
    use_color: bool = False
    debug_enabled: bool = False
    diagnostics: Console | None = None

    def _status(self, level: StatusLevel, message: str) -> None:
        status(level, message, use_emoji=self.use_emoji, use_color=self.use_color, console=self.console)

    def fail(self, message: str) -> None:
        self._status(StatusLevel.FAIL, message)

    def warn(self, message: str) -> None:
        self._status(StatusLevel.WARN, message)

    def ok(self, message: str) -> None:
        self._status(StatusLevel.OK, message)

    def info(self, message: str) -> None:
        self._status(StatusLevel.INFO, message)

    def section(self, title: str) -> None:
        """Print a block header."""

        section(title, use_color=self.use_color, console=self.console)

    def echo(self, message: str) -> None:
        """Write ``message`` to stdout unstyled, as machine-readable output."""

        typer.echo(message)

    def debug(self, message: str) -> None:
        """Emit a debug message when debug logging is enabled."""

        if self.debug_enabled:
            text = Text("[debug] ", style="bold cyan")
            text.append(message, style="dim")
            (self.diagnostics or self.console).print(text)


def build_cli_logger(*, emoji: bool, debug: bool = False, no_color: bool = False) -> CLILogger:
    """Return a ``CLILogger`` configured for the provided preferences.

    Args:
        emoji: Whether log output may include emoji glyphs.
        debug: Whether debug logging should be enabled.
        no_color: Whether terminal colour output should be disabled.

    Returns:
        CLILogger: Logger bound to the shared console for these preferences.
    """

    console = console_for(color=not no_color, emoji=emoji)
    return CLILogger(console=console, use_emoji=emoji, use_color=not no_color, debug_enabled=debug)


def configure_engine_logging(*, debug: bool, no_color: bool = False, quiet: bool = False) -> Console:
    """Route engine ``logging`` records through Rich on stderr.

    Warnings are shown unless ``quiet`` is set, which keeps only errors;
    debug records only when ``debug`` is set.

    Returns:
        Console: The stderr console the handler writes to.
    """

    console = console_for(color=not no_color, emoji=False, stderr=True)
    root = logging.getLogger(_ENGINE_LOGGER)
    root.handlers.clear()
    handler = RichHandler(console=console, show_path=False, show_time=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    if debug:
        root.setLevel(logging.DEBUG)
    else:
        root.setLevel(logging.ERROR if quiet else logging.WARNING)
    root.propagate = False
    return console


__all__ = ["CLILogger", "build_cli_logger", "configure_engine_logging"]
