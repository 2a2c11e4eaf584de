# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command registration for the metalint CLI."""

from __future__ import annotations

import typer

from .passes import passes_command
from .run import run_command


def register_commands(app: typer.Typer) -> None:
    """Attach every metalint command to ``app``."""

    app.command("run")(run_command)
    app.command("passes")(passes_command)


__all__ = ["passes_command", "register_commands", "run_command"]
