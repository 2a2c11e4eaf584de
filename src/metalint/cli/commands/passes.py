# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""``metalint passes`` command implementation."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.table import Table

from ...passes.catalog import default_registry
from ..shared import build_cli_logger


def _flag(value: bool) -> str:
    return "yes" if value else "no"


def passes_command(
    presets: Annotated[bool, typer.Option("--presets", help="List presets and their passes instead.")] = False,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable coloured output.")] = False,
) -> None:
    """List registered passes with their capabilities."""

    logger = build_cli_logger(emoji=False, no_color=no_color)
    registry = default_registry()
    if presets:
        table = Table(title="Presets")
        table.add_column("Preset")
        table.add_column("Passes")
        for category in registry.categories():
            members = " ".join(descriptor.identifier for descriptor in registry.by_category(category))
            table.add_row(category, members)
        logger.console.print(table)
        return

    table = Table(title="Passes")
    table.add_column("Pass")
    table.add_column("Default")
    table.add_column("Presets")
    table.add_column("Typed")
    table.add_column("Autofix")
    table.add_column("Description")
    for descriptor in registry.passes():
        table.add_row(
            descriptor.identifier,
            _flag(descriptor.default_enabled),
            ", ".join(descriptor.categories),
            _flag(descriptor.requires_typed_model),
            _flag(descriptor.supports_autofix),
            descriptor.description,
        )
    logger.console.print(table)


__all__ = ["passes_command"]
