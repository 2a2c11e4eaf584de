# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console provisioning helpers."""

from __future__ import annotations

from .manager import ConsoleSettings, RichConsoleManager, console_for, detect_tty, get_console_manager

__all__ = ["ConsoleSettings", "RichConsoleManager", "console_for", "detect_tty", "get_console_manager"]
