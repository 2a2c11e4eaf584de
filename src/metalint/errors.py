# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the metalint engine."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class MetalintError(Exception):
    """Base class for errors raised by the metalint engine."""


class ConfigurationError(MetalintError):
    """Raised when a run request cannot be turned into a valid execution plan."""


class LoadFailure(MetalintError):
    """Raised when the semantic model cannot be built."""

    def __init__(self, message: str, *, path: Path | None = None, cause: BaseException | None = None) -> None:
        """Initialise the failure with the offending path and underlying cause.

        Args:
            message: Human-readable description of the failure.
            path: Filesystem path that triggered the failure, when known.
            cause: Underlying exception raised while loading.
        """

        super().__init__(message)
        self.path = path
        self.cause = cause


class NoSourceFound(MetalintError):
    """Raised when the requested roots contain no analysable code units."""

    def __init__(self, roots: Sequence[str]) -> None:
        """Record the roots that yielded no code units.

        Args:
            roots: Root specifications supplied by the caller.
        """

        self.roots = tuple(roots)
        joined = ", ".join(self.roots) or "."
        super().__init__(f"no python files to analyze in {joined}")


class PassCancelled(MetalintError):
    """Raised inside a pass when its cancellation token has been triggered."""

    def __init__(self, reason: str) -> None:
        """Store the cancellation reason.

        Args:
            reason: Text describing why the pass was cancelled.
        """

        super().__init__(reason)
        self.reason = reason


__all__ = [
    "ConfigurationError",
    "LoadFailure",
    "MetalintError",
    "NoSourceFound",
    "PassCancelled",
]
