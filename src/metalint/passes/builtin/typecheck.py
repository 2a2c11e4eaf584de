# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Surface problems recorded while loading the semantic model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...core.severity import Severity

if TYPE_CHECKING:
    from ...execution.context import PassContext


def run_typecheck(context: PassContext) -> None:
    """Report every load error of the model as an error-level finding."""

    for error in context.model.load_errors:
        context.checkpoint()
        context.report(
            error.path,
            error.line,
            error.column or None,
            error.message,
            severity=Severity.ERROR,
        )


__all__ = ["run_typecheck"]
