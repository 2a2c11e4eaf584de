# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Metadata describing one analysis pass."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..core.models import RawFinding
from ..core.severity import Severity

if TYPE_CHECKING:
    from ..execution.context import PassContext

type PassResult = Iterable[RawFinding] | None
type PassCallable = Callable[[PassContext], PassResult]


@dataclass(frozen=True, slots=True)
class PassDescriptor:
    """Capability metadata plus the opaque entry point of a pass.

    Attributes:
        identifier: Unique, lowercase pass identifier.
        name: Human readable name.
        run: Callable receiving a :class:`PassContext`; may report findings
            through the context and/or return an iterable of findings.
        description: One-line summary shown by ``metalint passes``.
        categories: Preset tags the pass belongs to.
        requires_typed_model: Whether symbol resolution must be loaded.
        supports_autofix: Whether findings may carry replacements.
        default_enabled: Whether the pass runs without explicit selection.
        default_severity: Severity for findings that do not set one.
    """

    identifier: str
    name: str
    run: PassCallable
    description: str = ""
    categories: tuple[str, ...] = ()
    requires_typed_model: bool = False
    supports_autofix: bool = False
    default_enabled: bool = False
    default_severity: Severity | None = None

    def __post_init__(self) -> None:
        identifier = self.identifier.strip().lower()
        if not identifier:
            raise ValueError("pass identifier must not be empty")
        object.__setattr__(self, "identifier", identifier)
        object.__setattr__(self, "categories", tuple(dict.fromkeys(tag.strip().lower() for tag in self.categories)))


__all__ = ["PassCallable", "PassDescriptor", "PassResult"]
