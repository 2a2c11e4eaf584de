# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Context object handed to every running pass."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TypeVar

from ..core.models import JsonValue, RawFinding, Replacement
from ..core.severity import Severity
from ..loader.model import SemanticModel, SourceFile
from ..passes.descriptor import PassDescriptor
from .cancellation import CancellationToken
from .sink import FindingSink

_T = TypeVar("_T")


@dataclass(frozen=True, slots=True)
class PassContext:
    """Read-only view of the model plus the pass's own sink and token."""

    descriptor: PassDescriptor
    model: SemanticModel
    token: CancellationToken
    sink: FindingSink
    settings: Mapping[str, JsonValue] = field(default_factory=dict)

    @property
    def pass_id(self) -> str:
        """Return the identifier of the running pass."""

        return self.descriptor.identifier

    def report(
        self,
        file: Path | str | RawFinding,
        line: int | None = None,
        column: int | None = None,
        message: str = "",
        *,
        severity: Severity | str | None = None,
        replacement: Replacement | None = None,
    ) -> bool:
        """Emit one finding into the pass's sink.

        Args:
            file: Reported file, or a fully built :class:`RawFinding`.
            line: One-based line number, when known.
            column: One-based column, when known.
            message: Human-readable message.
            severity: Optional severity reported by the pass.
            replacement: Optional auto-fix edit.

        Returns:
            bool: ``False`` when the run was already finalised and the finding was dropped.
        """

        if isinstance(file, RawFinding):
            return self.sink.emit(file)
        finding = RawFinding(
            file=str(file),
            line=line,
            column=column,
            message=message,
            severity=severity,
            replacement=replacement,
        )
        return self.sink.emit(finding)

    def checkpoint(self) -> None:
        """Raise :class:`~metalint.errors.PassCancelled` when the run is being cancelled."""

        self.token.raise_if_cancelled()

    def iter_files(self, *, parsed_only: bool = True) -> Iterator[SourceFile]:
        """Yield model files, checking for cancellation before each one.

        Args:
            parsed_only: Skip files whose syntax tree could not be built.

        Yields:
            SourceFile: Loaded file.
        """

        for source in self.model.iter_files():
            self.checkpoint()
            if parsed_only and source.tree is None:
                continue
            yield source

    def setting(self, key: str, default: _T) -> _T:
        """Return the pass setting ``key`` coerced to the type of ``default``."""

        value = self.settings.get(key)
        if value is None:
            return default
        if isinstance(default, bool) and not isinstance(value, bool):
            return str(value).strip().lower() in {"1", "true", "yes", "on"}  # type: ignore[return-value]
        try:
            return type(default)(value)  # type: ignore[call-arg]
        except (TypeError, ValueError):
            return default


__all__ = ["PassContext"]
