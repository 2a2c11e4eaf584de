# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Pydantic models describing findings and canonical issues."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .severity import Severity

type JsonScalar = str | int | float | bool | None
type JsonValue = JsonScalar | list[JsonValue] | dict[str, JsonValue]


class InlineFix(BaseModel):
    """Replace ``length`` characters starting at ``start_col`` with ``new_text``."""

    model_config = ConfigDict(frozen=True)

    start_col: int = Field(ge=0)
    length: int = Field(ge=0)
    new_text: str = ""


class Replacement(BaseModel):
    """Auto-fix edit attached to a finding.

    Exactly one of ``delete_line``, ``new_lines`` or ``inline`` must be set.
    """

    model_config = ConfigDict(frozen=True)

    delete_line: bool = False
    new_lines: tuple[str, ...] | None = None
    inline: InlineFix | None = None

    @model_validator(mode="after")
    def _exactly_one_edit(self) -> Replacement:
        chosen = sum((self.delete_line, self.new_lines is not None, self.inline is not None))
        if chosen != 1:
            raise ValueError("replacement must set exactly one of delete_line, new_lines or inline")
        return self


class RawFinding(BaseModel):
    """Pass output captured before normalisation."""

    model_config = ConfigDict(validate_assignment=True)

    file: str
    line: int | None = None
    column: int | None = None
    message: str
    severity: Severity | str | None = None
    replacement: Replacement | None = None
    payload: dict[str, JsonValue] = Field(default_factory=dict)

    @field_validator("file", mode="before")
    @classmethod
    def _coerce_file(cls, value: str | Path) -> str:
        """Accept :class:`Path` values for the reported file.

        Args:
            value: Path or string reported by the pass.

        Returns:
            str: String form of the path.
        """

        return str(value) if isinstance(value, Path) else value


class Issue(BaseModel):
    """Canonical, immutable finding produced by the normaliser."""

    model_config = ConfigDict(frozen=True)

    pass_id: str
    file: str
    line: int = Field(ge=1)
    column: int = Field(default=0, ge=0)
    severity: Severity
    message: str
    replacement: Replacement | None = None
    also_reported_by: tuple[str, ...] = ()
    abs_path: Path | None = Field(default=None, exclude=True)
    order: tuple[int, int] = Field(default=(0, 0), exclude=True)

    @property
    def provenance(self) -> frozenset[str]:
        """Return every pass identifier that reported this issue."""

        return frozenset((self.pass_id, *self.also_reported_by))

    @property
    def location_key(self) -> tuple[str, int, str]:
        """Return the key shared by duplicate findings."""

        return (self.file, self.line, self.message)

    def with_provenance(self, pass_ids: Iterable[str]) -> Issue:
        """Return a copy whose provenance additionally lists ``pass_ids``.

        Args:
            pass_ids: Identifiers of passes that reported the same finding.

        Returns:
            Issue: Updated copy; ``self`` is returned when nothing is new.
        """

        extra = [pid for pid in pass_ids if pid != self.pass_id and pid not in self.also_reported_by]
        if not extra:
            return self
        merged = tuple(dict.fromkeys((*self.also_reported_by, *extra)))
        return self.model_copy(update={"also_reported_by": merged})


__all__ = ["InlineFix", "Issue", "JsonValue", "RawFinding", "Replacement"]
