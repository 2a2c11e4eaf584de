# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, MutableMapping
from copy import deepcopy
from enum import Enum
from typing import Final, cast


class Severity(str, Enum):
    """Severity levels normalising different pass vocabularies."""

    ERROR = "error"
    WARNING = "warning"
    NOTICE = "notice"
    NOTE = "note"


SeverityRule = tuple[re.Pattern[str], Severity]
SeverityRuleMap = MutableMapping[str, list[SeverityRule]]
SeverityRuleView = Mapping[str, Iterable[SeverityRule]]


DEFAULT_SEVERITY_RULES: Final[dict[str, list[SeverityRule]]] = {
    "misspell": [(re.compile(r"is a misspelling of"), Severity.NOTICE)],
    "trailing-whitespace": [(re.compile(r"^trailing whitespace$"), Severity.NOTICE)],
}


def coerce_severity(value: Severity | str | None, default: Severity) -> Severity:
    """Return a :class:`Severity` for ``value`` falling back to ``default``.

    Args:
        value: Severity reported by a pass, possibly a loose string or ``None``.
        default: Severity used when ``value`` is missing or unrecognised.

    Returns:
        Severity: Coerced severity value.
    """

    if isinstance(value, Severity):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return Severity(value.strip().lower())
        except ValueError:
            return default
    return default


def apply_severity_rules(
    pass_id: str,
    message: str,
    severity: Severity,
    *,
    rules: SeverityRuleView | None = None,
) -> Severity:
    """Apply pass-specific overrides to an issue severity.

    Args:
        pass_id: Identifier of the pass that produced the issue.
        message: Issue message used when matching rules.
        severity: Baseline severity after defaulting.
        rules: Optional overrides mapping per-pass regex patterns to severities.

    Returns:
        Severity: Overridden severity when a rule matches, otherwise the original severity.
    """

    active_rules: SeverityRuleView = rules if rules is not None else DEFAULT_SEVERITY_RULES
    candidates = active_rules.get(pass_id, cast("Iterable[SeverityRule]", ()))
    for pattern, sev in candidates:
        if pattern.search(message or ""):
            return Severity(sev)
    return severity


def add_custom_rule(spec: str, *, rules: SeverityRuleMap) -> str | None:
    """Add a custom severity override defined as ``pass:regex=level``.

    Args:
        spec: Rule specification using ``pass:regex=severity`` format.
        rules: Override mapping to update.

    Returns:
        str | None: Error message when parsing fails, otherwise ``None``.
    """

    if _RULE_PASS_SEPARATOR not in spec or _RULE_LEVEL_SEPARATOR not in spec:
        return f"invalid rule '{spec}': missing ':' or '=' separators"
    pass_id, rest = spec.split(_RULE_PASS_SEPARATOR, 1)
    regex, level_str = rest.rsplit(_RULE_LEVEL_SEPARATOR, 1)
    try:
        level = Severity(level_str.strip().lower())
    except ValueError as exc:
        return f"invalid severity level '{level_str}': {exc}"
    try:
        compiled = re.compile(regex)
    except re.error as exc:
        return f"invalid rule pattern '{regex}': {exc}"
    rules.setdefault(pass_id.strip().lower(), []).append((compiled, level))
    return None


def build_severity_rules(custom_rules: Iterable[str]) -> SeverityRuleMap:
    """Return severity rules including the supplied custom overrides.

    Custom rules are consulted before the defaults for the same pass.

    Args:
        custom_rules: Rule strings that should augment the default map.

    Returns:
        SeverityRuleMap: Map containing both custom and default rules.

    Raises:
        ValueError: If a custom rule cannot be parsed.
    """

    custom: SeverityRuleMap = {}
    for rule in custom_rules:
        error = add_custom_rule(rule, rules=custom)
        if error is not None:
            raise ValueError(error)
    merged: SeverityRuleMap = deepcopy(DEFAULT_SEVERITY_RULES)
    for pass_id, entries in custom.items():
        merged[pass_id] = [*entries, *merged.get(pass_id, [])]
    return merged


_RULE_PASS_SEPARATOR: Final[str] = ":"
_RULE_LEVEL_SEPARATOR: Final[str] = "="


__all__ = [
    "DEFAULT_SEVERITY_RULES",
    "Severity",
    "SeverityRule",
    "SeverityRuleMap",
    "SeverityRuleView",
    "add_custom_rule",
    "apply_severity_rules",
    "build_severity_rules",
    "coerce_severity",
]
