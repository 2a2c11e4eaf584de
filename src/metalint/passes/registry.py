# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Pass registry providing lookup by identifier or category."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Iterator, Mapping

from .descriptor import PassDescriptor


class PassRegistry(Mapping[str, PassDescriptor]):
    """Central registry for pass descriptors.

    ``PassRegistry`` behaves like a read-only mapping whose keys are pass
    identifiers in registration order. Lookups are case-insensitive.
    """

    def __init__(self, descriptors: Iterable[PassDescriptor] = ()) -> None:
        self._passes: dict[str, PassDescriptor] = {}
        self._by_category: dict[str, list[str]] = defaultdict(list)
        for descriptor in descriptors:
            self.register(descriptor)

    def register(self, descriptor: PassDescriptor) -> None:
        """Register ``descriptor`` enforcing uniqueness by identifier.

        Args:
            descriptor: Pass metadata to insert into the registry.

        Raises:
            ValueError: If a pass with the same identifier is already registered.
        """

        if descriptor.identifier in self._passes:
            raise ValueError(f"Pass '{descriptor.identifier}' already registered")
        self._passes[descriptor.identifier] = descriptor
        for category in descriptor.categories:
            self._by_category[category].append(descriptor.identifier)

    def try_get(self, identifier: str) -> PassDescriptor | None:
        """Return the pass named ``identifier`` when registered, otherwise ``None``."""

        return self._passes.get(identifier.strip().lower())

    def passes(self) -> tuple[PassDescriptor, ...]:
        """Return all descriptors in registration order."""

        return tuple(self._passes.values())

    def by_category(self, category: str) -> tuple[PassDescriptor, ...]:
        """Return the passes tagged with ``category``.

        Args:
            category: Preset tag to look up.

        Returns:
            tuple[PassDescriptor, ...]: Matching passes in registration order,
            empty when the category is unknown.
        """

        names = self._by_category.get(category.strip().lower(), [])
        return tuple(self._passes[name] for name in names)

    def categories(self) -> tuple[str, ...]:
        """Return every known category tag sorted alphabetically."""

        return tuple(sorted(self._by_category))

    def default_enabled(self) -> tuple[PassDescriptor, ...]:
        """Return passes that run without explicit selection."""

        return tuple(descriptor for descriptor in self._passes.values() if descriptor.default_enabled)

    def __len__(self) -> int:
        return len(self._passes)

    def __iter__(self) -> Iterator[str]:
        return iter(self._passes)

    def __getitem__(self, identifier: str) -> PassDescriptor:
        """Return the pass identified by ``identifier``.

        Raises:
            KeyError: If ``identifier`` does not refer to a registered pass.
        """

        return self._passes[identifier.strip().lower()]

    def __contains__(self, identifier: object) -> bool:
        return isinstance(identifier, str) and identifier.strip().lower() in self._passes


__all__ = ["PassRegistry"]
