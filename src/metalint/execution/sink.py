# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Per-pass buffer receiving findings."""

from __future__ import annotations

import logging
import threading

from ..core.models import RawFinding

LOGGER = logging.getLogger(__name__)


class FindingSink:
    """Collect the findings of one pass until the runner seals it.

    Emits after :meth:`seal` are ignored so an abandoned pass cannot change a
    report that has already been assembled.
    """

    def __init__(self, pass_id: str) -> None:
        self._pass_id = pass_id
        self._lock = threading.Lock()
        self._findings: list[RawFinding] = []
        self._sealed = False
        self._late = 0

    def emit(self, finding: RawFinding) -> bool:
        """Append ``finding`` unless the sink is sealed.

        Returns:
            bool: ``True`` when the finding was accepted.
        """

        with self._lock:
            if self._sealed:
                self._late += 1
                accepted = False
            else:
                self._findings.append(finding)
                accepted = True
        if not accepted:
            LOGGER.debug("pass %s emitted after finalisation; finding dropped", self._pass_id)
        return accepted

    def seal(self) -> tuple[RawFinding, ...]:
        """Stop accepting findings and return the collected snapshot."""

        with self._lock:
            self._sealed = True
            return tuple(self._findings)

    @property
    def sealed(self) -> bool:
        """Return ``True`` once :meth:`seal` has been called."""

        with self._lock:
            return self._sealed

    @property
    def late_emits(self) -> int:
        """Return how many findings arrived after sealing."""

        with self._lock:
            return self._late

    def __len__(self) -> int:
        with self._lock:
            return len(self._findings)


__all__ = ["FindingSink"]
