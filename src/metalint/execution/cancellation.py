# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Cooperative cancellation shared between the runner and its passes."""

from __future__ import annotations

import threading

from ..errors import PassCancelled


class CancellationToken:
    """One-shot signal observed by passes at their checkpoints."""

    __slots__ = ("_event", "_reason")

    def __init__(self) -> None:
        self._event = threading.Event()
        self._reason = ""

    def cancel(self, reason: str = "cancelled") -> None:
        """Trigger the token; later calls keep the first reason."""

        if not self._event.is_set():
            self._reason = reason
            self._event.set()

    @property
    def cancelled(self) -> bool:
        """Return ``True`` once :meth:`cancel` has been called."""

        return self._event.is_set()

    @property
    def reason(self) -> str:
        """Return the reason given to :meth:`cancel`."""

        return self._reason

    def wait(self, timeout: float | None = None) -> bool:
        """Sleep up to ``timeout`` seconds, returning early when cancelled.

        Returns:
            bool: ``True`` when the token was cancelled.
        """

        return self._event.wait(timeout)

    def raise_if_cancelled(self) -> None:
        """Raise :class:`PassCancelled` when the token has been triggered."""

        if self._event.is_set():
            raise PassCancelled(self._reason)


__all__ = ["CancellationToken"]
