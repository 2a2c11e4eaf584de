# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Single-assignment holder for the semantic model of one run."""

from __future__ import annotations

import threading
from collections.abc import Sequence

from ..errors import MetalintError
from .builder import SemanticModelLoader
from .model import SemanticModel


class ModelHandle:
    """Build the model at most once and hand it out read-only.

    Every caller of :meth:`get` observes the same model instance, or the
    same load error when construction failed.
    """

    def __init__(self, loader: SemanticModelLoader, roots: Sequence[str]) -> None:
        self._loader = loader
        self._roots = tuple(roots)
        self._lock = threading.Lock()
        self._ready = threading.Event()
        self._model: SemanticModel | None = None
        self._error: MetalintError | None = None
        self._build_count = 0

    @property
    def build_count(self) -> int:
        """Return how many times the loader has been invoked."""

        return self._build_count

    @property
    def ready(self) -> bool:
        """Return ``True`` once construction has completed."""

        return self._ready.is_set()

    def get(self) -> SemanticModel:
        """Return the model, building it on first use.

        Returns:
            SemanticModel: Shared model for the run.

        Raises:
            MetalintError: The load error raised by the first build attempt.
        """

        with self._lock:
            if not self._ready.is_set():
                self._build_count += 1
                try:
                    self._model = self._loader.load(self._roots)
                except MetalintError as exc:
                    self._error = exc
                finally:
                    self._ready.set()
        if self._error is not None:
            raise self._error
        if self._model is None:
            raise RuntimeError("semantic model handle was released")
        return self._model

    def wait(self, timeout: float | None = None) -> bool:
        """Block until construction completes; return whether it did."""

        return self._ready.wait(timeout)

    def release(self) -> None:
        """Drop the reference to the model once a run has finished."""

        with self._lock:
            self._model = None


__all__ = ["ModelHandle"]
