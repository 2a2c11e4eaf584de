# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Concurrent pass execution under a global deadline."""

from __future__ import annotations

import logging
import queue
import threading
import time
import traceback
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Final

from ..core.models import JsonValue, RawFinding
from ..errors import PassCancelled
from ..loader.model import SemanticModel
from ..passes.descriptor import PassDescriptor
from .cancellation import CancellationToken
from .context import PassContext
from .sink import FindingSink

LOGGER = logging.getLogger(__name__)

_DEADLINE_REASON: Final[str] = "deadline exceeded"


class PassStatus(str, Enum):
    """Terminal state of one planned pass."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"
    ABANDONED = "abandoned"
    SKIPPED = "skipped"


@dataclass(frozen=True, slots=True)
class PassError:
    """Exception captured at the pass boundary."""

    kind: str
    message: str
    traceback: str = ""

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}" if self.message else self.kind


@dataclass(frozen=True, slots=True)
class PassReport:
    """Outcome of one pass together with the findings it emitted."""

    descriptor: PassDescriptor
    status: PassStatus
    findings: tuple[RawFinding, ...] = ()
    error: PassError | None = None
    elapsed_s: float = 0.0
    late_emits: int = 0

    @property
    def pass_id(self) -> str:
        """Return the identifier of the reported pass."""

        return self.descriptor.identifier


@dataclass(frozen=True, slots=True)
class RunnerResult:
    """Per-pass reports in plan order plus run-level signals."""

    reports: tuple[PassReport, ...]
    deadline_exceeded: bool = False
    elapsed_s: float = 0.0

    @property
    def all_failed(self) -> bool:
        """Return ``True`` when at least one pass ran and every pass failed."""

        return bool(self.reports) and all(report.status is PassStatus.FAILED for report in self.reports)

    @property
    def failed(self) -> tuple[PassReport, ...]:
        """Return reports of passes that raised."""

        return tuple(report for report in self.reports if report.status is PassStatus.FAILED)

    def finding_count(self) -> int:
        """Return the total number of raw findings across passes."""

        return sum(len(report.findings) for report in self.reports)


class _CompletionLatch:
    def __init__(self, count: int) -> None:
        self._remaining = count
        self._condition = threading.Condition()

    def complete(self) -> None:
        with self._condition:
            self._remaining -= 1
            if self._remaining <= 0:
                self._condition.notify_all()

    def wait(self, timeout: float | None) -> bool:
        with self._condition:
            return self._condition.wait_for(lambda: self._remaining <= 0, timeout=timeout)


@dataclass(slots=True)
class _Slot:
    descriptor: PassDescriptor
    sink: FindingSink
    lock: threading.Lock = field(default_factory=threading.Lock)
    state: str = "pending"
    sealed: bool = False
    status: PassStatus | None = None
    error: PassError | None = None
    started: float = 0.0
    elapsed: float = 0.0


class PassRunner:
    """Execute passes on a bounded pool of daemon worker threads.

    The runner never waits on a pass beyond ``deadline_s + grace_s``. Passes
    that have not started when the deadline fires are skipped, running passes
    are asked to stop through their :class:`CancellationToken`, and passes that
    ignore the request for the whole grace window are abandoned with the
    findings they had emitted so far.
    """

    def __init__(self, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock

    def run(
        self,
        passes: Sequence[PassDescriptor],
        model: SemanticModel,
        *,
        jobs: int,
        deadline_s: float | None,
        grace_s: float,
        settings: Mapping[str, Mapping[str, JsonValue]] | None = None,
    ) -> RunnerResult:
        """Run ``passes`` against ``model``.

        Args:
            passes: Planned passes in plan order.
            model: Shared read-only semantic model.
            jobs: Maximum number of passes running at once.
            deadline_s: Wall-clock budget for the whole run, ``None`` for none.
            grace_s: Time granted to cancelled passes before they are abandoned.
            settings: Per-pass settings keyed by pass identifier.

        Returns:
            RunnerResult: One report per planned pass, in plan order.
        """

        started = self._clock()
        if not passes:
            return RunnerResult(reports=(), deadline_exceeded=False, elapsed_s=0.0)

        token = CancellationToken()
        slots = [_Slot(descriptor=descriptor, sink=FindingSink(descriptor.identifier)) for descriptor in passes]
        latch = _CompletionLatch(len(slots))
        work: queue.SimpleQueue[_Slot | None] = queue.SimpleQueue()
        for slot in slots:
            work.put(slot)
        workers = max(1, min(jobs, len(slots)))
        for _ in range(workers):
            work.put(None)

        pass_settings = settings or {}
        for index in range(workers):
            thread = threading.Thread(
                target=self._worker,
                args=(work, model, token, latch, pass_settings),
                name=f"metalint-worker-{index}",
                daemon=True,
            )
            thread.start()

        deadline_exceeded = False
        if not latch.wait(deadline_s):
            deadline_exceeded = True
            LOGGER.debug("deadline of %ss exceeded; cancelling running passes", deadline_s)
            token.cancel(_DEADLINE_REASON)
            if not latch.wait(grace_s):
                LOGGER.debug("grace window of %ss elapsed; abandoning unfinished passes", grace_s)

        reports = tuple(self._finalise(slot) for slot in slots)
        return RunnerResult(
            reports=reports,
            deadline_exceeded=deadline_exceeded,
            elapsed_s=self._clock() - started,
        )

    def _worker(
        self,
        work: queue.SimpleQueue[_Slot | None],
        model: SemanticModel,
        token: CancellationToken,
        latch: _CompletionLatch,
        settings: Mapping[str, Mapping[str, JsonValue]],
    ) -> None:
        while True:
            slot = work.get()
            if slot is None:
                return
            with slot.lock:
                runnable = not (token.cancelled or slot.sealed)
                if runnable:
                    slot.state = "running"
                    slot.started = self._clock()
            try:
                if runnable:
                    self._execute(slot, model, token, settings)
            finally:
                latch.complete()

    def _execute(
        self,
        slot: _Slot,
        model: SemanticModel,
        token: CancellationToken,
        settings: Mapping[str, Mapping[str, JsonValue]],
    ) -> None:
        descriptor = slot.descriptor
        context = PassContext(
            descriptor=descriptor,
            model=model,
            token=token,
            sink=slot.sink,
            settings=settings.get(descriptor.identifier, {}),
        )
        status = PassStatus.SUCCEEDED
        error: PassError | None = None
        try:
            returned = descriptor.run(context)
            if returned is not None:
                for finding in returned:
                    token.raise_if_cancelled()
                    slot.sink.emit(finding)
        except PassCancelled:
            status = PassStatus.CANCELLED
        except BaseException as exc:  # noqa: BLE001 - SystemExit from a pass fails that pass only
            status = PassStatus.FAILED
            error = PassError(kind=type(exc).__name__, message=str(exc), traceback=traceback.format_exc())
            LOGGER.warning("pass %s failed: %s", descriptor.identifier, error)
        finally:
            with slot.lock:
                if not slot.sealed:
                    slot.state = "done"
                    slot.status = status
                    slot.error = error
                    slot.elapsed = self._clock() - slot.started

    def _finalise(self, slot: _Slot) -> PassReport:
        with slot.lock:
            slot.sealed = True
            findings = slot.sink.seal()
            if slot.state == "pending":
                status = PassStatus.SKIPPED
                elapsed = 0.0
            elif slot.state == "running":
                status = PassStatus.ABANDONED
                elapsed = self._clock() - slot.started
                LOGGER.warning(
                    "pass %s did not stop within the grace window; keeping %d finding(s)",
                    slot.descriptor.identifier,
                    len(findings),
                )
            else:
                status = slot.status or PassStatus.SUCCEEDED
                elapsed = slot.elapsed
            return PassReport(
                descriptor=slot.descriptor,
                status=status,
                findings=findings,
                error=slot.error,
                elapsed_s=elapsed,
                late_emits=slot.sink.late_emits,
            )


__all__ = ["PassError", "PassReport", "PassRunner", "PassStatus", "RunnerResult"]
