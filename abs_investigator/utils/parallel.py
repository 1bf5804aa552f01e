"""
Concurrent fan-out of independent adapter calls.

One investigation step dispatches its adapter calls together, then waits
until every call has finished, timed out, or the caller's cancellation event
is set. Each call gets its own timeout, counted from the moment a worker
starts it; time spent queued behind other calls, or waiting on a provider's
rate limiter (see ``untimed``), does not count. A call that overruns is
abandoned and reported as timed out; it never blocks the step.

Worker threads only run the calls. Results come back to the calling thread
as ``CallOutcome`` values, which the caller merges one by one.
"""

import logging
import sys
import threading
import time
from collections.abc import Callable, Hashable, Iterator, Sequence
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from tqdm import tqdm

from abs_investigator.constants import DEFAULT_ADAPTER_TIMEOUT, DEFAULT_WORKERS
from abs_investigator.utils.stats import ExecutionStats

logger = logging.getLogger(__name__)

# How often a waiting step re-checks deadlines and the cancellation event
POLL_INTERVAL_SECONDS = 0.05


@dataclass
class CallOutcome:
    """Result of one dispatched call."""

    key: Hashable
    value: Any = None
    error: Exception | None = None
    timed_out: bool = False
    cancelled: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and not self.timed_out and not self.cancelled

    @property
    def failed(self) -> bool:
        """True when the call errored or ran out of time."""
        return self.error is not None or self.timed_out


class _CallClock:
    """Start time of one running call; None while not started or paused."""

    def __init__(self):
        self.started: float | None = None

    def overdue(self, now: float, timeout: float) -> bool:
        started = self.started
        return started is not None and now - started >= timeout


_local = threading.local()


@contextmanager
def untimed() -> Iterator[None]:
    """
    Exclude the enclosed block from the running call's timeout.

    Used around rate-limiter waits: the call's clock stops on entry and
    restarts from zero on exit. Outside a fan-out call this does nothing.
    """
    clock = getattr(_local, "clock", None)
    if clock is None:
        yield
        return
    clock.started = None
    try:
        yield
    finally:
        clock.started = time.monotonic()


def _timed(fn: Callable[[], Any], clock: _CallClock) -> Callable[[], Any]:
    def run():
        _local.clock = clock
        clock.started = time.monotonic()
        try:
            return fn()
        finally:
            _local.clock = None

    return run


def fan_out(
    calls: Sequence[tuple[Hashable, Callable[[], Any]]],
    timeout: float = DEFAULT_ADAPTER_TIMEOUT,
    max_workers: int = DEFAULT_WORKERS,
    cancel_event: threading.Event | None = None,
    desc: str = "Querying",
    show_progress: bool = False,
    stats: ExecutionStats | None = None,
) -> list[CallOutcome]:
    """
    Run independent calls concurrently and collect their outcomes.

    Args:
        calls: ``(key, zero-argument callable)`` pairs
        timeout: Seconds each call may run, from when a worker starts it
        max_workers: Thread pool size
        cancel_event: When set, stop waiting and abandon unfinished calls
        desc: Progress bar description
        show_progress: Whether to show a tqdm progress bar
        stats: Optional tracker; receives completed/failed/timed_out/cancelled

    Returns:
        One CallOutcome per call, in submission order. Exceptions raised by a
        call are captured in ``CallOutcome.error`` and never re-raised.

    Abandoned calls keep their worker thread until they return. Once every
    worker is held by one, calls still queued can never start and are
    reported as timed out too.
    """
    if not calls:
        return []

    if cancel_event is not None and cancel_event.is_set():
        outcomes = [CallOutcome(key=key, cancelled=True) for key, _ in calls]
        _record(outcomes, stats)
        return outcomes

    clocks = [_CallClock() for _ in calls]
    workers = max(1, min(max_workers, len(calls)))
    executor = ThreadPoolExecutor(max_workers=workers)
    futures: list[Future] = [
        executor.submit(_timed(fn, clock)) for (_, fn), clock in zip(calls, clocks)
    ]
    clock_of = dict(zip(futures, clocks))
    pending = set(futures)
    expired: set[Future] = set()
    was_cancelled = False

    progress_bar = None
    if show_progress:
        progress_bar = tqdm(
            total=len(futures), desc=desc, unit="call", file=sys.stderr, leave=False
        )

    try:
        while pending:
            if cancel_event is not None and cancel_event.is_set():
                was_cancelled = True
                break
            now = time.monotonic()
            overdue = {f for f in pending if not f.done() and clock_of[f].overdue(now, timeout)}
            if overdue:
                expired |= overdue
                pending -= overdue
                if progress_bar:
                    progress_bar.update(len(overdue))
                continue
            if sum(1 for f in expired if not f.done()) >= workers:
                break
            done, pending = wait(
                pending, timeout=POLL_INTERVAL_SECONDS, return_when=FIRST_COMPLETED
            )
            if progress_bar and done:
                progress_bar.update(len(done))
    finally:
        if progress_bar:
            progress_bar.close()
        # Unstarted calls are dropped; running ones finish in the background
        executor.shutdown(wait=False, cancel_futures=True)

    outcomes = []
    for (key, _), future in zip(calls, futures):
        if future in expired:
            logger.debug(f"{desc}: call {key!r} timed out after {timeout}s")
            outcomes.append(CallOutcome(key=key, timed_out=True))
        elif future.done() and not future.cancelled():
            error = future.exception()
            if error is not None:
                logger.debug(f"{desc}: call {key!r} failed: {error}")
                outcomes.append(CallOutcome(key=key, error=error))
            else:
                outcomes.append(CallOutcome(key=key, value=future.result()))
        elif was_cancelled:
            outcomes.append(CallOutcome(key=key, cancelled=True))
        else:
            logger.debug(f"{desc}: call {key!r} did not finish within the step")
            outcomes.append(CallOutcome(key=key, timed_out=True))

    _record(outcomes, stats)
    return outcomes


def _record(outcomes: list[CallOutcome], stats: ExecutionStats | None) -> None:
    if stats is None:
        return
    for outcome in outcomes:
        if outcome.cancelled:
            stats.increment("cancelled")
        elif outcome.timed_out:
            stats.increment("timed_out")
        elif outcome.error is not None:
            stats.increment("failed")
        else:
            stats.increment("completed")
