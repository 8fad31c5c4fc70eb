"""Fixed-size worker pool applying one operation across a directory walk."""

from __future__ import annotations

import logging
import queue
import threading
import time
from collections.abc import Iterable
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .filters import DEFAULT_TRASH_MARKER, should_skip
from .walker import WalkError, WalkErrorPolicy

if TYPE_CHECKING:
    from .operations import FileOperation
    from .walker import FileEntry, WalkOutcome

logger = logging.getLogger(__name__)


@dataclass
class RunStats:
    """Aggregate result of one pool run."""

    workers: int
    seen: int = 0
    succeeded: int = 0
    failed: int = 0
    elapsed: float = 0.0
    messages: list[str] = field(default_factory=list)


class Counters:
    """Thread-safe monotonic counters shared by all workers."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.seen = 0
        self.succeeded = 0
        self.failed = 0

    def add_seen(self) -> None:
        with self._lock:
            self.seen += 1

    def add_succeeded(self) -> None:
        with self._lock:
            self.succeeded += 1

    def add_failed(self) -> None:
        with self._lock:
            self.failed += 1


class WorkerPool:
    """Runs a FileOperation over walked entries on a pool of threads.

    The main thread submits one task per walked entry. Each task applies
    the path filter, then the operation, and records the outcome in the
    shared counters and result queue. Messages are only collected once
    every task has finished.
    """

    def __init__(
        self,
        operation: FileOperation,
        *,
        workers: int,
        trash_marker: str = DEFAULT_TRASH_MARKER,
        error_policy: WalkErrorPolicy = WalkErrorPolicy.DROP,
        log: logging.Logger | None = None,
    ) -> None:
        """Initialize the pool.

        Args:
            operation: Operation applied to each eligible file.
            workers: Number of worker threads (at least 1).
            trash_marker: Path substring identifying quarantined files.
            error_policy: What to do with unreadable walk entries.
            log: Logger instance.

        Raises:
            ValueError: If workers is less than 1.

        """
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.operation = operation
        self.workers = workers
        self.trash_marker = trash_marker
        self.error_policy = error_policy
        self.logger = log or logger

        self._counters = Counters()
        self._results: queue.SimpleQueue[str] = queue.SimpleQueue()
        self._errors: queue.SimpleQueue[BaseException] = queue.SimpleQueue()

    def _process(self, entry: FileEntry) -> None:
        """Filter, apply and record a single entry."""
        if should_skip(entry, self.trash_marker):
            return

        self._counters.add_seen()
        result = self.operation.apply(entry)

        if result.success:
            self._counters.add_succeeded()
            self._results.put(result.message)
        if result.error is not None:
            self._counters.add_failed()

    def _record_error(self, future: Future[None]) -> None:
        exc = future.exception()
        if exc is not None:
            self._errors.put(exc)

    def _drain(self) -> list[str]:
        messages: list[str] = []
        while True:
            try:
                messages.append(self._results.get_nowait())
            except queue.Empty:
                return messages

    def run(self, outcomes: Iterable[WalkOutcome]) -> RunStats:
        """Dispatch every walked entry and wait for all of them.

        Args:
            outcomes: Walk results, typically from ``walker.walk``.

        Returns:
            RunStats with counts, messages and elapsed time.

        """
        self._counters = Counters()
        self._results = queue.SimpleQueue()
        self._errors = queue.SimpleQueue()
        start = time.perf_counter()

        with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="media-tidy") as executor:
            for outcome in outcomes:
                if isinstance(outcome, WalkError):
                    self.error_policy.handle(outcome, self.logger)
                    continue
                executor.submit(self._process, outcome.entry).add_done_callback(self._record_error)

        # Programming errors raised inside tasks
        if not self._errors.empty():
            raise self._errors.get_nowait()

        messages = self._drain()
        stats = RunStats(
            workers=self.workers,
            seen=self._counters.seen,
            succeeded=self._counters.succeeded,
            failed=self._counters.failed,
            elapsed=time.perf_counter() - start,
            messages=messages,
        )
        self.logger.debug(
            "Pool finished: seen=%d, succeeded=%d, failed=%d",
            stats.seen,
            stats.succeeded,
            stats.failed,
        )
        return stats
