"""Bounded worker pool draining a shared FIFO of URL records."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, wait
from threading import Lock
from typing import Callable, Sequence

import structlog

from ..models import FetchOutcome, UrlRecord

ResultCallback = Callable[[UrlRecord, FetchOutcome], None]


class WorkQueue:
    """Hand out items one at a time, in order, to competing threads."""

    def __init__(self, items: Sequence[UrlRecord]) -> None:
        self._items = items
        self._cursor = 0
        self._stopped = False
        self._lock = Lock()

    def stop(self) -> None:
        """Stop handing out items; claims already made are unaffected."""

        with self._lock:
            self._stopped = True

    def claim(self) -> tuple[int, UrlRecord] | None:
        with self._lock:
            if self._stopped or self._cursor >= len(self._items):
                return None
            index = self._cursor
            self._cursor += 1
        return index, self._items[index]


class WorkerPool:
    """Run a handler over every record with at most ``max_workers`` threads.

    Each worker repeatedly claims the next unclaimed record and writes the
    handler's outcome into the slot reserved for that record, so slots are
    written exactly once and never contended. Locks are never held while a
    handler runs.
    """

    def __init__(
        self,
        max_workers: int,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        self.max_workers = max_workers
        self.logger = logger or structlog.get_logger("title_grabber.pool")

    def run(
        self,
        records: Sequence[UrlRecord],
        handler: Callable[[UrlRecord], FetchOutcome],
        on_result: ResultCallback | None = None,
    ) -> dict[int, FetchOutcome]:
        """Block until every record has an outcome; return ordinal -> outcome.

        A handler exception stops further claims and is re-raised once the
        in-flight records finish.
        """

        if not records:
            return {}
        queue = WorkQueue(records)
        slots: list[FetchOutcome | None] = [None] * len(records)
        callback_lock = Lock()

        def worker() -> int:
            processed = 0
            while True:
                claimed = queue.claim()
                if claimed is None:
                    return processed
                index, record = claimed
                try:
                    outcome = handler(record)
                except BaseException:
                    queue.stop()
                    raise
                slots[index] = outcome
                processed += 1
                if on_result is not None:
                    with callback_lock:
                        on_result(record, outcome)

        workers = min(self.max_workers, len(records))
        self.logger.debug("pool_start", workers=workers, urls=len(records))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="grabber") as executor:
            futures = [executor.submit(worker) for _ in range(workers)]
            wait(futures)
        # Re-raise the first unexpected handler error
        processed = [future.result() for future in futures]
        self.logger.debug("pool_done", per_worker=processed)

        results: dict[int, FetchOutcome] = {}
        for record, outcome in zip(records, slots):
            if outcome is None:
                raise RuntimeError(f"No outcome recorded for {record.raw_url}")
            results[record.source_line] = outcome
        return results


__all__ = ["ResultCallback", "WorkQueue", "WorkerPool"]
