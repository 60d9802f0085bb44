"""
Concurrent Batch Scheduler

Runs a lazy sequence of zero-argument callables on a bounded pool of worker
threads. Every worker pulls the next callable from one shared cursor, runs
it, and keeps the result in its own list, so the aggregate is grouped by
worker and carries no input order.

An exception escaping a work item aborts the whole batch: the remaining
workers stop pulling, every collected result is discarded and the first
exception is re-raised to the caller.
"""

import concurrent.futures
import logging
import threading
from typing import Callable, Iterable, Iterator, List, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)

_EXHAUSTED = object()


class _SharedCursor:
    """Single-pass iterator that several workers may advance safely"""

    def __init__(self, items: Iterable[Callable[[], T]]):
        self._iterator: Iterator[Callable[[], T]] = iter(items)
        self._lock = threading.Lock()
        self.aborted = threading.Event()

    def next(self):
        if self.aborted.is_set():
            return _EXHAUSTED
        with self._lock:
            return next(self._iterator, _EXHAUSTED)


def _drain(cursor: _SharedCursor) -> List[T]:
    results: List[T] = []
    while True:
        item = cursor.next()
        if item is _EXHAUSTED:
            return results
        try:
            results.append(item())
        except BaseException:
            cursor.aborted.set()
            raise


def run_batch(work_items: Iterable[Callable[[], T]], concurrency: int) -> List[List[T]]:
    """
    Execute every work item with at most `concurrency` in flight.

    Args:
        work_items: Lazy sequence of callables; consumed exactly once
        concurrency: Number of workers (>= 1)

    Returns:
        One result list per worker. Treat the aggregate as unordered.

    Raises:
        ValueError: concurrency is below 1
        Exception: the first error raised by a work item
    """
    if concurrency < 1:
        raise ValueError(f"concurrency must be at least 1, got {concurrency}")

    cursor = _SharedCursor(work_items)
    with concurrent.futures.ThreadPoolExecutor(max_workers=concurrency) as executor:
        futures = [executor.submit(_drain, cursor) for _ in range(concurrency)]
        concurrent.futures.wait(futures)

    errors = [future.exception() for future in futures if future.exception() is not None]
    if errors:
        logger.debug("Batch aborted: %d worker(s) failed", len(errors))
        raise errors[0]

    groups = [future.result() for future in futures]
    logger.debug("Batch complete: %d result(s) from %d worker(s)",
                 sum(len(g) for g in groups), concurrency)
    return groups


def flatten(groups: Iterable[List[T]]) -> List[T]:
    """Flatten worker groups into one unordered list"""
    return [result for group in groups for result in group]
