"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/worker_pool.py
Bounded worker pool for the I/O-bound phases (hashing, file copy).

A fixed number of threads pull work items from one queue and push outcomes
onto one result queue. The calling thread is the only consumer of the result
queue, so aggregation needs no locking, and map() returns only after every
worker has exited.
"""

import os
import queue
import threading
import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')

_SENTINEL = object()


def default_worker_count() -> int:
    """One worker per available processing unit."""
    return os.cpu_count() or 1


@dataclass
class TaskOutcome(Generic[T]):
    """Result of running the pool function on one item."""
    item: T
    value: Any = None
    error: Optional[BaseException] = None
    skipped: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and not self.skipped


class WorkerPool:
    """
    Fixed-size pool of worker threads.

    Usage:
        pool = WorkerPool(max_workers=4)
        outcomes = pool.map(hash_pair, pairs, on_result=collect)
    """

    def __init__(self, max_workers: Optional[int] = None, name: str = "treesync"):
        if max_workers is not None and max_workers < 1:
            raise ValueError("Worker count must be at least 1")
        self.max_workers = max_workers or default_worker_count()
        self.name = name

    def map(
            self,
            func: Callable[[T], Any],
            items: Iterable[T],
            stopped_flag: Optional[Callable[[], bool]] = None,
            on_result: Optional[Callable[[TaskOutcome], None]] = None
    ) -> List[TaskOutcome]:
        """
        Runs func on every item with at most max_workers running at once.

        Exceptions raised by func are captured in TaskOutcome.error. Items not
        yet started when stopped_flag returns True are returned as skipped.
        on_result is called in the calling thread, once per item, in
        completion order.
        """
        work = list(items)
        if not work:
            return []

        work_queue: queue.Queue = queue.Queue()
        result_queue: queue.Queue = queue.Queue()
        for item in work:
            work_queue.put(item)

        worker_count = min(self.max_workers, len(work))
        for _ in range(worker_count):
            work_queue.put(_SENTINEL)

        threads = [
            threading.Thread(
                target=self._worker_loop,
                args=(func, work_queue, result_queue, stopped_flag),
                name=f"{self.name}-{i}",
                daemon=True,
            )
            for i in range(worker_count)
        ]
        for thread in threads:
            thread.start()

        outcomes: List[TaskOutcome] = []
        for _ in range(len(work)):
            outcome = result_queue.get()
            outcomes.append(outcome)
            if on_result:
                on_result(outcome)

        for thread in threads:
            thread.join()

        logger.debug(f"{self.name}: {len(outcomes)} tasks on {worker_count} workers")
        return outcomes

    @staticmethod
    def _worker_loop(func, work_queue: queue.Queue, result_queue: queue.Queue, stopped_flag) -> None:
        while True:
            item = work_queue.get()
            if item is _SENTINEL:
                return
            if stopped_flag and stopped_flag():
                result_queue.put(TaskOutcome(item=item, skipped=True))
                continue
            try:
                result_queue.put(TaskOutcome(item=item, value=func(item)))
            except Exception as e:
                result_queue.put(TaskOutcome(item=item, error=e))
