"""
Fixed-size worker pool with barrier-joined batch dispatch.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Callable, Iterable, List, Sequence, Tuple

logger = logging.getLogger(__name__)


def chunk_bounds(n_items: int, chunk_size: int) -> List[Tuple[int, int]]:
    """
    Split ``range(n_items)`` into contiguous ``(start, stop)`` ranges.

    Every range has length ``chunk_size`` except possibly the last, which
    holds the remainder. The result depends only on its arguments.

    Args:
        n_items: Sequence length (>= 0)
        chunk_size: Range length (>= 1)

    Returns:
        bounds: List of (start, stop) index pairs covering [0, n_items)
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
    if n_items < 0:
        raise ValueError(f"n_items must be >= 0, got {n_items}")

    return [(start, min(start + chunk_size, n_items))
            for start in range(0, n_items, chunk_size)]


class WorkerPool:
    """
    Fixed number of worker threads, created once and reused every tick.

    The only coordination primitive is ``run_batch``: submit a batch of
    tasks and block until all of them have finished.

    Usage:
        with WorkerPool(4) as pool:
            pool.run_batch(work, [(a,), (b,), (c,)])
    """

    def __init__(self, num_workers: int):
        """
        Args:
            num_workers: Thread count (>= 1)

        Raises:
            ValueError: If num_workers < 1
        """
        if num_workers < 1:
            raise ValueError(f"num_workers must be >= 1, got {num_workers}")

        self.num_workers = num_workers
        self._executor = ThreadPoolExecutor(
            max_workers=num_workers, thread_name_prefix="collisim-worker"
        )
        self._closed = False

        logger.debug(f"Started worker pool with {num_workers} threads")

    def run_batch(self, fn: Callable, tasks: Iterable[Sequence]) -> list:
        """
        Run ``fn(*args)`` for every args tuple in ``tasks`` and wait for all.

        Tasks are submitted in order. The call returns only after every
        task has completed, even if one of them failed; the first failure
        (in submission order) is then re-raised.

        Args:
            fn: Callable executed on a worker thread
            tasks: Iterable of positional-argument tuples

        Returns:
            results: Return values in submission order

        Raises:
            RuntimeError: If the pool has been shut down
        """
        if self._closed:
            raise RuntimeError("WorkerPool has been shut down")

        futures = [self._executor.submit(fn, *args) for args in tasks]
        wait(futures)

        return [future.result() for future in futures]

    def shutdown(self):
        """Stop the worker threads after pending tasks drain."""
        if not self._closed:
            self._closed = True
            self._executor.shutdown(wait=True)
            logger.debug("Worker pool shut down")

    @property
    def closed(self):
        return self._closed

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.shutdown()
        return False

    def __repr__(self):
        state = "closed" if self._closed else "open"
        return f"WorkerPool(num_workers={self.num_workers}, {state})"
