# src/rargs/core/utils/parallel_workers.py
from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional, TYPE_CHECKING

from tqdm import tqdm

if TYPE_CHECKING:
    from rargs.core.xngine import ExecuteEngine

logger = logging.getLogger(__name__)

# Lines allowed in flight per worker before the reader blocks
PENDING_PER_WORKER = 4


def run_line_worker(engine: "ExecuteEngine", line: str, line_num: int) -> Optional[int]:
    """
    Worker function running the command for one line.
    Returns the command's exit status, or None if expansion itself failed.
    """
    try:
        return engine.execute_for_input(line, line_num)
    except Exception as e:
        logger.error("WORKER ERROR on line %d (%r): %s", line_num, line, e, exc_info=True)
        return None


class LineDispatcher:
    """
    Hands lines to a fixed-size thread pool.

    Lines are submitted in input order; they may finish in any order. Submission
    blocks once ``max_pending`` lines are queued or running, so a fast reader
    does not pull the whole input into memory.
    """

    def __init__(
            self,
            engine: "ExecuteEngine",
            threads: int,
            *,
            show_progress: bool = False,
            max_pending: Optional[int] = None,
    ) -> None:
        self.engine = engine
        self.threads = max(1, int(threads))
        self.max_pending = max_pending or self.threads * PENDING_PER_WORKER
        self.show_progress = show_progress

        self.submitted = 0
        self.completed = 0
        self.errors = 0

        self._slots = threading.BoundedSemaphore(self.max_pending)
        self._lock = threading.Lock()
        self._pool: Optional[ThreadPoolExecutor] = None
        self._pbar: Optional[tqdm] = None

    def __enter__(self) -> "LineDispatcher":
        self._pool = ThreadPoolExecutor(max_workers=self.threads, thread_name_prefix="rargs-worker")
        self._pbar = tqdm(desc="Running", unit=" line", disable=not self.show_progress)
        logger.debug("Started pool with %d worker(s), %d pending slot(s).", self.threads, self.max_pending)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.join()

    def submit(self, line: str, line_num: int) -> Future:
        if self._pool is None:
            raise RuntimeError("LineDispatcher used outside of its 'with' block")
        self._slots.acquire()
        try:
            fut = self._pool.submit(run_line_worker, self.engine, line, line_num)
        except BaseException:
            self._slots.release()
            raise
        self.submitted += 1
        fut.add_done_callback(self._on_done)
        return fut

    def _on_done(self, fut: Future) -> None:
        self._slots.release()
        with self._lock:
            self.completed += 1
            if fut.cancelled() or fut.exception() is not None or fut.result() is None:
                self.errors += 1
            if self._pbar is not None:
                self._pbar.update(1)

    def join(self) -> None:
        """Waits for every submitted line to finish and releases the pool."""
        if self._pool is not None:
            self._pool.shutdown(wait=True)
            self._pool = None
        if self._pbar is not None:
            self._pbar.close()
            self._pbar = None
        logger.debug(
            "Dispatcher finished: %d submitted, %d completed, %d error(s).",
            self.submitted, self.completed, self.errors,
        )
