"""Fixed-size background worker pool"""
import queue
import threading
from collections.abc import Callable
from datetime import datetime

from loguru import logger

from .thread_factory import WorkerThreadFactory
from .types import PoolIdentity, PoolStats


class WorkerPool:
    """A fixed number of worker threads draining one unbounded FIFO queue.

    All workers are started on construction and live until the process exits.
    With a single worker, tasks run in submission order.
    """

    def __init__(self, identity: PoolIdentity, thread_factory: WorkerThreadFactory):
        self.identity = identity
        self.stack_size = thread_factory.stack_size
        self.created_at = datetime.now()

        self._queue: queue.SimpleQueue[Callable[[], object]] = queue.SimpleQueue()
        self._stats_lock = threading.Lock()
        self._completed = 0
        self._failed = 0

        self.workers: list[threading.Thread] = [thread_factory.new_thread(self._work_loop) for _ in range(identity.concurrency)]

    def execute(self, task: Callable[[], object]) -> None:
        """Enqueue a task; returns without waiting for it to run"""
        self._queue.put(task)

    def _work_loop(self) -> None:
        """Run queued tasks forever on the current worker thread"""
        while True:
            task = self._queue.get()
            try:
                task()
            except Exception:
                logger.exception(f"Task {task!r} failed on {threading.current_thread().name} ({self.identity})")
                with self._stats_lock:
                    self._failed += 1
            else:
                with self._stats_lock:
                    self._completed += 1

    @property
    def thread_names(self) -> list[str]:
        return [t.name for t in self.workers]

    def get_stats(self) -> PoolStats:
        """Get current pool statistics"""
        with self._stats_lock:
            completed, failed = self._completed, self._failed
        return PoolStats(
            task_type=self.identity.task_type,
            concurrency=self.identity.concurrency,
            stack_size=self.stack_size,
            worker_threads=self.thread_names,
            live_workers=sum(1 for t in self.workers if t.is_alive()),
            queued_tasks=self._queue.qsize(),
            completed_tasks=completed,
            failed_tasks=failed,
            created_at=self.created_at,
            uptime_seconds=(datetime.now() - self.created_at).total_seconds(),
        )

    def __repr__(self) -> str:
        return f"WorkerPool({self.identity}, workers={self.thread_names})"
