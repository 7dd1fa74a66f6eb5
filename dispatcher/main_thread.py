"""Submission target for work that must run on the main (event loop) thread"""
import asyncio
import threading
from collections import deque
from collections.abc import Callable

from loguru import logger


class MainThreadExecutor:
    """Hands tasks to the thread running the bound asyncio event loop.

    Tasks submitted before a loop is bound are held and flushed, in order, by bind().
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop
        self._pending: deque[Callable[[], object]] = deque()
        self._lock = threading.Lock()

    @property
    def loop(self) -> asyncio.AbstractEventLoop | None:
        return self._loop

    def bind(self, loop: asyncio.AbstractEventLoop) -> None:
        """Attach the loop whose thread acts as the main thread"""
        flushed = 0
        with self._lock:
            # A task leaves the queue only once the loop accepted it
            while self._pending:
                loop.call_soon_threadsafe(self._pending[0])
                self._pending.popleft()
                flushed += 1
            self._loop = loop
        logger.debug(f"Main thread executor bound to {loop!r}, flushed {flushed} pending tasks")

    def unbind(self) -> None:
        with self._lock:
            self._loop = None

    def execute(self, task: Callable[[], object]) -> None:
        with self._lock:
            if self._loop is None:
                self._pending.append(task)
                return
            self._loop.call_soon_threadsafe(task)

    def __repr__(self) -> str:
        return f"MainThreadExecutor(loop={self._loop!r}, pending={len(self._pending)})"
