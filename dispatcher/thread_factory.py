"""Worker thread creation with consistent naming and stack sizes"""
import itertools
import threading
import weakref
from collections.abc import Callable

from loguru import logger

# Shared by every factory so thread names stay unique for the process lifetime
_sequence = itertools.count(1)
_sequence_lock = threading.Lock()

# threading.stack_size() is process-global; hold this while it is switched
_stack_size_lock = threading.Lock()

# CPython rejects non-zero stack sizes below 32 KiB; some platforms also want whole pages
MIN_STACK_SIZE = 32 * 1024
STACK_PAGE_SIZE = 4096


def next_sequence() -> int:
    """Return the next process-wide worker thread sequence number"""
    with _sequence_lock:
        return next(_sequence)


def effective_stack_size(stack_size: int) -> int:
    """Stack size actually requested from the runtime; 0 keeps the default"""
    if stack_size <= 0:
        return 0
    size = max(stack_size, MIN_STACK_SIZE)
    return -(-size // STACK_PAGE_SIZE) * STACK_PAGE_SIZE


class ThreadGroup:
    """A named set of worker threads"""

    def __init__(self, name: str):
        self.name = name
        self._threads: weakref.WeakSet[threading.Thread] = weakref.WeakSet()
        self._lock = threading.Lock()

    def add(self, thread: threading.Thread) -> None:
        with self._lock:
            self._threads.add(thread)

    def threads(self) -> list[threading.Thread]:
        """Live threads of this group"""
        with self._lock:
            return [t for t in self._threads if t.is_alive()]

    def active_count(self) -> int:
        return len(self.threads())

    def __repr__(self) -> str:
        return f"ThreadGroup(name={self.name!r}, active={self.active_count()})"


class WorkerThreadFactory:
    """Start daemon threads named '{sequence}@{suffix}' in one thread group"""

    def __init__(self, stack_size: int = 0, group: ThreadGroup | None = None, suffix: str = "dispatcher"):
        self.stack_size = stack_size
        self.group = group or default_group()
        self.suffix = suffix

    def new_thread(self, target: Callable[[], None]) -> threading.Thread:
        """Create, register and start a worker thread running target"""
        name = f"{next_sequence()}@{self.suffix}"
        thread = threading.Thread(target=target, name=name, daemon=True)
        self.group.add(thread)

        requested = effective_stack_size(self.stack_size)
        with _stack_size_lock:
            try:
                previous = threading.stack_size(requested)
            except ValueError as e:
                # The size is a hint; an unsupported one falls back to the default
                logger.warning(f"Stack size {self.stack_size} not supported ({e}); starting {name} with the default")
                previous = threading.stack_size(0)
            try:
                thread.start()
            finally:
                threading.stack_size(previous)

        logger.debug(f"Started worker thread {name} in group {self.group.name}")
        return thread


_default_group: ThreadGroup | None = None
_default_group_lock = threading.Lock()


def default_group() -> ThreadGroup:
    """The process-wide group worker threads join unless told otherwise"""
    global _default_group  # noqa: PLW0603
    with _default_group_lock:
        if _default_group is None:
            _default_group = ThreadGroup("DispatcherGroup")
        return _default_group
