"""Dispatch context: the cache and main-thread target shared by one process"""
import threading

from loguru import logger

from .cache import PoolCache
from .config import DispatchSettings
from .main_thread import MainThreadExecutor
from .resolver import BackgroundPoolResolver
from .thread_factory import ThreadGroup
from .types import ResolverConfig


class DispatchContext:
    """Owns one pool cache and one main-thread executor"""

    def __init__(self, settings: DispatchSettings | None = None):
        self.settings = settings or DispatchSettings()
        self.thread_group = ThreadGroup(self.settings.thread_group_name)
        self.cache = PoolCache(group=self.thread_group, thread_name_suffix=self.settings.thread_name_suffix)
        self.main_thread = MainThreadExecutor()

    def on_main_thread(self) -> MainThreadExecutor:
        """Use for tasks that need to run on the main thread"""
        return self.main_thread

    def on_background_thread(self) -> BackgroundPoolResolver:
        """Use for tasks that should run on a background pool; returns a fresh resolver"""
        config = ResolverConfig(
            pool_size=self.settings.default_pool_size,
            task_type=self.settings.default_task_type,
            stack_size=self.settings.default_stack_size,
        )
        return BackgroundPoolResolver(self.cache, config)


_default_context: DispatchContext | None = None
_default_context_lock = threading.Lock()


def get_default_context() -> DispatchContext:
    """The process-wide context, created on first use"""
    global _default_context  # noqa: PLW0603
    if _default_context is None:
        with _default_context_lock:
            if _default_context is None:
                _default_context = DispatchContext()
                logger.debug("Created default dispatch context")
    return _default_context


def on_main_thread() -> MainThreadExecutor:
    return get_default_context().on_main_thread()


def on_background_thread() -> BackgroundPoolResolver:
    return get_default_context().on_background_thread()
