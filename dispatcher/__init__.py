"""Task dispatch to the main thread or to cached background worker pools"""
from .cache import PoolCache
from .config import DispatchSettings, load_settings
from .context import DispatchContext, get_default_context, on_background_thread, on_main_thread
from .exceptions import DispatchError, InvalidConfigurationError
from .main_thread import MainThreadExecutor
from .pool import WorkerPool
from .resolver import BackgroundPoolResolver, resolve_pool
from .thread_factory import ThreadGroup, WorkerThreadFactory
from .types import (
    DEFAULT_POOL_SIZE,
    DEFAULT_STACK_SIZE,
    DEFAULT_TASK_TYPE,
    Cancelable,
    PoolIdentity,
    PoolStats,
    Preparable,
    ResolverConfig,
)

__all__ = [
    "DEFAULT_POOL_SIZE",
    "DEFAULT_STACK_SIZE",
    "DEFAULT_TASK_TYPE",
    "BackgroundPoolResolver",
    "Cancelable",
    "DispatchContext",
    "DispatchError",
    "DispatchSettings",
    "InvalidConfigurationError",
    "MainThreadExecutor",
    "PoolCache",
    "PoolIdentity",
    "PoolStats",
    "Preparable",
    "ResolverConfig",
    "ThreadGroup",
    "WorkerPool",
    "WorkerThreadFactory",
    "get_default_context",
    "load_settings",
    "on_background_thread",
    "on_main_thread",
    "resolve_pool",
]
