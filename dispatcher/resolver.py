"""Fluent builder resolving background tasks to cached worker pools"""
from collections.abc import Callable

from pydantic import ValidationError

from .cache import PoolCache
from .exceptions import InvalidConfigurationError
from .pool import WorkerPool
from .types import Preparable, ResolverConfig


def resolve_pool(cache: PoolCache, config: ResolverConfig) -> WorkerPool:
    """Look up (or build) the pool a configuration maps to"""
    return cache.resolve(config.identity(), config.stack_size)


class BackgroundPoolResolver:
    """Per-call configuration of where a background task runs.

    Obtain a fresh one for each dispatch, configure it and call execute():

        context.on_background_thread().task_type("net").serial().execute(task)

    Defaults: pool size 3, task type "default", runtime default stack size.
    """

    def __init__(self, cache: PoolCache, config: ResolverConfig | None = None):
        self.cache = cache
        self.config = config or ResolverConfig()

    def _set(self, field: str, value: object, message: str) -> "BackgroundPoolResolver":
        try:
            setattr(self.config, field, value)
        except ValidationError as e:
            raise InvalidConfigurationError(message) from e
        return self

    def serial(self) -> "BackgroundPoolResolver":
        """Run on a single-threaded pool so tasks execute in submission order"""
        return self.pool_size(1)

    def task_type(self, task_type: str) -> "BackgroundPoolResolver":
        if task_type is None:
            raise InvalidConfigurationError("Task type cannot be None")
        return self._set("task_type", task_type, f"Task type must be a string, got {task_type!r}")

    def pool_size(self, pool_size: int) -> "BackgroundPoolResolver":
        return self._set("pool_size", pool_size, f"Thread pool size must be an integer of at least 1, got {pool_size!r}")

    def stack_size(self, stack_size: int) -> "BackgroundPoolResolver":
        return self._set("stack_size", stack_size, f"Thread stack size must be a non-negative integer, got {stack_size!r}")

    def get_pool(self) -> WorkerPool:
        """Resolve the configured pool without submitting anything"""
        return resolve_pool(self.cache, self.config)

    def execute(self, task: Callable[[], object]) -> None:
        """Prepare the task on this thread if it supports it, then enqueue it"""
        if isinstance(task, Preparable):
            task.prepare()
        self.get_pool().execute(task)

    def __repr__(self) -> str:
        return f"BackgroundPoolResolver({self.config!r})"
