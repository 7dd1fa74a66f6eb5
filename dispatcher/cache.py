"""Process-lifetime cache of background worker pools"""
import threading

from loguru import logger

from .pool import WorkerPool
from .thread_factory import ThreadGroup, WorkerThreadFactory
from .types import PoolIdentity, PoolStats


class PoolCache:
    """Maps pool identities to running pools, creating each pool at most once.

    Pools are never evicted or shut down.
    """

    def __init__(self, group: ThreadGroup | None = None, thread_name_suffix: str = "dispatcher"):
        self.group = group
        self.thread_name_suffix = thread_name_suffix
        self._pools: dict[PoolIdentity, WorkerPool] = {}
        self._lock = threading.Lock()

    def resolve(self, identity: PoolIdentity, stack_size: int = 0) -> WorkerPool:
        """Return the pool for identity, building it on first request.

        stack_size only applies when the pool is built; later requests with a
        different value get the existing pool as is.
        """
        with self._lock:
            pool = self._pools.get(identity)
            if pool is None:
                factory = WorkerThreadFactory(stack_size, group=self.group, suffix=self.thread_name_suffix)
                pool = WorkerPool(identity, factory)
                self._pools[identity] = pool
                logger.info(f"Created worker pool {identity} with stack size {stack_size or 'default'}: {pool.thread_names}")
            elif pool.stack_size != stack_size:
                logger.debug(f"Reusing pool {identity} built with stack size {pool.stack_size}; requested {stack_size} ignored")
            return pool

    def get(self, identity: PoolIdentity) -> WorkerPool | None:
        """Get a cached pool without creating one"""
        with self._lock:
            return self._pools.get(identity)

    def identities(self) -> list[PoolIdentity]:
        """List cached pool identities"""
        with self._lock:
            return list(self._pools)

    def get_all_stats(self) -> dict[PoolIdentity, PoolStats]:
        """Get statistics for all pools"""
        with self._lock:
            pools = list(self._pools.items())
        return {identity: pool.get_stats() for identity, pool in pools}

    def __contains__(self, identity: object) -> bool:
        with self._lock:
            return identity in self._pools

    def __len__(self) -> int:
        with self._lock:
            return len(self._pools)
