"""Type definitions for the task dispatcher"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_POOL_SIZE = 3
DEFAULT_TASK_TYPE = "default"
DEFAULT_STACK_SIZE = 0  # 0 means the interpreter's default stack size


@dataclass(frozen=True)
class PoolIdentity:
    """Key under which a background pool is cached"""

    concurrency: int
    task_type: str

    def __str__(self) -> str:
        return f"{self.task_type}[{self.concurrency}]"


class ResolverConfig(BaseModel):
    """Per-call configuration of a background pool resolver"""

    model_config = ConfigDict(validate_assignment=True)

    pool_size: int = Field(default=DEFAULT_POOL_SIZE, ge=1, strict=True, description="Desired number of worker threads")
    task_type: str = Field(default=DEFAULT_TASK_TYPE, description="Label partitioning pools of the same size")
    stack_size: int = Field(default=DEFAULT_STACK_SIZE, ge=0, strict=True, description="Worker thread stack size in bytes")

    def identity(self) -> PoolIdentity:
        """Build the cache key for this configuration"""
        return PoolIdentity(self.pool_size, self.task_type)


class PoolStats(BaseModel):
    """Statistics for a background worker pool"""

    task_type: str
    concurrency: int
    stack_size: int
    worker_threads: list[str]
    live_workers: int
    queued_tasks: int
    completed_tasks: int
    failed_tasks: int
    created_at: datetime
    uptime_seconds: float


class Preparable(ABC):
    """Task capability: a hook run on the submitting thread before dispatch"""

    @abstractmethod
    def prepare(self) -> None:
        """Prepare the task; called synchronously before it is enqueued"""


class Cancelable(ABC):
    """Task capability: cooperative cancellation state"""

    @abstractmethod
    def cancel(self) -> None:
        """Request cancellation"""

    @abstractmethod
    def is_canceled(self) -> bool:
        """Whether cancellation was requested"""
