"""Pytest configuration and shared fixtures for dispatcher tests."""

import sys
import threading
import time
from pathlib import Path

import pytest
from loguru import logger

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from dispatcher import DispatchContext, PoolCache  # noqa: E402

# Configure logging
logger.remove()
logger.add(sys.stderr, level="INFO")

# Configure pytest-asyncio
pytest_plugins = ("pytest_asyncio",)


class Recorder:
    """Thread-safe log of which task ran on which thread."""

    def __init__(self):
        self.events: list[tuple[str, str]] = []
        self._lock = threading.Lock()
        self._changed = threading.Condition(self._lock)

    def task(self, label):
        """Build a task that records (label, thread name) when run."""

        def run():
            with self._changed:
                self.events.append((label, threading.current_thread().name))
                self._changed.notify_all()

        return run

    def wait_for(self, count, timeout=5.0):
        """Block until at least count events were recorded."""
        with self._changed:
            return self._changed.wait_for(lambda: len(self.events) >= count, timeout=timeout)

    @property
    def labels(self):
        with self._lock:
            return [label for label, _ in self.events]

    @property
    def thread_names(self):
        with self._lock:
            return [name for _, name in self.events]


def wait_until(predicate, timeout=5.0, interval=0.01):
    """Poll predicate until it is true or timeout expires."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


@pytest.fixture
def context():
    """A fresh dispatch context so each test gets its own pools."""
    ctx = DispatchContext()
    yield ctx
    logger.info(f"Test context held {len(ctx.cache)} pools")


@pytest.fixture
def cache():
    """A fresh pool cache."""
    return PoolCache()


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture(name="wait_until")
def wait_until_fixture():
    return wait_until


# Markers for test categorization
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "stress: marks stress tests")
