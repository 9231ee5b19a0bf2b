import logging
from collections import deque

import pytest


class FakeSampler:
    """Deterministic sampler replaying queued readings.

    Queue ``None`` for an unavailable reading, or an exception instance to
    have the sampler raise it.
    """

    def __init__(self, cpu=(), memory=()):
        self.cpu = deque(cpu)
        self.memory = deque(memory)

    @staticmethod
    def _next(queue):
        value = queue.popleft() if queue else None
        if isinstance(value, BaseException):
            raise value
        return value

    def sample_cpu_seconds(self):
        return self._next(self.cpu)

    def sample_resident_memory_mb(self):
        return self._next(self.memory)


@pytest.fixture
def fake_sampler():
    return FakeSampler()


@pytest.fixture(autouse=True)
def reset_package_logger():
    logger = logging.getLogger("procwatch")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
