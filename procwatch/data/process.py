"""Resource counters of the running process, read through psutil."""

from __future__ import annotations

import logging
from typing import Protocol

import psutil

from procwatch.models.resource_snapshot import BYTES_PER_MB

logger = logging.getLogger(__name__)


class ResourceSampler(Protocol):
    """Source of the two counters the watchdog evaluates."""

    def sample_cpu_seconds(self) -> float | None:
        """Cumulative user + system CPU seconds, or ``None`` if unavailable."""

    def sample_resident_memory_mb(self) -> float | None:
        """Resident set size in megabytes, or ``None`` if unavailable."""


class ProcessResourceSampler:
    """Reads CPU time and RSS of a single process (the current one by default)."""

    def __init__(self, pid: int | None = None) -> None:
        self._process = psutil.Process(pid)

    @property
    def pid(self) -> int:
        return self._process.pid

    def sample_cpu_seconds(self) -> float | None:
        try:
            times = self._process.cpu_times()
        except (psutil.Error, OSError) as exc:
            logger.debug("CPU time unavailable for pid %s: %s", self.pid, exc)
            return None
        return float(times.user) + float(times.system)

    def sample_resident_memory_mb(self) -> float | None:
        try:
            rss = self._process.memory_info().rss
        except (psutil.Error, OSError) as exc:
            logger.debug("Resident memory unavailable for pid %s: %s", self.pid, exc)
            return None
        return float(rss) / BYTES_PER_MB

