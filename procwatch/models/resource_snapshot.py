"""Dataclasses representing watchdog samples and decisions."""

from __future__ import annotations

from dataclasses import dataclass

BYTES_PER_MB = 1024 * 1024


@dataclass(slots=True)
class ResourceSample:
    """Point-in-time reading of the process counters.

    ``None`` marks a counter that could not be read this interval.
    """

    timestamp: float
    cpu_seconds: float | None
    rss_mb: float | None


@dataclass(slots=True)
class WatchdogReport:
    timestamp: float
    interval: float
    cpu_percent: float | None
    memory_mb: float | None
    cpu_warning: bool = False
    memory_warning: bool = False

    @property
    def warned(self) -> bool:
        return self.cpu_warning or self.memory_warning
