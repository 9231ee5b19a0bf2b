"""Service package: watchdog and the runner that hosts it."""

from __future__ import annotations

__all__ = [
    "ResourceWatchdog",
    "ServiceRunner",
]

from .runner import ServiceRunner  # noqa: E402
from .watchdog import ResourceWatchdog  # noqa: E402
