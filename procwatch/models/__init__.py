"""Models exported by procwatch."""

from __future__ import annotations

from .resource_snapshot import ResourceSample, WatchdogReport

__all__ = [
    "ResourceSample",
    "WatchdogReport",
]
