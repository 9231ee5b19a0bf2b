"""procwatch: service bootstrap with a self-monitoring resource watchdog."""

from __future__ import annotations

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "ResourceWatchdog",
    "ServiceRunner",
]

from .service import ResourceWatchdog, ServiceRunner  # noqa: E402
