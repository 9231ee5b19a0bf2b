"""Core utilities for procwatch."""

from __future__ import annotations

from .config import (
    APP_NAME,
    WATCHDOG,
    ConfigError,
    LoggingConfig,
    WatchdogConfig,
)
from .log_config import parse_log_level, setup_logging

__all__ = [
    "APP_NAME",
    "WATCHDOG",
    "ConfigError",
    "LoggingConfig",
    "WatchdogConfig",
    "parse_log_level",
    "setup_logging",
]
