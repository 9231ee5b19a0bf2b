"""Global configuration values for the procwatch service."""

from __future__ import annotations

import math
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path


class ConfigError(ValueError):
    """Raised when a configuration value cannot be used."""


@dataclass(frozen=True)
class WatchdogConfig:
    """Sampling interval and warning thresholds for the resource watchdog."""

    interval: float = 60.0  # seconds between checks
    cpu_warn_threshold_percent: float = 20.0  # averaged over the interval
    mem_warn_threshold_mb: float = 250.0  # resident set size

    def __post_init__(self) -> None:
        for name in ("interval", "cpu_warn_threshold_percent", "mem_warn_threshold_mb"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ConfigError(f"{name} must be a finite number, got {value!r}")
        if self.interval <= 0:
            raise ConfigError(f"interval must be positive, got {self.interval!r}")
        if self.cpu_warn_threshold_percent < 0:
            raise ConfigError(
                f"cpu threshold must not be negative, got {self.cpu_warn_threshold_percent!r}"
            )
        if self.mem_warn_threshold_mb < 0:
            raise ConfigError(
                f"memory threshold must not be negative, got {self.mem_warn_threshold_mb!r}"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "WatchdogConfig":
        """Build a config from ``PROCWATCH_*`` variables, falling back to defaults."""

        env = os.environ if environ is None else environ
        config = cls()
        overrides: dict[str, float] = {}
        for field_name, variable in _ENV_VARIABLES.items():
            raw = env.get(variable)
            if raw is None or not raw.strip():
                continue
            overrides[field_name] = _parse_float(variable, raw)
        return replace(config, **overrides) if overrides else config

    def with_overrides(self, **values: float | None) -> "WatchdogConfig":
        """Return a copy with every non-``None`` value applied."""

        changes = {key: float(value) for key, value in values.items() if value is not None}
        return replace(self, **changes) if changes else self


@dataclass(frozen=True)
class LoggingConfig:
    """Console and file logging defaults."""

    level: str = "INFO"
    log_file: Path | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "LoggingConfig":
        env = os.environ if environ is None else environ
        level = env.get("PROCWATCH_LOG_LEVEL", "").strip().upper()
        log_file = env.get("PROCWATCH_LOG_FILE", "").strip()
        return cls(level=level or cls.level, log_file=Path(log_file) if log_file else None)


def _parse_float(name: str, raw: str) -> float:
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc


_ENV_VARIABLES = {
    "interval": "PROCWATCH_INTERVAL",
    "cpu_warn_threshold_percent": "PROCWATCH_CPU_WARN_PERCENT",
    "mem_warn_threshold_mb": "PROCWATCH_MEM_WARN_MB",
}

APP_NAME = "procwatch"
APP_ENV_VARIABLE = "PROCWATCH_APP"
WATCHDOG_THREAD_NAME = f"{APP_NAME}.watchdog"
WATCHDOG = WatchdogConfig()
