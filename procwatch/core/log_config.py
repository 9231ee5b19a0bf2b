"""Handlers for the ``procwatch`` package logger."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from .config import APP_NAME, ConfigError

CONSOLE_FORMAT = "[%(levelname)s] %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def parse_log_level(level: int | str) -> int:
    """Map ``"warning"``, ``"DEBUG"`` or a number to a logging level."""

    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ConfigError(f"unknown log level {level!r}")
    return value


def setup_logging(level: int | str = logging.INFO, log_file: Path | None = None) -> logging.Logger:
    """Send package records to stdout, and to ``log_file`` when one is given.

    Watchdog warnings must reach operators as soon as they are emitted, so the
    console handler writes to the (unbuffered) stdout stream. The file, when
    configured, keeps debug records too, including skipped samples.
    Calling this again replaces the handlers installed by a previous call.
    """

    console_level = parse_log_level(level)

    logger = logging.getLogger(APP_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(min(console_level, logging.DEBUG) if log_file else console_level)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    # Records stop at the package logger; the root logger stays untouched
    logger.propagate = False
    return logger
