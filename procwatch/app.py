"""Application entry point."""

from __future__ import annotations

import argparse
import importlib
import logging
import os
import signal
import sys
from pathlib import Path
from typing import Optional, Sequence

from procwatch import __version__
from procwatch.core import (
    APP_NAME,
    ConfigError,
    LoggingConfig,
    WatchdogConfig,
    parse_log_level,
    setup_logging,
)
from procwatch.core.config import APP_ENV_VARIABLE
from procwatch.service import ServiceRunner
from procwatch.service.runner import Application

VERSION_FLAGS = frozenset({"-v", "--version"})

logger = logging.getLogger(__name__)


def disable_stdout_buffering() -> None:
    reconfigure = getattr(sys.stdout, "reconfigure", None)
    if reconfigure is not None:
        reconfigure(write_through=True)


def ignore_child_signals() -> None:
    # Not available on Windows
    if hasattr(signal, "SIGCHLD"):
        signal.signal(signal.SIGCHLD, signal.SIG_IGN)


def resolve_application(path: str) -> Application:
    """Import ``package.module:callable`` and return the callable."""

    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigError(f"application must look like 'module:callable', got {path!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigError(f"cannot import application module {module_name!r}: {exc}") from exc
    target = module
    for part in attr.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise ConfigError(f"{module_name!r} has no attribute {attr!r}") from exc
    if not callable(target):
        raise ConfigError(f"{path!r} is not callable")
    return target


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Run a background service under a CPU and memory watchdog.",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="store_true",
        help="Print the version and exit.",
    )
    parser.add_argument(
        "--app",
        default=None,
        metavar="MODULE:CALLABLE",
        help=f"Application callable to run in the background (env: {APP_ENV_VARIABLE}).",
    )
    parser.add_argument("--interval", type=float, default=None, help="Seconds between watchdog checks.")
    parser.add_argument(
        "--cpu-threshold",
        type=float,
        default=None,
        help="CPU warning threshold, as a percentage averaged over the interval.",
    )
    parser.add_argument(
        "--mem-threshold",
        type=float,
        default=None,
        help="Resident memory warning threshold, in MB.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Console log level (default: INFO, env: PROCWATCH_LOG_LEVEL).",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Optional log file (env: PROCWATCH_LOG_FILE).",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)

    disable_stdout_buffering()
    ignore_child_signals()

    if VERSION_FLAGS.intersection(args):
        print(__version__)
        return 0

    parser = build_parser()
    options = parser.parse_args(args)

    try:
        config = WatchdogConfig.from_env().with_overrides(
            interval=options.interval,
            cpu_warn_threshold_percent=options.cpu_threshold,
            mem_warn_threshold_mb=options.mem_threshold,
        )
        app_path = options.app or os.environ.get(APP_ENV_VARIABLE) or None
        application = resolve_application(app_path) if app_path else None
        logging_config = LoggingConfig.from_env()
        log_level = parse_log_level(options.log_level or logging_config.level)
    except ConfigError as exc:
        parser.error(str(exc))

    setup_logging(log_level, log_file=options.log_file or logging_config.log_file)

    logger.info("Started, version %s", __version__)

    runner = ServiceRunner(config, application=application)
    runner.install_signal_handlers()
    runner.start()
    try:
        runner.wait()
    finally:
        runner.shutdown()
    return 1 if runner.application_failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
