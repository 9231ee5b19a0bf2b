"""Runs the service for a few seconds with a short watchdog interval, for manual checks."""

from __future__ import annotations

import sys
import threading
import time
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from procwatch.core import WatchdogConfig, setup_logging
from procwatch.service import ServiceRunner


def _busy_application(stop_event: threading.Event) -> None:
    # Burn some CPU so the watchdog has something to report
    while not stop_event.is_set():
        sum(i * i for i in range(10_000))


def main(duration: float = 3.5) -> None:
    setup_logging("DEBUG")
    stop_event = threading.Event()
    config = WatchdogConfig(interval=1.0, cpu_warn_threshold_percent=20.0, mem_warn_threshold_mb=1.0)
    runner = ServiceRunner(config, application=lambda: _busy_application(stop_event))
    print(f"Iniciando procwatch durante {duration:.1f}s (intervalo {config.interval:g}s)")
    runner.start()
    try:
        time.sleep(duration)
    finally:
        stop_event.set()
        runner.shutdown(timeout=2.0)
        print(f"Servicio detenido tras {runner.watchdog.iterations} comprobaciones")


if __name__ == "__main__":
    main()
