"""Runs the application and the resource watchdog side by side."""

from __future__ import annotations

import logging
import signal
import threading
from typing import Any, Callable

from procwatch.core import WATCHDOG, WatchdogConfig
from procwatch.data import ResourceSampler

from .watchdog import ResourceWatchdog

logger = logging.getLogger(__name__)

Application = Callable[[], Any]


class ServiceRunner:
    """Owns the application thread, the watchdog and the shutdown event."""

    def __init__(
        self,
        config: WatchdogConfig = WATCHDOG,
        application: Application | None = None,
        sampler: ResourceSampler | None = None,
        stop_event: threading.Event | None = None,
    ) -> None:
        self._application = application
        self._stop = stop_event if stop_event is not None else threading.Event()
        self._app_thread: threading.Thread | None = None
        self.watchdog = ResourceWatchdog(config, sampler=sampler)
        self.application_failed = False

    @property
    def stop_event(self) -> threading.Event:
        return self._stop

    @property
    def application_thread(self) -> threading.Thread | None:
        return self._app_thread

    def start(self) -> None:
        if self._application is None:
            logger.debug("No application configured; running the watchdog only")
        elif self._app_thread is None:
            self._app_thread = threading.Thread(
                target=self._run_application, name="procwatch.application", daemon=True
            )
            self._app_thread.start()
        self.watchdog.start()

    def wait(self, poll_interval: float = 0.5) -> None:
        """Block the calling thread until shutdown is requested."""

        while not self._stop.wait(poll_interval):
            pass

    def request_shutdown(self) -> None:
        self._stop.set()

    def shutdown(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        self.watchdog.stop(timeout=timeout)
        thread = self._app_thread
        if thread and thread.is_alive():
            thread.join(timeout=timeout)

    def install_signal_handlers(self) -> None:
        """Turn SIGTERM and SIGINT into a shutdown request."""

        def _handler(signum: int, _frame: Any) -> None:
            logger.info("Received %s, shutting down", signal.Signals(signum).name)
            self.request_shutdown()

        for signum in (signal.SIGTERM, signal.SIGINT):
            signal.signal(signum, _handler)

    def _run_application(self) -> None:
        assert self._application is not None
        try:
            self._application()
        except Exception as exc:
            logger.exception("Application terminated with an error", exc_info=exc)
            self.application_failed = True
            self.request_shutdown()
