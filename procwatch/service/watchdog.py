"""Background watchdog reporting high CPU or memory use of this process."""

from __future__ import annotations

from collections import defaultdict
import logging
import threading
import time
from typing import Callable

from procwatch.core import WATCHDOG, WatchdogConfig
from procwatch.core.config import WATCHDOG_THREAD_NAME
from procwatch.data import ProcessResourceSampler, ResourceSampler
from procwatch.models import ResourceSample, WatchdogReport

logger = logging.getLogger(__name__)


def cpu_percent_over_interval(previous: float, total: float, interval: float) -> float:
    """Average CPU utilisation over ``interval``; 100 is one core fully busy."""

    return ((total - previous) / interval) * 100.0


def should_warn_cpu(percent: float, threshold: float) -> bool:
    return percent > threshold


def should_warn_memory(current: float, previous: float, threshold: float) -> bool:
    """Only warn while memory is above the threshold and still climbing."""

    return current > threshold and current > previous


class ResourceWatchdog:
    """Samples process CPU and RSS every interval and logs threshold breaches.

    The previous-sample state is owned by the instance and only touched by
    :meth:`step`, which the loop runs strictly sequentially.
    """

    def __init__(
        self,
        config: WatchdogConfig = WATCHDOG,
        sampler: ResourceSampler | None = None,
    ) -> None:
        self._config = config
        self._sampler = sampler if sampler is not None else ProcessResourceSampler()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._step_lock = threading.Lock()

        self.previous_cpu_seconds = 0.0
        self.previous_memory_mb = 0.0
        self.iterations = 0
        self.sampling_failures: defaultdict[str, int] = defaultdict(int)

    @property
    def config(self) -> WatchdogConfig:
        return self._config

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        thread = self._thread
        if thread is not None and thread.is_alive():
            if not self._stop.is_set():
                return
            # A stopped loop whose last check has not returned yet
            raise RuntimeError("watchdog is still finishing its previous check")
        self._stop = threading.Event()
        self._thread = threading.Thread(
            target=self.run, args=(self._stop,), name=WATCHDOG_THREAD_NAME, daemon=True
        )
        self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        """Stop at the next sleep boundary; a running iteration always completes.

        If ``timeout`` expires first the thread handle is kept, so
        :attr:`is_running` stays true until that iteration returns.
        """

        self._stop.set()
        thread = self._thread
        if thread is None:
            return
        if thread.is_alive() and thread is not threading.current_thread():
            thread.join(timeout=timeout)
        if not thread.is_alive():
            self._thread = None

    def run(self, stop_event: threading.Event | None = None) -> None:
        stop_event = stop_event if stop_event is not None else self._stop
        while not stop_event.wait(self._config.interval):
            try:
                self.step()
            except Exception as exc:  # pragma: no cover - runtime guard
                logger.exception("Watchdog: unexpected error during check", exc_info=exc)

    def step(self) -> WatchdogReport:
        """Sample, evaluate and log once, without sleeping."""

        with self._step_lock:
            return self.evaluate(self.sample())

    def sample(self) -> ResourceSample:
        return ResourceSample(
            timestamp=time.time(),
            cpu_seconds=self._safe_sample("cpu", self._sampler.sample_cpu_seconds),
            rss_mb=self._safe_sample("memory", self._sampler.sample_resident_memory_mb),
        )

    def evaluate(self, sample: ResourceSample) -> WatchdogReport:
        """Apply the warning policy to ``sample`` and advance the previous-sample state."""

        config = self._config
        report = WatchdogReport(
            timestamp=sample.timestamp,
            interval=config.interval,
            cpu_percent=None,
            memory_mb=None,
        )

        # CPU
        total = sample.cpu_seconds
        if total is not None:
            percent = cpu_percent_over_interval(self.previous_cpu_seconds, total, config.interval)
            self.previous_cpu_seconds = total
            report.cpu_percent = percent
            if should_warn_cpu(percent, config.cpu_warn_threshold_percent):
                logger.warning(
                    "Watchdog: potentially high CPU use, ~%.2f%% over last %g seconds.",
                    percent,
                    config.interval,
                )
                report.cpu_warning = True

        # RAM
        ram_use_mb = sample.rss_mb
        if ram_use_mb is not None:
            report.memory_mb = ram_use_mb
            if should_warn_memory(ram_use_mb, self.previous_memory_mb, config.mem_warn_threshold_mb):
                logger.warning("Watchdog: potentially high RAM use, RSS is %.2fMB.", ram_use_mb)
                report.memory_warning = True
            self.previous_memory_mb = ram_use_mb

        self.iterations += 1
        return report

    def _safe_sample(self, key: str, fn: Callable[[], float | None]) -> float | None:
        try:
            value = fn()
        except Exception as exc:
            logger.debug("Watchdog: %s sample failed: %s", key, exc)
            value = None
        if value is None:
            self.sampling_failures[key] += 1
            return None
        self.sampling_failures[key] = 0
        return float(value)
