"""Runs collectors in background threads and fans their results out to subscribers."""

from __future__ import annotations

import threading
from dataclasses import replace
from typing import Callable

from sysmon.collectors import (
    CpuCollector,
    DataCollector,
    DataPoint,
    MemoryCollector,
    NetworkCollector,
)

Subscriber = Callable[[DataPoint], None]


def _merge(cached: DataPoint, collector: DataCollector) -> None:
    """Copy the fields that ``collector`` is responsible for into ``cached``."""
    data = collector.data
    if isinstance(collector, CpuCollector):
        cached.cpu_usage = data.cpu_usage
    elif isinstance(collector, MemoryCollector):
        cached.mem_usage = data.mem_usage
    elif isinstance(collector, NetworkCollector):
        cached.net_rx = data.net_rx
        cached.net_tx = data.net_tx
        cached.net_total_rx = data.net_total_rx
        cached.net_total_tx = data.net_total_tx


class DataAggregator:
    """Polls each collector in its own thread and publishes the combined snapshot."""

    def __init__(self, update_interval_ms: int = 1000) -> None:
        if update_interval_ms <= 0:
            raise ValueError("update_interval_ms must be positive")
        self.update_interval_ms = update_interval_ms
        self._collectors: list[DataCollector] = []
        self._subscribers: list[Subscriber] = []
        self._threads: list[threading.Thread] = []
        self._cached = DataPoint()
        self._lock = threading.Lock()
        self._stop_event = threading.Event()

    @property
    def collectors(self) -> tuple[DataCollector, ...]:
        return tuple(self._collectors)

    @property
    def running(self) -> bool:
        return bool(self._threads) and not self._stop_event.is_set()

    @property
    def latest(self) -> DataPoint:
        """A copy of the most recent combined snapshot."""
        with self._lock:
            return replace(self._cached)

    def add_collector(self, collector: DataCollector) -> None:
        self._collectors.append(collector)

    def subscribe(self, callback: Subscriber) -> None:
        self._subscribers.append(callback)

    def start(self) -> None:
        """Start one polling thread per collector; a second call is ignored."""
        if self._threads:
            return
        self._stop_event.clear()
        for collector in self._collectors:
            thread = threading.Thread(
                target=self._poll,
                args=(collector,),
                name=f"collector-{type(collector).__name__}",
                daemon=True,
            )
            self._threads.append(thread)
            thread.start()

    def stop(self) -> None:
        """Signal every polling thread to finish and wait for them."""
        self._stop_event.set()
        for thread in self._threads:
            thread.join()
        self._threads.clear()

    def _poll(self, collector: DataCollector) -> None:
        interval = self.update_interval_ms / 1000.0
        while not self._stop_event.is_set():
            collector.collect()
            with self._lock:
                _merge(self._cached, collector)
                snapshot = replace(self._cached)
                for subscriber in self._subscribers:
                    subscriber(snapshot)
            self._stop_event.wait(interval)

    def __enter__(self) -> DataAggregator:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()