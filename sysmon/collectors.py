"""Collectors that sample CPU, memory and network statistics from procfs."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

_KIB = 1024.0


@dataclass
class DataPoint:
    """One snapshot of every metric the monitor shows."""

    cpu_usage: float = 0.0
    mem_usage: float = 0.0
    net_rx: float = 0.0
    net_tx: float = 0.0
    net_total_rx: float = 0.0
    net_total_tx: float = 0.0


@dataclass(frozen=True)
class CpuStats:
    """Aggregate CPU jiffy counters from the first line of /proc/stat."""

    user: int
    nice: int
    system: int
    idle: int
    iowait: int
    irq: int
    softirq: int

    def total(self) -> int:
        return (
            self.user
            + self.nice
            + self.system
            + self.idle
            + self.iowait
            + self.irq
            + self.softirq
        )


@dataclass(frozen=True)
class MemStats:
    """Total and available memory in kB."""

    mem_total: int = 0
    mem_available: int = 0


@dataclass(frozen=True)
class NetStats:
    """Received and transmitted byte counters."""

    rx_bytes: int = 0
    tx_bytes: int = 0


def parse_cpu_stats(text: str) -> CpuStats:
    """Parse the aggregate ``cpu`` line at the top of /proc/stat."""
    lines = text.splitlines()
    first = lines[0] if lines else ""
    if not first.startswith("cpu"):
        raise ValueError(f"unexpected /proc/stat line: {first!r}")
    fields = first[3:].split()[:7]
    if len(fields) < 7:
        raise ValueError(f"too few CPU counters in line: {first!r}")
    try:
        values = [int(field) for field in fields]
    except ValueError as exc:
        raise ValueError(f"bad CPU counter in line: {first!r}") from exc
    return CpuStats(*values)


def cpu_usage(prev: CpuStats, curr: CpuStats) -> float:
    """Percentage of non-idle time between two samples."""
    prev_total, curr_total = prev.total(), curr.total()
    if curr_total == prev_total:
        return 0.0
    busy = (curr_total - curr.idle) - (prev_total - prev.idle)
    return 100.0 * busy / (curr_total - prev_total)


def _meminfo_value(line: str, key: str) -> int | None:
    rest = line[len(key):]
    if not rest.startswith(":"):
        return None
    fields = rest[1:].split()
    if not fields:
        return None
    try:
        return int(fields[0])
    except ValueError:
        return None


def parse_meminfo(text: str) -> MemStats:
    """Read MemTotal and MemAvailable from /proc/meminfo text."""
    total = 0
    available = 0
    for line in text.splitlines():
        if line.startswith("MemTotal"):
            value = _meminfo_value(line, "MemTotal")
            if value is not None:
                total = value
        elif line.startswith("MemAvailable"):
            value = _meminfo_value(line, "MemAvailable")
            if value is not None:
                available = value
    return MemStats(total, available)


def memory_usage(stats: MemStats) -> float:
    """Percentage of memory in use; 0 when the total is unknown."""
    if stats.mem_total == 0:
        return 0.0
    return 100.0 * (stats.mem_total - stats.mem_available) / stats.mem_total


def _net_counters(line: str) -> NetStats:
    fields = line.split()
    if len(fields) < 10:
        raise ValueError(f"malformed /proc/net/dev line: {line!r}")
    try:
        return NetStats(int(fields[1]), int(fields[9]))
    except ValueError as exc:
        raise ValueError(f"malformed /proc/net/dev line: {line!r}") from exc


def parse_net_dev(text: str, interface: str) -> tuple[NetStats, NetStats]:
    """Return the counters of ``interface`` and the sum over all interfaces.

    Raises ValueError when the interface is not listed.
    """
    specific = NetStats()
    total_rx = 0
    total_tx = 0
    found = False
    marker = f"{interface}:"
    for line in text.splitlines()[2:]:
        if marker in line:
            specific = _net_counters(line)
            found = True
        if ":" in line:
            counters = _net_counters(line)
            total_rx += counters.rx_bytes
            total_tx += counters.tx_bytes
    if not found:
        raise ValueError(f"Interface {interface} not found")
    return specific, NetStats(total_rx, total_tx)


def network_speeds(
    prev_specific: NetStats,
    curr_specific: NetStats,
    prev_total: NetStats,
    curr_total: NetStats,
    interval: float,
) -> tuple[float, float, float, float]:
    """Rates in KB/s as (rx, tx, total_rx, total_tx)."""
    if interval <= 0:
        return 0.0, 0.0, 0.0, 0.0
    scale = interval * _KIB
    return (
        (curr_specific.rx_bytes - prev_specific.rx_bytes) / scale,
        (curr_specific.tx_bytes - prev_specific.tx_bytes) / scale,
        (curr_total.rx_bytes - prev_total.rx_bytes) / scale,
        (curr_total.tx_bytes - prev_total.tx_bytes) / scale,
    )


class DataCollector(ABC):
    """A source of metrics that refreshes ``data`` on each ``collect``."""

    def __init__(self) -> None:
        self.data = DataPoint()

    @abstractmethod
    def collect(self) -> None:
        """Take a fresh sample and store it in ``data``."""


class CpuCollector(DataCollector):
    """Measures CPU usage over a short sampling window."""

    def __init__(self, stat_path: str | Path = "/proc/stat", sample_seconds: float = 1.0) -> None:
        super().__init__()
        self.stat_path = Path(stat_path)
        self.sample_seconds = sample_seconds

    def _read(self) -> CpuStats:
        return parse_cpu_stats(self.stat_path.read_text(errors="replace"))

    def collect(self) -> None:
        try:
            prev = self._read()
            time.sleep(self.sample_seconds)
            curr = self._read()
            self.data.cpu_usage = cpu_usage(prev, curr)
        except (OSError, ValueError) as exc:
            self.data.cpu_usage = 0.0
            logger.error("Error in CpuCollector: %s", exc)


class MemoryCollector(DataCollector):
    """Measures the share of memory in use."""

    def __init__(self, meminfo_path: str | Path = "/proc/meminfo") -> None:
        super().__init__()
        self.meminfo_path = Path(meminfo_path)

    def collect(self) -> None:
        try:
            stats = parse_meminfo(self.meminfo_path.read_text(errors="replace"))
            self.data.mem_usage = memory_usage(stats)
        except (OSError, ValueError) as exc:
            self.data.mem_usage = 0.0
            logger.error("Error in MemoryCollector: %s", exc)


class NetworkCollector(DataCollector):
    """Measures receive and transmit rates for one interface and in total."""

    def __init__(
        self,
        interface: str = "eth0",
        dev_path: str | Path = "/proc/net/dev",
        sample_seconds: float = 1.0,
    ) -> None:
        super().__init__()
        self.interface = interface
        self.dev_path = Path(dev_path)
        self.sample_seconds = sample_seconds

    def _read(self) -> tuple[NetStats, NetStats]:
        return parse_net_dev(self.dev_path.read_text(errors="replace"), self.interface)

    def _store(self, speeds: tuple[float, float, float, float]) -> None:
        (
            self.data.net_rx,
            self.data.net_tx,
            self.data.net_total_rx,
            self.data.net_total_tx,
        ) = speeds

    def collect(self) -> None:
        try:
            prev_specific, prev_total = self._read()
            time.sleep(self.sample_seconds)
            curr_specific, curr_total = self._read()
            self._store(
                network_speeds(
                    prev_specific,
                    curr_specific,
                    prev_total,
                    curr_total,
                    self.sample_seconds,
                )
            )
        except (OSError, ValueError) as exc:
            self._store((0.0, 0.0, 0.0, 0.0))
            logger.error("Error in NetworkCollector: %s", exc)