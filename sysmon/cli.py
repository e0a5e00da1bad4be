"""Command-line entry point: runs the curses dashboard until interrupted."""

from __future__ import annotations

import argparse
import curses
import signal
import threading
from typing import Sequence

from sysmon.aggregator import DataAggregator
from sysmon.collectors import CpuCollector, MemoryCollector, NetworkCollector
from sysmon.config import Config, load_config
from sysmon.curses_output import CursesOutput

DEFAULT_CONFIG_PATH = "../config.ini"


def build_aggregator(config: Config) -> DataAggregator:
    """An aggregator with CPU, memory and network collectors for ``config``."""
    aggregator = DataAggregator(config.update_interval_ms)
    aggregator.add_collector(CpuCollector())
    aggregator.add_collector(MemoryCollector())
    aggregator.add_collector(NetworkCollector(config.interface))
    return aggregator


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="sysmon", description="Terminal system monitor.")
    parser.add_argument(
        "-c",
        "--config",
        default=DEFAULT_CONFIG_PATH,
        help=f"path of the INI configuration file (default: {DEFAULT_CONFIG_PATH})",
    )
    return parser.parse_args(argv)


def _run_dashboard(
    stdscr, aggregator: DataAggregator, config: Config, stop: threading.Event
) -> None:
    output = CursesOutput(stdscr)
    interface = config.interface
    aggregator.subscribe(lambda data: output.display(data, interface))
    aggregator.start()
    try:
        poll = config.update_interval_ms / 50 / 1000.0
        while not stop.is_set():
            stop.wait(poll)
    finally:
        aggregator.stop()


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    config = load_config(args.config)
    aggregator = build_aggregator(config)
    stop = threading.Event()

    def on_signal(signum, frame) -> None:
        stop.set()

    previous = {sig: signal.signal(sig, on_signal) for sig in (signal.SIGINT, signal.SIGTERM)}
    try:
        curses.wrapper(_run_dashboard, aggregator, config, stop)
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())