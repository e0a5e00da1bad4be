"""Plain terminal output of a metrics snapshot."""

from __future__ import annotations

import sys
from typing import TextIO

from sysmon.collectors import DataPoint

_CLEAR_SCREEN = "\033[2J\033[1;1H"


def format_report(data: DataPoint) -> str:
    """Render ``data`` as the text block written to the terminal."""
    return (
        _CLEAR_SCREEN
        + f"CPU Usage: {data.cpu_usage:g}%\n"
        + f"Memory Usage: {data.mem_usage:g}%\n"
        + f"Network: RX {data.net_rx:g} KB/s, TX {data.net_tx:g} KB/s\n"
        + f"Network (Total): RX {data.net_total_rx:g} KB/s, "
        f"TX {data.net_total_tx:g} KB/s\n"
    )


class ConsoleOutput:
    """Writes each snapshot to a text stream after clearing the screen."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream if stream is not None else sys.stdout

    def display(self, data: DataPoint) -> None:
        self.stream.write(format_report(data))
        self.stream.flush()