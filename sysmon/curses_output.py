"""Full-screen curses dashboard of the monitored metrics."""

from __future__ import annotations

import curses
from collections import deque
from typing import Sequence

from sysmon.collectors import DataPoint

HISTORY_SIZE = 4
_GRAPH_CHARS = "-=+#"

_BAR_PAIR = 1
_FRAME_PAIR = 2
_GRAPH_PAIR = 3

_FRAME_TOP = "+ System Monitor ----------------------+"
_FRAME_ROW = "|                                     |"
_FRAME_BOTTOM = "+-------------------------------------+"


def format_value(value: float) -> str:
    """Fixed two decimals, right-aligned in at least five columns."""
    return f"{value:5.2f}"


def progress_bar(percentage: float, width: int) -> str:
    """A bracketed bar with ``#`` for the filled share of ``width`` cells."""
    filled = int(percentage * width / 100.0)
    return "[" + "".join("#" if i < filled else " " for i in range(width)) + "]"


def network_graph(history: Sequence[float]) -> str:
    """Four-character sparkline of the last samples, scaled to the largest one."""
    if len(history) < HISTORY_SIZE:
        return "-" * HISTORY_SIZE
    max_val = max(history) or 1.0
    top = len(_GRAPH_CHARS) - 1
    return "".join(
        _GRAPH_CHARS[min(max(int(value / max_val * top), 0), top)]
        for value in list(history)[-HISTORY_SIZE:]
    )


def cycle_interface(interface: str, interfaces: Sequence[str], step: int) -> str:
    """The interface ``step`` places away from ``interface``, wrapping around.

    Unknown interfaces and empty lists leave ``interface`` unchanged.
    """
    if not interfaces or interface not in interfaces:
        return interface
    index = list(interfaces).index(interface)
    return interfaces[(index + step) % len(interfaces)]


def _fit(text: str, width: int) -> str:
    return text.ljust(width)[:width]


class CursesOutput:
    """Draws snapshots into a curses window and reads navigation keys."""

    def __init__(self, stdscr) -> None:
        if not curses.has_colors():
            raise RuntimeError("Terminal does not support colors")
        self.stdscr = stdscr
        curses.start_color()
        curses.use_default_colors()
        curses.cbreak()
        curses.noecho()
        curses.curs_set(0)
        stdscr.timeout(50)
        stdscr.keypad(True)
        curses.init_pair(_BAR_PAIR, curses.COLOR_GREEN, -1)
        curses.init_pair(_FRAME_PAIR, curses.COLOR_CYAN, -1)
        curses.init_pair(_GRAPH_PAIR, curses.COLOR_YELLOW, -1)
        self._attrs = {
            pair: curses.color_pair(pair) for pair in (_BAR_PAIR, _FRAME_PAIR, _GRAPH_PAIR)
        }
        self._rx_history: deque[float] = deque(maxlen=HISTORY_SIZE)
        self._tx_history: deque[float] = deque(maxlen=HISTORY_SIZE)
        self._total_rx_history: deque[float] = deque(maxlen=HISTORY_SIZE)
        self._total_tx_history: deque[float] = deque(maxlen=HISTORY_SIZE)

    def _put(self, y: int, x: int, text: str, pair: int | None = None) -> None:
        try:
            if pair is None:
                self.stdscr.addstr(y, x, text)
            else:
                self.stdscr.addstr(y, x, text, self._attrs[pair])
        except curses.error:
            pass

    def display(self, data: DataPoint, interface: str = "wlp0s20f3") -> None:
        """Redraw the dashboard with ``data`` for the named interface."""
        screen = self.stdscr
        screen.clear()
        self._put(0, 0, _FRAME_TOP, _FRAME_PAIR)
        for row in range(1, 7):
            self._put(row, 0, _FRAME_ROW, _FRAME_PAIR)
        self._put(7, 0, _FRAME_BOTTOM, _FRAME_PAIR)

        self._rx_history.append(data.net_rx)
        self._tx_history.append(data.net_tx)
        self._total_rx_history.append(data.net_total_rx)
        self._total_tx_history.append(data.net_total_tx)

        blank_bar = " " * 10
        cpu_line = f"CPU Usage:    [{blank_bar}] {format_value(data.cpu_usage)}%"
        self._put(1, 1, _fit(cpu_line, 36))
        self._put(1, 16, progress_bar(data.cpu_usage, 10), _BAR_PAIR)

        mem_line = f"Memory Usage: [{blank_bar}] {format_value(data.mem_usage)}%"
        self._put(2, 1, _fit(mem_line, 36))
        self._put(2, 16, progress_bar(data.mem_usage, 10), _BAR_PAIR)

        network_rows = (
            (f"Network ({interface}): RX {format_value(data.net_rx)} KB/s ", self._rx_history),
            (f"              TX {format_value(data.net_tx)} KB/s ", self._tx_history),
            (
                f"Network (Total): RX {format_value(data.net_total_rx)} KB/s ",
                self._total_rx_history,
            ),
            (
                f"                 TX {format_value(data.net_total_tx)} KB/s ",
                self._total_tx_history,
            ),
        )
        for row, (line, history) in enumerate(network_rows, start=3):
            self._put(row, 1, _fit(line, 32))
            self._put(row, 32, network_graph(history), _GRAPH_PAIR)

        screen.refresh()

    def handle_input(self, interface: str, interfaces: Sequence[str]) -> tuple[bool, str]:
        """Read one key; return whether to keep running and the selected interface."""
        key = self.stdscr.getch()
        if key == ord("q"):
            return False, interface
        if key == ord("n"):
            interface = cycle_interface(interface, interfaces, 1)
        elif key == ord("p"):
            interface = cycle_interface(interface, interfaces, -1)
        return True, interface