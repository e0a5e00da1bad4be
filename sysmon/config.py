"""Monitor configuration read from an INI file."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class Config:
    """Settings of the monitor."""

    interface: str = "wlp0s20f3"
    update_interval_ms: int = 1000


def _leading_int(value: str) -> int:
    match = _LEADING_INT.match(value)
    if match is None:
        raise ValueError(f"not a number: {value!r}")
    number = int(match.group(1))
    if not _INT_MIN <= number <= _INT_MAX:
        raise ValueError(f"out of range: {value!r}")
    return number


def _strip_inline_comment(value: str) -> str:
    for index, char in enumerate(value):
        if char == ";" and index > 0 and value[index - 1].isspace():
            return value[:index]
    return value


def _ini_entries(text: str):
    """Yield (section, name, value) for every key line of an INI document."""
    section = ""
    for number, raw in enumerate(text.splitlines()):
        if number == 0 and raw.startswith("\ufeff"):
            raw = raw[1:]
        line = raw.strip()
        if not line or line[0] in ";#":
            continue
        if line[0] == "[":
            end = line.find("]")
            if end > 0:
                section = line[1:end]
            continue
        positions = [p for p in (line.find("="), line.find(":")) if p >= 0]
        if not positions:
            continue
        split = min(positions)
        name = line[:split].rstrip()
        value = _strip_inline_comment(line[split + 1:].lstrip()).rstrip()
        yield section, name, value


def _apply(config: Config, name: str, value: str) -> None:
    if name == "interface":
        config.interface = value
    elif name == "update_interval_ms":
        try:
            config.update_interval_ms = _leading_int(value)
            if config.update_interval_ms <= 0:
                raise ValueError("update_interval_ms must be positive")
        except ValueError as exc:
            logger.error("Invalid update_interval_ms: %s", exc)


def parse_config(text: str) -> Config:
    """Build a Config from INI text; only the [monitor] section is used."""
    config = Config()
    for section, name, value in _ini_entries(text):
        if section == "monitor":
            _apply(config, name, value)
    return config


def load_config(filename: str | Path) -> Config:
    """Load settings from ``filename``, falling back to defaults if unreadable."""
    try:
        text = Path(filename).read_text(encoding="utf-8", errors="replace")
    except OSError:
        logger.error("Failed to load config file: %s, using defaults", filename)
        return Config()
    return parse_config(text)