"""Operating-system helpers: console width and a millisecond tick counter."""

from __future__ import annotations

import os
import time

DEFAULT_CONSOLE_WIDTH = 80


def get_console_width() -> int:
    """Return the column count of the terminal on stdin, or 80 if unknown."""
    try:
        columns = os.get_terminal_size(0).columns
    except (OSError, ValueError):
        return DEFAULT_CONSOLE_WIDTH
    return columns if columns > 0 else DEFAULT_CONSOLE_WIDTH


def get_millisecond_counter() -> int:
    """Return wall-clock milliseconds truncated to 32 bits (wraps around)."""
    return (time.time_ns() // 1_000_000) & 0xFFFFFFFF