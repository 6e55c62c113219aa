"""Process-wide leveled console logging."""

from __future__ import annotations

import sys
from enum import IntEnum


class LogLevel(IntEnum):
    """Verbosity levels; a message is shown when its level is <= the current one."""

    ALWAYS = 0
    DEBUG = 1
    VERBOSE = 2
    VERBOSE_EXTREME = 3


class _State:
    level: int = int(LogLevel.ALWAYS)


def get_log_level() -> int:
    """Return the current log level."""
    return _State.level


def set_log_level(level: int) -> None:
    """Set the current log level."""
    _State.level = int(level)


def log_msg(level: int, fmt: str, *args: object) -> None:
    """Print a printf-style message to stdout if ``level`` is enabled."""
    if int(level) > _State.level:
        return
    message = fmt % args if args else fmt
    sys.stdout.write(message + "\n")