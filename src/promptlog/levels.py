"""
Severity levels and the gating rule used by the leveled output methods.
"""

from __future__ import annotations

from enum import IntEnum


class Level(IntEnum):
    """
    Logger verbosity, ordered from most to least verbose.

    A logger configured at a level shows every message whose category
    level is equal or higher.  ``QUIET`` shows nothing.
    """

    DEBUG = 0
    VERBOSE = 1
    INFO = 2
    WARNING = 3
    ERROR = 4
    CRITICAL = 5
    QUIET = 6

    @classmethod
    def parse(cls, value: str | int | Level) -> Level:
        """Return the level for a name (case-insensitive), int or ``Level``."""
        if isinstance(value, Level):
            return value
        if isinstance(value, int):
            return cls(value)
        try:
            return cls[value.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown level: {value!r}") from None


# Minimum level implied by each message category.
CATEGORY_LEVELS: dict[str, Level] = {
    "detail": Level.DEBUG,
    "info": Level.INFO,
    "success": Level.INFO,
    "warn": Level.WARNING,
    "err": Level.ERROR,
    "alert": Level.CRITICAL,
}


def should_emit(current: Level, minimum: Level) -> bool:
    """Return ``True`` if a message at *minimum* passes a logger at *current*."""
    if current == Level.QUIET:
        return False
    return current <= minimum
