"""
Severity levels.
"""

from __future__ import annotations

from enum import IntEnum


class Level(IntEnum):
    """Log severity, ordered from least to most severe.

    Values line up with the stdlib ``logging`` levels where both define one,
    so a ``Level`` can be handed to ``logging`` APIs directly.
    """

    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40
    FATAL = 50
    PANIC = 60

    @property
    def method(self) -> str:
        """Logger method name for this level (``warning`` for WARN)."""
        if self is Level.WARN:
            return "warning"
        return self.name.lower()

    @property
    def label(self) -> str:
        """Upper-case spelling used in formatted lines."""
        return self.method.upper()

    def __str__(self) -> str:
        return self.method

    @classmethod
    def parse(cls, value: Level | int | str) -> Level:
        """Resolve a level from a ``Level``, an int value or a name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            return cls(value)
        name = str(value).strip().upper()
        if name == "WARNING":
            name = "WARN"
        try:
            return cls[name]
        except KeyError:
            raise ValueError(f"not a valid log level: {value!r}") from None


ALL_LEVELS: tuple[Level, ...] = tuple(Level)
