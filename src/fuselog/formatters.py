"""
Line formatter for log records.

Renders one event dict as a single byte line::

    2025/01/02 15:04:05.000000 main.INFO hello map[key:value]

The timestamp is dropped while a system log sink is installed, since the
syslog daemon stamps records itself.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from structlog.typing import EventDict, WrappedLogger

from .levels import Level

# =============================================================================
# Context Rendering
# =============================================================================

RESERVED_KEYS = frozenset({"event", "level", "timestamp"})

_ESCAPES = str.maketrans({"\n": "\\n", "\r": "\\r"})


def render_value(value: Any) -> str:
    """Render a context value the same way for every record."""
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Mapping):
        return render_mapping(value)
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(render_value(v) for v in value) + "]"
    return str(value)


def render_mapping(mapping: Mapping[Any, Any]) -> str:
    """Render a mapping as ``map[k1:v1 k2:v2]``, keys in insertion order."""
    pairs = " ".join(f"{key}:{render_value(value)}" for key, value in mapping.items())
    return f"map[{pairs}]"


# =============================================================================
# Line Formatter
# =============================================================================


class LineFormatter:
    """Per-handle structlog renderer producing ``bytes``.

    Args:
        name: Logger name printed before the level.
        with_timestamp: Zero-argument callable deciding whether the timestamp
            prefix is written. Defaults to always.
    """

    TIME_FORMAT = "%Y/%m/%d %H:%M:%S.%f"

    def __init__(self, name: str, with_timestamp: Callable[[], bool] | None = None):
        self.name = name
        self.with_timestamp = with_timestamp or (lambda: True)
        self.level_override: Level | None = None

    def effective_level(self, event_dict: EventDict) -> Level:
        if self.level_override is not None:
            return self.level_override
        return Level.parse(event_dict.get("level", "info"))

    def format(self, event_dict: EventDict) -> bytes:
        """Format an event dict into one newline-terminated line."""
        parts = []
        if self.with_timestamp():
            timestamp = event_dict.get("timestamp") or datetime.now()
            parts.append(timestamp.strftime(self.TIME_FORMAT) + " ")

        parts.append(f"{self.name}.{self.effective_level(event_dict).label} {event_dict.get('event', '')}")

        context = {k: v for k, v in event_dict.items() if k not in RESERVED_KEYS}
        if context:
            parts.append(" " + render_mapping(context))

        line = "".join(parts).translate(_ESCAPES)
        return (line + "\n").encode("utf-8", errors="replace")

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> bytes:
        return self.format(event_dict)
