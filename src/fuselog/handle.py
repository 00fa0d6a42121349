"""
Named logger handle.

Emission runs a structlog processor chain whose last step renders the line
with the handle's ``LineFormatter``; the wrapped logger then writes that line
to the handle's output and offers the record to the attached sinks.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import datetime
from typing import Any, BinaryIO

import structlog
from structlog.typing import EventDict, WrappedLogger

from .formatters import LineFormatter
from .io import StderrOutput, StreamToLogger
from .levels import Level
from .sinks import BaseSink, LevelHooks

# =============================================================================
# Structlog Processors
# =============================================================================


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add local wall-clock time to log event."""
    event_dict["timestamp"] = datetime.now()
    return event_dict


class _Dispatcher:
    """Wrapped logger behind a handle's processor chain."""

    def __init__(self, handle: LogHandle):
        self._handle = handle

    def msg(self, line: bytes, event_dict: EventDict) -> None:
        handle = self._handle
        with handle._lock:
            try:
                handle.out.write(line)
                handle.out.flush()
            except Exception:
                pass  # Sinks still get the record
        handle.hooks.fire(Level.parse(event_dict["level"]), event_dict, line)

    trace = debug = info = warning = error = fatal = panic = msg


# =============================================================================
# Log Handle
# =============================================================================


class LogHandle:
    """A named logger with a threshold, an output and a set of sinks.

    Args:
        name: Logger name, printed on every line.
        out: Binary stream for formatted lines (default: stderr).
        level: Threshold below which records are dropped.
        with_timestamp: Passed to the ``LineFormatter``.
    """

    def __init__(
        self,
        name: str,
        *,
        out: BinaryIO | None = None,
        level: Level | int | str = Level.INFO,
        with_timestamp: Callable[[], bool] | None = None,
    ):
        if not name:
            raise ValueError("logger name must not be empty")
        self.name = name
        self.level = Level.parse(level)
        self.out = out if out is not None else StderrOutput()
        self.formatter = LineFormatter(name, with_timestamp)
        self.hooks = LevelHooks()
        self._lock = threading.Lock()
        self._dispatcher = _Dispatcher(self)
        self._processors = [
            self._filter_by_level,
            structlog.stdlib.add_log_level,
            add_timestamp,
            self._render,
        ]

    def __repr__(self) -> str:
        return f"<LogHandle {self.name!r} level={self.level.label}>"

    def _filter_by_level(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        if Level.parse(method_name) < self.level:
            raise structlog.DropEvent
        return event_dict

    def _render(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> tuple:
        line = self.formatter(logger, method_name, event_dict)
        return (line, event_dict), {}

    # -------------------------------------------------------------------------
    # Emission
    # -------------------------------------------------------------------------

    def log_at(self, level: Level | int | str, message: str, /, **context: Any) -> None:
        """Emit ``message`` at ``level`` with optional key/value context."""
        try:
            method = Level.parse(level).method
            bound = structlog.BoundLogger(self._dispatcher, self._processors, context)
            getattr(bound, method)(message)
        except Exception:
            pass  # Logging never fails the caller

    def trace(self, message: str, /, **context: Any) -> None:
        self.log_at(Level.TRACE, message, **context)

    def debug(self, message: str, /, **context: Any) -> None:
        self.log_at(Level.DEBUG, message, **context)

    def info(self, message: str, /, **context: Any) -> None:
        self.log_at(Level.INFO, message, **context)

    def warning(self, message: str, /, **context: Any) -> None:
        self.log_at(Level.WARN, message, **context)

    warn = warning

    def error(self, message: str, /, **context: Any) -> None:
        self.log_at(Level.ERROR, message, **context)

    def fatal(self, message: str, /, **context: Any) -> None:
        self.log_at(Level.FATAL, message, **context)

    def panic(self, message: str, /, **context: Any) -> None:
        self.log_at(Level.PANIC, message, **context)

    def log(self, *args: Any) -> None:
        """Line-style entry point for SDK loggers; emits at DEBUG."""
        self.debug(" ".join(str(arg) for arg in args))

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    def set_level(self, level: Level | int | str) -> None:
        self.level = Level.parse(level)

    def add_sink(self, sink: BaseSink) -> None:
        """Attach ``sink``; attaching the same sink twice is a no-op."""
        self.hooks.add(sink)

    def writer(self, level: Level | int | str) -> StreamToLogger:
        """Binary line writer emitting one record per line at ``level``."""
        return StreamToLogger(self, Level.parse(level))
