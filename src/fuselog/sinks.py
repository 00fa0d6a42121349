"""
Log sink abstractions and concrete implementations.

A sink receives every record its handle emits at one of the sink's levels,
after the record has been written to the handle's own output.
"""

from __future__ import annotations

import logging
import os
import sys
import threading
from abc import ABC, abstractmethod
from datetime import datetime
from logging.handlers import SysLogHandler
from typing import TYPE_CHECKING

import boto3
from structlog.typing import EventDict

from .levels import ALL_LEVELS, Level

if TYPE_CHECKING:
    from botocore.client import BaseClient


# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class BaseSink(ABC):
    """Abstract base class for log sinks."""

    #: Levels this sink accepts. Both concrete sinks take everything.
    levels: tuple[Level, ...] = ALL_LEVELS

    @abstractmethod
    def emit(self, event_dict: EventDict, line: bytes) -> None:
        """Deliver one record.

        Args:
            event_dict: The processed structlog event.
            line: The record as rendered by the handle's formatter.
        """
        ...


class LevelHooks(dict[Level, list[BaseSink]]):
    """Sinks of one handle, keyed by level, in attachment order."""

    def __init__(self) -> None:
        super().__init__()
        self._lock = threading.Lock()

    def add(self, sink: BaseSink) -> None:
        with self._lock:
            for level in sink.levels:
                registered = self.setdefault(level, [])
                if sink not in registered:
                    registered.append(sink)

    def fire(self, level: Level, event_dict: EventDict, line: bytes) -> None:
        """Offer a record to every sink registered for ``level``."""
        with self._lock:
            sinks = list(self.get(level, ()))
        for sink in sinks:
            try:
                sink.emit(event_dict, line)
            except Exception:
                pass  # Fail silently to avoid breaking the application


# =============================================================================
# System Log Sink
# =============================================================================


SYSLOG_SOCKETS = ("/dev/log", "/var/run/syslog", "/var/run/log")


def default_syslog_address() -> str:
    """Local syslog socket for this platform (the first one that exists)."""
    for path in SYSLOG_SOCKETS:
        if os.path.exists(path):
            return path
    return SYSLOG_SOCKETS[0]


class _SyslogHandler(SysLogHandler):
    # Send errors up to LevelHooks.fire instead of printing a traceback.
    def handleError(self, record: logging.LogRecord) -> None:
        raise


class SyslogSink(BaseSink):
    """Local syslog daemon sink, accepting everything down to debug.

    Connecting happens in the constructor, so an unreachable daemon raises
    ``OSError`` here rather than on the first record.
    """

    LEVEL_NAMES = {
        Level.TRACE: "DEBUG",
        Level.DEBUG: "DEBUG",
        Level.INFO: "INFO",
        Level.WARN: "WARNING",
        Level.ERROR: "ERROR",
        Level.FATAL: "CRITICAL",
        Level.PANIC: "EMERG",
    }

    def __init__(self, address: str | tuple[str, int] | None = None, facility: int = SysLogHandler.LOG_USER):
        self._handler = _SyslogHandler(address=address or default_syslog_address(), facility=facility)
        self._handler.priority_map = {**SysLogHandler.priority_map, "EMERG": "emerg"}
        self._handler.ident = f"{os.path.basename(sys.argv[0]) or 'python'}[{os.getpid()}]: "

    def emit(self, event_dict: EventDict, line: bytes) -> None:
        level = Level.parse(event_dict.get("level", "info"))
        record = logging.makeLogRecord(
            {
                "msg": line.decode("utf-8", errors="replace").rstrip("\n"),
                "levelno": int(level),
                "levelname": self.LEVEL_NAMES[level],
            }
        )
        self._handler.emit(record)


# =============================================================================
# Remote Sink (CloudWatch Logs)
# =============================================================================


class CloudWatchSink(BaseSink):
    """AWS CloudWatch Logs sink bound to one region, group and stream.

    The group and stream are created when missing. Any ``BotoCoreError`` or
    ``ClientError`` raised while doing so propagates to the caller.
    """

    def __init__(self, group: str, stream: str, *, region: str, client: BaseClient | None = None):
        self.group = group
        self.stream = stream
        self.region = region
        self._client = client or boto3.client("logs", region_name=region)
        self._lock = threading.Lock()
        self._ensure_stream()

    def _ensure_stream(self) -> None:
        try:
            response = self._client.describe_log_streams(logGroupName=self.group, logStreamNamePrefix=self.stream)
        except self._client.exceptions.ResourceNotFoundException:
            self._client.create_log_group(logGroupName=self.group)
            response = {"logStreams": []}

        if any(s.get("logStreamName") == self.stream for s in response.get("logStreams", [])):
            return
        try:
            self._client.create_log_stream(logGroupName=self.group, logStreamName=self.stream)
        except self._client.exceptions.ResourceAlreadyExistsException:
            pass

    def emit(self, event_dict: EventDict, line: bytes) -> None:
        timestamp = event_dict.get("timestamp") or datetime.now()
        event = {
            "timestamp": int(timestamp.timestamp() * 1000),
            "message": line.decode("utf-8", errors="replace"),
        }
        with self._lock:
            self._client.put_log_events(logGroupName=self.group, logStreamName=self.stream, logEvents=[event])
