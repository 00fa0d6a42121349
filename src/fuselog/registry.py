"""
Process-wide logger registry.

Handles are created on first lookup and live until the process exits. The
one-shot ``init_loggers`` step attaches the syslog and CloudWatch sinks to
every handle registered at that moment. Handles created afterwards pick up
the syslog sink when they are built, but never the CloudWatch sink.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from botocore.exceptions import BotoCoreError, ClientError

from .handle import LogHandle
from .io import StreamToLogger
from .levels import Level
from .sinks import CloudWatchSink, SyslogSink

if TYPE_CHECKING:
    from .config import LoggingSettings

# =============================================================================
# Global State
# =============================================================================

_lock = threading.Lock()
_loggers: dict[str, LogHandle] = {}
_syslog_sink: SyslogSink | None = None
_cloudwatch_sinks: dict[tuple[str, str, str], CloudWatchSink] = {}


def syslog_installed() -> bool:
    """Whether the process-wide syslog sink has been installed."""
    return _syslog_sink is not None


def _with_timestamp() -> bool:
    return _syslog_sink is None


def new_logger(name: str) -> LogHandle:
    """Build an unregistered handle with registry defaults."""
    handle = LogHandle(name, with_timestamp=_with_timestamp)
    if _syslog_sink is not None:
        handle.add_sink(_syslog_sink)
    return handle


def get_logger(name: str) -> LogHandle:
    """Return the handle registered under ``name``, creating it on first use."""
    with _lock:
        handle = _loggers.get(name)
        if handle is None:
            handle = _loggers[name] = new_logger(name)
        return handle


log = get_logger("main")
fuse_log = get_logger("fuse")

# =============================================================================
# Configuration Logic
# =============================================================================


def _attach(sink, handles: list[LogHandle]) -> None:
    for handle in handles:
        handle.add_sink(sink)


def _init_cloudwatch(region: str, group: str, stream: str) -> None:
    key = (region, group, stream)
    sink = _cloudwatch_sinks.get(key)
    if sink is None:
        try:
            sink = CloudWatchSink(group, stream, region=region)
        except (BotoCoreError, ClientError) as exc:
            log.warning(f"Could not create cloudwatch log: {exc}")
            return

    with _lock:
        sink = _cloudwatch_sinks.setdefault(key, sink)
        handles = list(_loggers.values())
    _attach(sink, handles)


def _init_syslog() -> None:
    global _syslog_sink

    sink = _syslog_sink
    if sink is None:
        try:
            sink = SyslogSink()
        except OSError as exc:
            log.warning(f"Unable to connect to local syslog daemon: {exc}")
            return

    # Publishing the sink and taking the snapshot under one lock means every
    # handle is either in the snapshot or built after the flag is set.
    with _lock:
        if _syslog_sink is None:
            _syslog_sink = sink
        sink = _syslog_sink
        handles = list(_loggers.values())
    _attach(sink, handles)


def init_loggers(syslog: bool = False, cw_region: str = "", cw_group: str = "", cw_stream: str = "") -> None:
    """
    Attach global sinks to every registered handle.

    Args:
        syslog: Connect to the local syslog daemon at debug severity.
        cw_region: AWS region of the CloudWatch Logs sink.
        cw_group: CloudWatch log group name.
        cw_stream: CloudWatch log stream name.

    The CloudWatch sink is only built when all three of its arguments are
    non-empty. A sink that cannot be built is reported as a warning on the
    ``main`` logger and does not affect the other one.
    """
    if cw_region and cw_group and cw_stream:
        _init_cloudwatch(cw_region, cw_group, cw_stream)

    if syslog:
        _init_syslog()


# =============================================================================
# Line-Writer Adaptation
# =============================================================================


def adapt_as_line_writer(handle: LogHandle, level: Level | int | str) -> StreamToLogger:
    """
    Adapt ``handle`` for a library that writes free-form lines.

    The handle's formatter is re-leveled to ``level`` and its threshold is
    lowered to ``level``. Both changes stay in place afterwards, so native
    emissions on the same handle are also labelled ``level`` until the
    handle is adapted again.
    """
    level = Level.parse(level)
    with _lock:
        handle.formatter.level_override = level
        handle.level = level
        return handle.writer(level)


def get_std_logger(handle: LogHandle, level: Level | int | str) -> logging.Logger:
    """Stdlib logger writing through ``adapt_as_line_writer``."""
    level = Level.parse(level)
    stream_handler = logging.StreamHandler(adapt_as_line_writer(handle, level))
    stream_handler.setFormatter(logging.Formatter("%(message)s"))

    std_logger = logging.getLogger(f"fuselog.{handle.name}")
    std_logger.handlers = [stream_handler]
    std_logger.setLevel(int(level))
    std_logger.propagate = False
    return std_logger


# =============================================================================
# Settings Entry Point
# =============================================================================


def init_from_settings(settings: LoggingSettings | None = None) -> None:
    """Apply ``LoggingSettings`` (from the environment by default)."""
    if settings is None:
        from .config import settings as app_settings

        settings = app_settings.logging

    for handle in (log, fuse_log):
        handle.set_level(settings.level)

    init_loggers(
        settings.syslog,
        settings.cloudwatch_region,
        settings.cloudwatch_group,
        settings.cloudwatch_stream,
    )
