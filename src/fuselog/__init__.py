"""
Named logging façade.

Provides a process-wide registry of named loggers with optional global sinks:
- syslog: the local system log daemon, at debug severity
- cloudwatch: AWS CloudWatch Logs (region, group, stream)

Every handle renders records as one line::

    2025/01/02 15:04:05.000000 main.INFO hello map[key:value]

Library: structlog processor chain per handle; boto3 for CloudWatch Logs.
"""

from .handle import LogHandle
from .interceptors import intercept_third_party_loggers
from .io import StreamToLogger
from .levels import Level
from .registry import (
    adapt_as_line_writer,
    get_logger,
    get_std_logger,
    init_from_settings,
    init_loggers,
    syslog_installed,
)
from .sinks import BaseSink, CloudWatchSink, SyslogSink

__all__ = [
    "BaseSink",
    "CloudWatchSink",
    "Level",
    "LogHandle",
    "StreamToLogger",
    "SyslogSink",
    "adapt_as_line_writer",
    "get_logger",
    "get_std_logger",
    "init_from_settings",
    "init_loggers",
    "intercept_third_party_loggers",
    "syslog_installed",
]
