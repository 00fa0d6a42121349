"""
Interceptors for capturing standard library and third-party logs.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .handle import LogHandle
from .levels import Level

DEFAULT_ROOTS = ("botocore", "boto3", "urllib3")


class RedirectStdLibHandler(logging.Handler):
    """
    Redirect standard library logging records to a log handle.
    Lets SDK output (botocore retries, credential lookups, ...) land in the
    same line format as the rest of the process.
    """

    def __init__(self, handle: LogHandle, level: int = logging.NOTSET):
        super().__init__(level)
        self.handle = handle

    @staticmethod
    def to_level(levelno: int) -> Level:
        """Map a stdlib level number onto the closest ``Level`` at or below it."""
        for level in reversed(Level):
            if levelno >= level:
                return level
        return Level.TRACE

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            self.handle.log_at(self.to_level(record.levelno), msg, source=record.name)
        except Exception:
            self.handleError(record)


def intercept_third_party_loggers(handle: LogHandle, roots: Iterable[str] = DEFAULT_ROOTS) -> None:
    """Route the given stdlib logger trees into ``handle``."""
    redirect = RedirectStdLibHandler(handle)
    for logger_name in roots:
        lg = logging.getLogger(logger_name)
        lg.handlers = [redirect]
        lg.setLevel(int(handle.level))
        lg.propagate = False
