"""
标准库日志拦截单元测试
"""

from __future__ import annotations

import logging

import pytest

from fuselog.handle import LogHandle
from fuselog.interceptors import RedirectStdLibHandler, intercept_third_party_loggers
from fuselog.levels import Level


class TestRedirectStdLibHandler:
    """stdlib 记录重定向测试"""

    @pytest.mark.parametrize(
        ("levelno", "expected"),
        [
            (1, Level.TRACE),
            (logging.DEBUG, Level.DEBUG),
            (15, Level.DEBUG),
            (logging.INFO, Level.INFO),
            (logging.WARNING, Level.WARN),
            (logging.ERROR, Level.ERROR),
            (logging.CRITICAL, Level.FATAL),
        ],
    )
    def test_to_level(self, levelno: int, expected: Level) -> None:
        assert RedirectStdLibHandler.to_level(levelno) is expected

    def test_record_lands_in_handle(self, out) -> None:
        handle = LogHandle("aws", out=out, with_timestamp=lambda: False)
        record = logging.makeLogRecord(
            {"name": "botocore.credentials", "msg": "found %s", "args": ("env",), "levelno": logging.WARNING}
        )
        RedirectStdLibHandler(handle).emit(record)
        assert out.getvalue() == b"aws.WARNING found env map[source:botocore.credentials]\n"


class TestInterceptThirdPartyLoggers:
    """第三方 logger 接管测试"""

    def test_routes_tree_into_handle(self, out) -> None:
        handle = LogHandle("aws", out=out, level=Level.DEBUG, with_timestamp=lambda: False)
        intercept_third_party_loggers(handle, roots=("fuselog-test-sdk",))
        try:
            logging.getLogger("fuselog-test-sdk.retry").debug("attempt %d", 2)
            assert out.getvalue() == b"aws.DEBUG attempt 2 map[source:fuselog-test-sdk.retry]\n"
            assert logging.getLogger("fuselog-test-sdk").propagate is False
        finally:
            lg = logging.getLogger("fuselog-test-sdk")
            lg.handlers = []
            lg.propagate = True
            lg.setLevel(logging.NOTSET)
