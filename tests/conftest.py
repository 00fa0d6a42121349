from __future__ import annotations

import io

import pytest

from fuselog import registry
from fuselog.sinks import BaseSink


class RecordingSink(BaseSink):
    """Keeps every record it is offered."""

    def __init__(self) -> None:
        self.records: list[tuple[dict, bytes]] = []

    def emit(self, event_dict, line: bytes) -> None:
        self.records.append((dict(event_dict), line))

    @property
    def lines(self) -> list[bytes]:
        return [line for _, line in self.records]


class FailingSink(BaseSink):
    """Raises on every record."""

    def __init__(self) -> None:
        self.calls = 0

    def emit(self, event_dict, line: bytes) -> None:
        self.calls += 1
        raise RuntimeError("sink is down")


@pytest.fixture(autouse=True)
def fresh_registry(monkeypatch):
    """
    Gives every test its own registry state.
    The reserved handles are rebuilt so sinks never leak between tests.
    """
    loggers: dict = {}
    monkeypatch.setattr(registry, "_loggers", loggers)
    monkeypatch.setattr(registry, "_syslog_sink", None)
    monkeypatch.setattr(registry, "_cloudwatch_sinks", {})
    monkeypatch.setattr(registry, "log", registry.get_logger("main"))
    monkeypatch.setattr(registry, "fuse_log", registry.get_logger("fuse"))
    yield loggers


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def failing_sink() -> FailingSink:
    return FailingSink()


@pytest.fixture
def out() -> io.BytesIO:
    return io.BytesIO()
