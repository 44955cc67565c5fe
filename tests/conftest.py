from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Any, Callable

import pytest

from lib_log_loggly.domain import LogEvent, LogLevel


class HeldTransport:
    """Transport fake that records sends and leaves acknowledgement to the test."""

    def __init__(self) -> None:
        self.sent: list[dict[str, Any]] = []
        self.closed = 0

    def send(self, record: Mapping[str, Any], tags: Sequence[str], callback: Callable[[BaseException | None], None]) -> None:
        self.sent.append({"record": dict(record), "tags": list(tags), "callback": callback})

    def close(self) -> None:
        self.closed += 1

    def acknowledge(self, index: int = 0, error: BaseException | None = None) -> None:
        self.sent[index]["callback"](error)


class ErrorLines:
    """Error channel collecting failure lines."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def __call__(self, line: str) -> None:
        self.lines.append(line)


@pytest.fixture
def held_transport() -> HeldTransport:
    return HeldTransport()


@pytest.fixture
def error_lines() -> ErrorLines:
    return ErrorLines()


@pytest.fixture
def make_event() -> Callable[..., LogEvent]:
    def build(*args: Any, level: LogLevel = LogLevel.TRACE, category: str = "tests") -> LogEvent:
        return LogEvent(
            category=category,
            level=level,
            args=args,
            timestamp=datetime(2025, 9, 23, 12, 0, tzinfo=timezone.utc),
            pid=4321,
        )

    return build
