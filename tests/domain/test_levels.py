from __future__ import annotations

import logging

import pytest

from lib_log_loggly.domain.levels import LogLevel


@pytest.mark.parametrize(
    "name, expected",
    [
        ("trace", LogLevel.TRACE),
        ("DEBUG", LogLevel.DEBUG),
        ("Info", LogLevel.INFO),
        ("warn", LogLevel.WARN),
        ("warning", LogLevel.WARN),
        ("error", LogLevel.ERROR),
        ("FATAL", LogLevel.FATAL),
        ("critical", LogLevel.FATAL),
        ("mark", LogLevel.MARK),
    ],
)
def test_from_name_accepts_case_insensitive_matches(name: str, expected: LogLevel) -> None:
    assert LogLevel.from_name(name) is expected


def test_from_name_rejects_unknown_level() -> None:
    with pytest.raises(ValueError, match="Unknown log level"):
        LogLevel.from_name("verbose")


@pytest.mark.parametrize(
    "level, expected",
    [
        (logging.DEBUG, LogLevel.DEBUG),
        (logging.INFO, LogLevel.INFO),
        (logging.WARNING, LogLevel.WARN),
        (logging.ERROR, LogLevel.ERROR),
        (logging.CRITICAL, LogLevel.FATAL),
        (5, LogLevel.TRACE),
        (25, LogLevel.INFO),
        (0, LogLevel.ALL),
    ],
)
def test_from_python_level_maps_to_closest_lower_level(level: int, expected: LogLevel) -> None:
    assert LogLevel.from_python_level(level) is expected


def test_levels_are_ordered() -> None:
    ordered = [LogLevel.ALL, LogLevel.TRACE, LogLevel.DEBUG, LogLevel.INFO, LogLevel.WARN, LogLevel.ERROR, LogLevel.FATAL, LogLevel.MARK, LogLevel.OFF]
    assert sorted(reversed(ordered)) == ordered
    assert LogLevel.TRACE < LogLevel.DEBUG <= LogLevel.DEBUG


def test_is_enabled_for_respects_threshold() -> None:
    assert LogLevel.ERROR.is_enabled_for(LogLevel.WARN)
    assert not LogLevel.DEBUG.is_enabled_for(LogLevel.INFO)
    assert not LogLevel.MARK.is_enabled_for(LogLevel.OFF)


def test_coerce_accepts_members_names_and_numbers() -> None:
    assert LogLevel.coerce(LogLevel.INFO) is LogLevel.INFO
    assert LogLevel.coerce("trace") is LogLevel.TRACE
    assert LogLevel.coerce(logging.ERROR) is LogLevel.ERROR


def test_level_str_is_wire_label() -> None:
    assert LogLevel.TRACE.level_str == "TRACE"
    assert LogLevel.WARN.level_str == "WARN"


def test_to_python_level_round_trips_standard_levels() -> None:
    assert LogLevel.INFO.to_python_level() == logging.INFO
    assert LogLevel.FATAL.to_python_level() == logging.CRITICAL
