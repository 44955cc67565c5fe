"""Log level abstraction mirroring the severities of category-based loggers.

Purpose
-------
Offer a domain-specific representation of log severities that extends the
stdlib levels with ``TRACE``, ``FATAL``, and ``MARK`` so events from
category-routed front-ends keep their original severity on the wire.

Contents
--------
* :class:`LogLevel` enum with conversion helpers and the wire label.

System Role
-----------
Used by the front-ends to build :class:`~lib_log_loggly.domain.events.LogEvent`
instances and by the appender to apply its threshold and to label records sent
to Loggly.
"""

from __future__ import annotations

import logging
from enum import Enum


class LogLevel(Enum):
    """Ordered logging levels used throughout the system."""

    ALL = 0
    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40
    FATAL = 50
    MARK = 9000
    OFF = 10000

    @property
    def level_str(self) -> str:
        """Return the upper-case label sent in the ``level`` field of records."""

        return self.name

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.value >= other.value

    def is_enabled_for(self, threshold: "LogLevel") -> bool:
        """Return ``True`` when this level passes ``threshold``.

        Examples
        --------
        >>> LogLevel.INFO.is_enabled_for(LogLevel.DEBUG)
        True
        >>> LogLevel.TRACE.is_enabled_for(LogLevel.INFO)
        False
        """

        return self >= threshold

    def to_python_level(self) -> int:
        """Return the closest :mod:`logging` constant for this level."""

        return _PYTHON_LEVELS.get(self, self.value)

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        normalized = name.strip().upper()
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc

    @classmethod
    def from_python_level(cls, level: int) -> "LogLevel":
        """Translate a stdlib logging level integer into :class:`LogLevel`.

        Non-standard numeric levels map to the closest level at or below them.

        Examples
        --------
        >>> LogLevel.from_python_level(logging.WARNING)
        <LogLevel.WARN: 30>
        >>> LogLevel.from_python_level(25)
        <LogLevel.INFO: 20>
        """

        if level >= logging.CRITICAL:
            return cls.FATAL
        candidates = [member for member in (cls.TRACE, cls.DEBUG, cls.INFO, cls.WARN, cls.ERROR) if member.value <= level]
        return candidates[-1] if candidates else cls.ALL

    @classmethod
    def coerce(cls, value: "str | int | LogLevel") -> "LogLevel":
        """Accept a member, a name, or a stdlib numeric level."""

        if isinstance(value, LogLevel):
            return value
        if isinstance(value, int):
            return cls.from_python_level(value)
        return cls.from_name(value)


_ALIASES = {
    "WARNING": "WARN",
    "CRITICAL": "FATAL",
}
# Stdlib spellings accepted by :meth:`LogLevel.from_name`.

_PYTHON_LEVELS = {
    LogLevel.ALL: logging.NOTSET,
    LogLevel.FATAL: logging.CRITICAL,
    LogLevel.MARK: logging.CRITICAL,
}


__all__ = ["LogLevel"]
