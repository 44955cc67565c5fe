"""Domain event describing a single structured logging call.

Purpose
-------
Provide an immutable representation of the events emitted by the upstream
logging front-end: the category, the severity, and the raw argument list that
the layout later renders into a message.

Contents
--------
* :class:`LogEvent` dataclass with helper methods.
* Utility function ``_ensure_aware`` for timestamp validation.

System Role
-----------
Sits in the domain layer; the appender consumes events synchronously and never
mutates them. Tag extraction produces copies through :meth:`LogEvent.replace`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any

from .levels import LogLevel


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` is timezone-aware and normalise to UTC."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    return ts.astimezone(timezone.utc)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True, frozen=True)
class LogEvent:
    """Immutable log event produced by the upstream source.

    Attributes
    ----------
    category:
        Logical category (logger name) the event was emitted under.
    level:
        :class:`LogLevel` severity associated with the event.
    args:
        Ordered argument list passed to the logging call.
    timestamp:
        Time of the event in timezone-aware UTC.
    pid:
        Process identifier of the emitter.
    hostname:
        Host the event is shipped from; stamped by the appender before the
        layout runs, ``None`` when the front-end leaves it unset.

    Examples
    --------
    >>> event = LogEvent('app', LogLevel.INFO, ['hello', {'tags': ['a']}])
    >>> event.args
    ('hello', {'tags': ['a']})
    >>> event.timestamp.tzinfo is not None
    True
    """

    category: str
    level: LogLevel
    args: tuple[Any, ...] = ()
    timestamp: datetime = field(default_factory=_now)
    pid: int = field(default_factory=os.getpid)
    hostname: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp))
        object.__setattr__(self, "args", tuple(self.args))
        if not isinstance(self.level, LogLevel):
            raise TypeError("level must be a LogLevel")

    def replace(self, **changes: Any) -> "LogEvent":
        """Return a copied event with ``changes`` applied."""

        return replace(self, **changes)


__all__ = ["LogEvent"]
