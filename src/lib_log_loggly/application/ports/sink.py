"""Port implemented by appenders registered with a logging front-end."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_loggly.domain.events import LogEvent


@runtime_checkable
class EventSink(Protocol):
    """Accept events routed by a front-end."""

    def append(self, event: LogEvent) -> None:
        """Consume ``event`` without blocking on network I/O."""


__all__ = ["EventSink"]
