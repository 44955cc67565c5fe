"""Category logger front-end feeding registered event sinks."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from lib_log_loggly.application.ports import EventSink
from lib_log_loggly.domain import LogEvent, LogLevel


class LoggerProxy:
    """Lightweight facade for category-based logging calls.

    Sinks are registered explicitly; every event at or above ``level`` is
    handed to each of them in registration order.

    Examples
    --------
    >>> class Collect:
    ...     def __init__(self):
    ...         self.events = []
    ...     def append(self, event):
    ...         self.events.append(event)
    >>> sink = Collect()
    >>> log = LoggerProxy('app', [sink], level='debug')
    >>> log.trace('hidden')
    >>> log.info('shown', {'tags': ['x']})
    >>> [event.args for event in sink.events]
    [('shown', {'tags': ['x']})]
    """

    def __init__(
        self,
        category: str,
        sinks: Iterable[EventSink] = (),
        *,
        level: str | int | LogLevel = LogLevel.ALL,
    ) -> None:
        self._category = category
        self._sinks: list[EventSink] = list(sinks)
        self._level = LogLevel.coerce(level)

    @property
    def category(self) -> str:
        return self._category

    @property
    def level(self) -> LogLevel:
        return self._level

    @level.setter
    def level(self, value: str | int | LogLevel) -> None:
        self._level = LogLevel.coerce(value)

    def add_sink(self, sink: EventSink) -> None:
        """Register ``sink`` to receive subsequent events."""
        self._sinks.append(sink)

    def remove_sink(self, sink: EventSink) -> None:
        self._sinks.remove(sink)

    def is_level_enabled(self, level: str | int | LogLevel) -> bool:
        return LogLevel.coerce(level).is_enabled_for(self._level)

    def log(self, level: str | int | LogLevel, *args: Any) -> None:
        """Emit ``args`` at ``level``; the trailing ``{'tags': [...]}`` mapping carries tags."""
        resolved = LogLevel.coerce(level)
        if resolved in (LogLevel.ALL, LogLevel.OFF):
            raise ValueError(f"{resolved.name} is a threshold, not an event level")
        if not resolved.is_enabled_for(self._level):
            return
        event = LogEvent(category=self._category, level=resolved, args=args)
        for sink in self._sinks:
            sink.append(event)

    def trace(self, *args: Any) -> None:
        self.log(LogLevel.TRACE, *args)

    def debug(self, *args: Any) -> None:
        self.log(LogLevel.DEBUG, *args)

    def info(self, *args: Any) -> None:
        self.log(LogLevel.INFO, *args)

    def warn(self, *args: Any) -> None:
        self.log(LogLevel.WARN, *args)

    warning = warn

    def error(self, *args: Any) -> None:
        self.log(LogLevel.ERROR, *args)

    def fatal(self, *args: Any) -> None:
        self.log(LogLevel.FATAL, *args)

    def mark(self, *args: Any) -> None:
        self.log(LogLevel.MARK, *args)


__all__ = ["LoggerProxy"]
