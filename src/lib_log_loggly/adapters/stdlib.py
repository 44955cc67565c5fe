"""Bridge from the standard :mod:`logging` module to the appender.

Purpose
-------
Let applications that log through :mod:`logging` ship records to Loggly by
registering :class:`LogglyHandler` on any logger.

Contents
--------
* :func:`record_to_event` - convert a :class:`logging.LogRecord`.
* :class:`LogglyHandler` - handler forwarding events and draining on close.

System Role
-----------
A front-end in front of :class:`~lib_log_loggly.runtime.LogglyAppender`.
:func:`logging.shutdown` closes registered handlers at interpreter exit, which
is where the appender's pending sends are drained.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from lib_log_loggly.domain.events import LogEvent
from lib_log_loggly.domain.levels import LogLevel
from lib_log_loggly.domain.tags import is_tag_container

if TYPE_CHECKING:
    from lib_log_loggly.runtime import LogglyAppender

PACKAGE_LOGGER = "lib_log_loggly"
DEFAULT_CLOSE_TIMEOUT = 10.0

_EXCEPTION_FORMATTER = logging.Formatter()


def record_to_event(record: logging.LogRecord) -> LogEvent:
    """Translate ``record`` into a :class:`LogEvent`.

    The message and its arguments become the event argument list. A single
    mapping argument (which :mod:`logging` stores as ``record.args`` itself)
    stays the trailing argument, so ``log.info("signup", {"tags": ["web"]})``
    carries tags. Exception text is appended as the last argument.

    Examples
    --------
    >>> record = logging.LogRecord('app', logging.INFO, __file__, 1, 'user %s', ('ada',), None)
    >>> event = record_to_event(record)
    >>> event.category, event.level, event.args
    ('app', <LogLevel.INFO: 20>, ('user %s', 'ada'))
    """

    raw = record.args
    values: tuple[Any, ...]
    if isinstance(raw, Mapping):
        values = (record.msg, dict(raw))
    elif isinstance(raw, tuple):
        values = (record.msg, *raw)
    elif raw is None:
        values = (record.msg,)
    else:
        values = (record.msg, raw)

    if record.exc_info and record.exc_info[1] is not None:
        text = record.exc_text or _EXCEPTION_FORMATTER.formatException(record.exc_info)
        if is_tag_container(values[-1]):
            values = (*values[:-1], text, values[-1])
        else:
            values = (*values, text)

    return LogEvent(
        category=record.name,
        level=LogLevel.from_python_level(record.levelno),
        args=values,
        timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc),
        pid=record.process or os.getpid(),
    )


class LogglyHandler(logging.Handler):
    """Forward :mod:`logging` records to a :class:`LogglyAppender`."""

    def __init__(
        self,
        appender: "LogglyAppender",
        *,
        level: int = logging.NOTSET,
        close_timeout: float | None = DEFAULT_CLOSE_TIMEOUT,
    ) -> None:
        """Wrap ``appender``.

        ``close_timeout`` bounds how long :meth:`close` blocks the calling
        thread while the appender drains; ``None`` waits indefinitely.
        """
        super().__init__(level=level)
        self._appender = appender
        self._close_timeout = close_timeout

    @property
    def appender(self) -> "LogglyAppender":
        return self._appender

    def emit(self, record: logging.LogRecord) -> None:
        if record.name == PACKAGE_LOGGER or record.name.startswith(PACKAGE_LOGGER + "."):
            # Records about shipping must not be shipped themselves.
            return
        try:
            self._appender.append(record_to_event(record))
        except RecursionError:
            raise
        except Exception:  # noqa: BLE001
            self.handleError(record)

    def close(self) -> None:
        """Shut the appender down and wait for its pending sends."""
        try:
            self._appender.shutdown()
            if not self._appender.wait_until_idle(self._close_timeout):
                note = f"{self._appender.name} - {self._appender.pending_count} sends still pending at close"
                logging.getLogger(PACKAGE_LOGGER).warning(note)
        finally:
            super().close()


__all__ = ["DEFAULT_CLOSE_TIMEOUT", "LogglyHandler", "PACKAGE_LOGGER", "record_to_event"]
