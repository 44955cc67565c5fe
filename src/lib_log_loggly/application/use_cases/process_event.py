"""Use case turning one log event into a pending Loggly send.

Purpose
-------
Tie together tag extraction, layout rendering, and dispatch for a single
event.

Contents
--------
* :func:`create_process_log_event` factory returning the per-event callable.

System Role
-----------
Application-layer orchestrator invoked by :class:`~lib_log_loggly.runtime.LogglyAppender`.
The callable never waits for the network; formatting failures surface
synchronously as :class:`~lib_log_loggly.domain.errors.FormattingError`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from lib_log_loggly.application.ports import DispatchPort, FormatterPort
from lib_log_loggly.domain import FormattingError, LogEvent, LogLevel, PendingSend, TaggedPayload, extract_tags

logger = logging.getLogger(__name__)

ProcessCallable = Callable[[LogEvent], "PendingSend | None"]


def create_process_log_event(
    *,
    formatter: FormatterPort,
    dispatch: DispatchPort,
    hostname: str,
    threshold: LogLevel = LogLevel.ALL,
) -> ProcessCallable:
    """Build the per-event pipeline.

    Parameters
    ----------
    formatter:
        Layout selected at configure time.
    dispatch:
        Queue tracking in-flight sends.
    hostname:
        Value recorded in the ``hostname`` field of every record.
    threshold:
        Events below this level are ignored and yield ``None``.

    Returns
    -------
    Callable[[LogEvent], PendingSend | None]
        Function returning the registered :class:`PendingSend`.

    Examples
    --------
    >>> class Recorder:
    ...     def __init__(self):
    ...         self.payloads = []
    ...     def submit(self, payload):
    ...         self.payloads.append(payload)
    ...         return PendingSend()
    ...     def is_idle(self):
    ...         return True
    ...     def await_idle(self, on_idle):
    ...         on_idle()
    >>> queue = Recorder()
    >>> process = create_process_log_event(
    ...     formatter=lambda event: ' '.join(map(str, event.args)),
    ...     dispatch=queue,
    ...     hostname='host',
    ... )
    >>> _ = process(LogEvent('app', LogLevel.TRACE, ['A', 'B', {'tags': ['x']}]))
    >>> queue.payloads[0].message, queue.payloads[0].tags
    ('A B', ('x',))
    """

    def process(event: LogEvent) -> PendingSend | None:
        if not event.level.is_enabled_for(threshold):
            return None
        remaining, tags = extract_tags(event.args)
        message = _render(formatter, event.replace(args=remaining, hostname=hostname))
        payload = TaggedPayload(
            message=message,
            tags=tags,
            level=event.level,
            category=event.category,
            timestamp=event.timestamp,
            hostname=hostname,
        )
        return dispatch.submit(payload)

    return process


def _render(formatter: FormatterPort, event: LogEvent) -> str:
    try:
        message = formatter(event)
    except FormattingError:
        raise
    except Exception as exc:
        raise FormattingError(f"layout failed to render event for category {event.category!r}: {exc}") from exc
    if not isinstance(message, str):
        raise FormattingError(f"layout returned {type(message).__name__}, expected str")
    return message


__all__ = ["ProcessCallable", "create_process_log_event"]
