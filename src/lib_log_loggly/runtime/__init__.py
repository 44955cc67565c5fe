"""Runtime façade that wires the Loggly appender.

Purpose
-------
Expose the entry points host applications use (`configure`, `get_logger`,
`LogglyAppender.shutdown`) instead of importing the inner layers directly.

Contents
--------
* ``configure`` – composition root building one appender from options.
* ``get_logger`` – category logger proxy with explicit sink registration.
* ``LogglyAppender`` / ``AppenderState`` – lifecycle controller.

System Role
-----------
Outer shell of the clean-architecture layering: the domain and application
layers only see ports, while this module decides which adapters implement
them.
"""

from __future__ import annotations

import socket
from collections.abc import Mapping
from typing import Any

from lib_log_loggly.adapters.dispatch import DiagnosticHook, DispatchQueue, ErrorChannel
from lib_log_loggly.adapters.layouts import LAYOUTS, LayoutRegistry
from lib_log_loggly.adapters.loggly import LogglyTransport
from lib_log_loggly.application.ports import EventSink, TransportPort
from lib_log_loggly.application.use_cases import create_process_log_event
from lib_log_loggly.domain import LogEvent, LogLevel

from ._appender import AppenderState, LogglyAppender
from ._logger import LoggerProxy
from ._settings import build_appender_config


def configure(
    options: Mapping[str, Any],
    *,
    transport: TransportPort | None = None,
    layouts: LayoutRegistry | None = None,
    error_channel: ErrorChannel | None = None,
    diagnostic: DiagnosticHook = None,
    hostname: str | None = None,
) -> LogglyAppender:
    """Build an active appender from ``options``.

    Why
    ---
    Hosts call ``configure`` once per appender during startup. Centralising the
    wiring here keeps the dispatch and shutdown logic independent of the HTTP
    client and of the layout registry.

    Inputs
    ------
    options:
        Mapping with ``token`` and ``subdomain`` (required), optional ``tags``,
        ``layout`` (``{"type": ..., **layout_options}``), ``name``, ``host``,
        ``timeout``, ``max_workers``, and ``level``.
    transport:
        Replacement for the default :class:`LogglyTransport`; receives every
        ``send(record, tags, callback)`` call.
    layouts:
        Registry used to resolve ``layout``; defaults to :data:`LAYOUTS`.
    error_channel:
        Receives one line per failed send; defaults to ``sys.stderr``.
    diagnostic:
        Optional hook receiving ``send_succeeded`` / ``send_failed`` events.
    hostname:
        Value for the ``hostname`` record field; defaults to the local host.

    Outputs
    -------
    :class:`LogglyAppender` in the ``ACTIVE`` state.

    Side Effects
    ------------
    Raises :class:`~lib_log_loggly.domain.errors.ConfigurationError` when
    credentials are missing or the layout is unknown. Creates the transport's
    worker pool when no transport is injected.

    Examples
    --------
    >>> class Recorder:
    ...     def __init__(self):
    ...         self.sent = []
    ...     def send(self, record, tags, callback):
    ...         self.sent.append((record['msg'], list(tags)))
    ...         callback(None)
    ...     def close(self):
    ...         pass
    >>> transport = Recorder()
    >>> appender = configure({'token': 't', 'subdomain': 's'}, transport=transport)
    >>> _ = appender.append(LogEvent('app', LogLevel.TRACE, ['A', 'B', {'tags': ['x', 'y']}]))
    >>> transport.sent
    [('A B', ['x', 'y'])]
    """

    config = build_appender_config(options)
    formatter = (layouts if layouts is not None else LAYOUTS).select(config.layout)
    client = transport if transport is not None else LogglyTransport(config)
    dispatch = DispatchQueue(client, name=config.name, error_channel=error_channel, diagnostic=diagnostic)
    process = create_process_log_event(
        formatter=formatter,
        dispatch=dispatch,
        hostname=hostname if hostname is not None else socket.gethostname(),
        threshold=config.level,
    )
    appender = LogglyAppender(config=config, process=process, dispatch=dispatch, transport=client)
    appender.activate()
    return appender


def get_logger(
    category: str,
    *sinks: EventSink,
    level: str | int | LogLevel = LogLevel.ALL,
) -> LoggerProxy:
    """Return a logger proxy for ``category`` delivering to ``sinks``."""

    return LoggerProxy(category, sinks, level=level)


__all__ = [
    "AppenderState",
    "LoggerProxy",
    "LogglyAppender",
    "configure",
    "get_logger",
]
