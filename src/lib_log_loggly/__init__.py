"""Loggly appender: ship structured log events and drain them on shutdown.

Typical use::

    from lib_log_loggly import configure, get_logger

    appender = configure({"token": "...", "subdomain": "acme", "tags": ["web"]})
    log = get_logger("checkout", appender)
    log.info("order placed", order_id, {"tags": ["orders"]})
    ...
    appender.shutdown(on_complete)

Applications using :mod:`logging` register :class:`LogglyHandler` instead.
"""

from __future__ import annotations

from .adapters.layouts import LayoutRegistry, register_layout
from .adapters.stdlib import LogglyHandler
from .domain import (
    AppenderClosedError,
    ConfigurationError,
    FormattingError,
    LogEvent,
    LogLevel,
    LogglyAppenderError,
    TransportError,
)
from .runtime import AppenderState, LoggerProxy, LogglyAppender, configure, get_logger

__all__ = [
    "AppenderClosedError",
    "AppenderState",
    "ConfigurationError",
    "FormattingError",
    "LayoutRegistry",
    "LogEvent",
    "LogLevel",
    "LoggerProxy",
    "LogglyAppender",
    "LogglyAppenderError",
    "LogglyHandler",
    "TransportError",
    "configure",
    "get_logger",
    "register_layout",
]
