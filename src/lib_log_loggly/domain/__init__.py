"""Domain entities and value objects used by the Loggly appender."""

from __future__ import annotations

from .errors import (
    AppenderClosedError,
    ConfigurationError,
    FormattingError,
    LogglyAppenderError,
    TransportError,
)
from .events import LogEvent
from .levels import LogLevel
from .payload import TaggedPayload
from .pending import PendingSend, SendState
from .settings import AppenderConfig, LayoutSpec
from .tags import extract_tags

__all__ = [
    "AppenderClosedError",
    "AppenderConfig",
    "ConfigurationError",
    "FormattingError",
    "LayoutSpec",
    "LogEvent",
    "LogLevel",
    "LogglyAppenderError",
    "PendingSend",
    "SendState",
    "TaggedPayload",
    "TransportError",
    "extract_tags",
]
