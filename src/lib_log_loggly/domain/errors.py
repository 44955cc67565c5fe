"""Exception hierarchy raised by the appender."""

from __future__ import annotations


class LogglyAppenderError(Exception):
    """Base class for all appender errors."""


class ConfigurationError(LogglyAppenderError, ValueError):
    """Raised at configure time when options are missing or invalid."""


class FormattingError(LogglyAppenderError):
    """Raised synchronously when the layout cannot render an event."""


class TransportError(LogglyAppenderError):
    """Delivered to completion callbacks when a send attempt fails.

    ``status_code`` is populated when the remote service answered with a
    non-success HTTP status.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AppenderClosedError(LogglyAppenderError, RuntimeError):
    """Raised when an event reaches an appender that already shut down."""


__all__ = [
    "AppenderClosedError",
    "ConfigurationError",
    "FormattingError",
    "LogglyAppenderError",
    "TransportError",
]
