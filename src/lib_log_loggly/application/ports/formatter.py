"""Formatter port describing how layouts render events to text."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_loggly.domain.events import LogEvent


@runtime_checkable
class FormatterPort(Protocol):
    """Render the argument list of ``event`` into a single message string."""

    def __call__(self, event: LogEvent) -> str:
        """Return the rendered message for ``event``."""


__all__ = ["FormatterPort"]
