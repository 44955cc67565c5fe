"""Application-layer ports implemented by adapters."""

from __future__ import annotations

from .dispatch import DispatchPort
from .formatter import FormatterPort
from .sink import EventSink
from .transport import CompletionCallback, TransportPort

__all__ = [
    "CompletionCallback",
    "DispatchPort",
    "EventSink",
    "FormatterPort",
    "TransportPort",
]
