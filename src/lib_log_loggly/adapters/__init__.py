"""Adapters implementing the application ports."""

from __future__ import annotations

from .dispatch import DispatchQueue, stderr_channel
from .layouts import LAYOUTS, LayoutRegistry, basic_layout, message_pass_through_layout, register_layout
from .loggly import LogglyTransport, merge_tags
from .stdlib import LogglyHandler, record_to_event

__all__ = [
    "DispatchQueue",
    "LAYOUTS",
    "LayoutRegistry",
    "LogglyHandler",
    "LogglyTransport",
    "basic_layout",
    "merge_tags",
    "message_pass_through_layout",
    "record_to_event",
    "register_layout",
    "stderr_channel",
]
