"""Utilities that normalise log events into template-friendly dictionaries.

Why
---
The ``pattern`` and ``json`` layouts expose the same placeholders. Producing
the payload in one place keeps both layouts in sync with the documented
placeholder names.

Contents
--------
* :func:`build_format_payload` - generate placeholder values for a log event.
"""

from __future__ import annotations

import socket
from functools import lru_cache
from typing import Any

from lib_log_loggly.domain.events import LogEvent

from ._inspect import format_args


def build_format_payload(event: LogEvent, *, hostname: str | None = None) -> dict[str, Any]:
    """Return the mapping of placeholders exposed to format templates.

    ``hostname`` falls back to the host stamped on ``event`` and then to the
    local host name, looked up once per process.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_loggly.domain.levels import LogLevel
    >>> event = LogEvent('app', LogLevel.INFO, ['hi', 2], datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc), pid=7)
    >>> payload = build_format_payload(event, hostname='box')
    >>> payload['message'], payload['level'], payload['pid'], payload['hostname']
    ('hi 2', 'INFO', 7, 'box')
    """

    ts = event.timestamp
    return {
        "timestamp": ts.isoformat(),
        "YYYY": f"{ts.year:04d}",
        "MM": f"{ts.month:02d}",
        "DD": f"{ts.day:02d}",
        "hh": f"{ts.hour:02d}",
        "mm": f"{ts.minute:02d}",
        "ss": f"{ts.second:02d}",
        "level": event.level.level_str,
        "category": event.category,
        "message": format_args(event.args),
        "pid": event.pid,
        "hostname": hostname or event.hostname or _local_hostname(),
    }


@lru_cache(maxsize=1)
def _local_hostname() -> str:
    return socket.gethostname()


__all__ = ["build_format_payload"]
