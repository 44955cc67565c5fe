"""Transient value handed from the formatting stage to the dispatch queue."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .levels import LogLevel


@dataclass(slots=True, frozen=True)
class TaggedPayload:
    """Rendered message plus the tags extracted from the originating event.

    Attributes
    ----------
    message:
        Output of the configured layout.
    tags:
        Per-event tags; empty unless the trailing argument was a ``tags``-only
        mapping.
    level / category / timestamp:
        Copied from the :class:`~lib_log_loggly.domain.events.LogEvent`.
    hostname:
        Host the record originates from.
    """

    message: str
    tags: tuple[str, ...]
    level: LogLevel
    category: str
    timestamp: datetime
    hostname: str

    def to_record(self) -> dict[str, Any]:
        """Return the JSON body sent to the remote service.

        Examples
        --------
        >>> from datetime import datetime, timezone
        >>> payload = TaggedPayload('A B', ('x',), LogLevel.TRACE, 'app', datetime(2025, 1, 2, tzinfo=timezone.utc), 'host')
        >>> payload.to_record()['msg'], payload.to_record()['level']
        ('A B', 'TRACE')
        """

        return {
            "msg": self.message,
            "level": self.level.level_str,
            "category": self.category,
            "hostname": self.hostname,
            "timestamp": self.timestamp.isoformat(),
        }


__all__ = ["TaggedPayload"]
