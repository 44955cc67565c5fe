"""Port describing the remote log-aggregation client.

Purpose
-------
Hide the HTTP client behind an asynchronous send primitive so the dispatch
queue can be exercised with recording fakes.

Contents
--------
* :data:`CompletionCallback` - signature of the per-send acknowledgement.
* :class:`TransportPort` - runtime-checkable protocol with ``send``/``close``.

System Role
-----------
The Loggly adapter implements this port; the dispatch queue is its only caller.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

CompletionCallback = Callable[[BaseException | None], None]


@runtime_checkable
class TransportPort(Protocol):
    """Send one record to the remote service and acknowledge it asynchronously."""

    def send(self, record: Mapping[str, Any], tags: Sequence[str], callback: CompletionCallback) -> None:
        """Start sending ``record``; ``callback`` receives ``None`` or the error.

        Implementations perform exactly one attempt and invoke ``callback``
        exactly once.
        """

    def close(self) -> None:
        """Release client resources once no sends are in flight."""


__all__ = ["CompletionCallback", "TransportPort"]
