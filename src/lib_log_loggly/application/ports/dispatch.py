"""Port for the in-flight send tracker consulted during shutdown."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from lib_log_loggly.domain.payload import TaggedPayload
from lib_log_loggly.domain.pending import PendingSend


@runtime_checkable
class DispatchPort(Protocol):
    """Track pending sends so shutdown can wait for their completion."""

    def submit(self, payload: TaggedPayload) -> PendingSend:
        """Register ``payload`` as pending and hand it to the transport."""

    def is_idle(self) -> bool:
        """Return ``True`` when no send is pending."""

    def await_idle(self, on_idle: Callable[[], None]) -> None:
        """Invoke ``on_idle`` once the pending set is empty."""


__all__ = ["DispatchPort"]
