"""Shutdown orchestration for the appender.

Purpose
-------
Provide a shutdown routine that waits for every in-flight send to be
acknowledged, releases the transport, and only then reports completion.
"""

from __future__ import annotations

from collections.abc import Callable

from lib_log_loggly.application.ports import DispatchPort, TransportPort


def _always_sealed() -> bool:
    return True


def create_shutdown(
    *,
    dispatch: DispatchPort,
    transport: TransportPort | None,
    seal: Callable[[], bool] | None = None,
) -> Callable[[Callable[[], None]], None]:
    """Return a callable performing the drain-then-close sequence.

    The returned function never blocks: ``on_complete`` runs on whichever
    thread delivers the last outstanding acknowledgement, or immediately when
    nothing is pending. Failed sends count as acknowledged.

    ``seal`` runs once the pending set looks empty. It must stop new
    submissions and return ``True`` when the queue is still idle at that
    point; ``False`` means a send slipped in and the drain continues.
    """

    try_seal = seal or _always_sealed

    def shutdown(on_complete: Callable[[], None]) -> None:
        def drained() -> None:
            if not try_seal():
                dispatch.await_idle(drained)
                return
            if transport is not None:
                transport.close()
            on_complete()

        dispatch.await_idle(drained)

    return shutdown


__all__ = ["create_shutdown"]
