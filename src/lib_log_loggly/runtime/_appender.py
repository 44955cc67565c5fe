"""Lifecycle controller owning one configured Loggly appender.

Purpose
-------
Expose the per-event entry point and the drain-on-shutdown protocol of a
single appender instance.

Contents
--------
* :class:`AppenderState` - ``CONFIGURED -> ACTIVE -> SHUTTING_DOWN -> SHUTDOWN``.
* :class:`LogglyAppender` - concrete :class:`EventSink`.

System Role
-----------
Built by :func:`lib_log_loggly.runtime.configure`. Front-ends call
:meth:`LogglyAppender.append` per event; process teardown calls
:meth:`LogglyAppender.shutdown`. There is no process-wide singleton: each
appender drains its own pending sends.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable
from enum import Enum

from lib_log_loggly.adapters.dispatch import DispatchQueue
from lib_log_loggly.application.ports import EventSink, TransportPort
from lib_log_loggly.application.use_cases import ProcessCallable, create_shutdown
from lib_log_loggly.domain import AppenderClosedError, AppenderConfig, LogEvent, PendingSend

logger = logging.getLogger(__name__)


class AppenderState(Enum):
    """Lifecycle states; ``SHUTDOWN`` is terminal."""

    CONFIGURED = "configured"
    ACTIVE = "active"
    SHUTTING_DOWN = "shutting_down"
    SHUTDOWN = "shutdown"


class LogglyAppender(EventSink):
    """Turn events into Loggly sends and drain them on shutdown.

    Events keep being accepted while shutting down (they extend the drain).
    Once the drain finds the pending set empty the appender is sealed before
    the transport closes, and :meth:`append` raises
    :class:`~lib_log_loggly.domain.errors.AppenderClosedError`.
    """

    def __init__(
        self,
        *,
        config: AppenderConfig,
        process: ProcessCallable,
        dispatch: DispatchQueue,
        transport: TransportPort | None,
    ) -> None:
        self._config = config
        self._process = process
        self._dispatch = dispatch
        self._lock = threading.RLock()
        self._state = AppenderState.CONFIGURED
        self._sealed = False
        self._completion_callbacks: list[Callable[[], None]] = []
        self._shutdown = create_shutdown(dispatch=dispatch, transport=transport, seal=self._seal)

    @property
    def config(self) -> AppenderConfig:
        return self._config

    @property
    def name(self) -> str:
        return self._config.name

    @property
    def state(self) -> AppenderState:
        with self._lock:
            return self._state

    @property
    def pending_count(self) -> int:
        return self._dispatch.pending_count

    def activate(self) -> None:
        """Move from ``CONFIGURED`` to ``ACTIVE``; a no-op in any other state."""
        with self._lock:
            if self._state is AppenderState.CONFIGURED:
                self._state = AppenderState.ACTIVE

    def append(self, event: LogEvent) -> PendingSend | None:
        """Extract tags, render, and submit ``event`` without waiting for I/O.

        Returns the registered :class:`PendingSend`, or ``None`` when the event
        is below the configured level.

        Raises
        ------
        FormattingError
            When the layout rejects the event; nothing is queued.
        AppenderClosedError
            When shutdown already sealed or closed the appender.
        """
        with self._lock:
            if self._sealed or self._state is AppenderState.SHUTDOWN:
                raise AppenderClosedError(f"{self.name} is shut down; event for {event.category!r} rejected")
            if self._state is AppenderState.CONFIGURED:
                self._state = AppenderState.ACTIVE
            return self._process(event)

    __call__ = append

    def shutdown(self, on_complete: Callable[[], None] | None = None) -> None:
        """Wait for every pending send, then report completion.

        Never blocks the calling thread. ``on_complete`` runs once the pending
        set is empty: immediately when nothing is in flight, otherwise on the
        thread delivering the last acknowledgement. Calling again while
        shutting down queues another callback; calling after ``SHUTDOWN``
        invokes it right away. Failed sends never prevent completion.
        """
        callback = on_complete or _noop
        run_now = starting = False
        with self._lock:
            if self._state is AppenderState.SHUTDOWN:
                run_now = True
            else:
                self._completion_callbacks.append(callback)
                starting = self._state is not AppenderState.SHUTTING_DOWN
                self._state = AppenderState.SHUTTING_DOWN
        if run_now:
            callback()
            return
        if starting:
            logger.debug("%s shutting down with %d pending sends", self.name, self.pending_count)
            self._shutdown(self._finish_shutdown)

    async def shutdown_async(self) -> None:
        """Awaitable form of :meth:`shutdown` for asyncio applications."""
        loop = asyncio.get_running_loop()
        done: asyncio.Future[None] = loop.create_future()

        def resolve() -> None:
            if not done.done():
                done.set_result(None)

        self.shutdown(lambda: loop.call_soon_threadsafe(resolve))
        await done

    def wait_until_idle(self, timeout: float | None = None) -> bool:
        """Block the caller until no send is pending or ``timeout`` elapses."""
        return self._dispatch.wait_until_idle(timeout)

    def _seal(self) -> bool:
        """Stop accepting events if nothing is pending; report whether it did.

        Runs under the same lock as :meth:`append`, so no event can be
        submitted between the idle check and the seal.
        """
        with self._lock:
            if not self._dispatch.is_idle():
                return False
            self._sealed = True
            return True

    def _finish_shutdown(self) -> None:
        with self._lock:
            self._state = AppenderState.SHUTDOWN
            callbacks, self._completion_callbacks = self._completion_callbacks, []
        logger.debug("%s shut down", self.name)
        for callback in callbacks:
            try:
                callback()
            except Exception as exc:  # noqa: BLE001
                logger.error("%s shutdown callback raised", self.name, exc_info=exc)


def _noop() -> None:
    return None


__all__ = ["AppenderState", "LogglyAppender"]
