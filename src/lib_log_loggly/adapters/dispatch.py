"""Dispatch queue tracking in-flight Loggly sends.

Purpose
-------
Hand rendered payloads to the transport without blocking the logging call
and remember every send until its acknowledgement arrives, so shutdown can
wait for the remote service to confirm (or reject) everything submitted.

Contents
--------
* :data:`ErrorChannel` - sink for human-readable failure lines.
* :class:`DispatchQueue` - concrete :class:`DispatchPort` implementation.

System Role
-----------
The pending set is the only state shared between the logging thread and the
transport's completion threads. Completions arrive as messages (one callback
per send) and are applied under a single lock; idle notifications run
outside of it.
"""

from __future__ import annotations

import logging
import sys
import threading
from collections.abc import Callable
from typing import Any

from lib_log_loggly.application.ports.dispatch import DispatchPort
from lib_log_loggly.application.ports.transport import TransportPort
from lib_log_loggly.domain.payload import TaggedPayload
from lib_log_loggly.domain.pending import PendingSend
from lib_log_loggly.domain.settings import DEFAULT_APPENDER_NAME

LOGGER = logging.getLogger(__name__)

ErrorChannel = Callable[[str], None]
DiagnosticHook = Callable[[str, dict[str, Any]], None] | None


def stderr_channel(line: str) -> None:
    """Write ``line`` to the process error stream."""

    stream = sys.stderr
    stream.write(line + "\n")
    stream.flush()


class DispatchQueue(DispatchPort):
    """Fire-and-forget submission with acknowledgement tracking.

    There is no capacity limit and no per-send timeout: a send stays pending
    until the transport calls back.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_loggly.domain.levels import LogLevel
    >>> class HeldTransport:
    ...     def __init__(self):
    ...         self.callbacks = []
    ...     def send(self, record, tags, callback):
    ...         self.callbacks.append(callback)
    ...     def close(self):
    ...         pass
    >>> transport = HeldTransport()
    >>> queue = DispatchQueue(transport)
    >>> payload = TaggedPayload('msg', (), LogLevel.INFO, 'app', datetime(2025, 1, 1, tzinfo=timezone.utc), 'host')
    >>> pending = queue.submit(payload)
    >>> queue.is_idle()
    False
    >>> notified = []
    >>> queue.await_idle(lambda: notified.append(True))
    >>> transport.callbacks[0](None)
    >>> queue.is_idle(), notified, pending.state.value
    (True, [True], 'succeeded')
    """

    def __init__(
        self,
        transport: TransportPort,
        *,
        name: str = DEFAULT_APPENDER_NAME,
        error_channel: ErrorChannel | None = None,
        diagnostic: DiagnosticHook = None,
    ) -> None:
        """Create the queue around ``transport``.

        Parameters
        ----------
        transport:
            Client performing the actual sends.
        name:
            Appender name prefixed to failure lines.
        error_channel:
            Receives ``"<name> - error occurred: <error>"`` per failed send;
            defaults to :func:`stderr_channel`.
        diagnostic:
            Optional hook receiving ``send_succeeded`` / ``send_failed``
            events with the send identifier.
        """
        self._transport = transport
        self._name = name
        self._error_channel = error_channel or stderr_channel
        self._diagnostic = diagnostic
        self._lock = threading.Lock()
        self._pending: dict[str, PendingSend] = {}
        self._idle_waiters: list[Callable[[], None]] = []
        self._idle_event = threading.Event()
        self._idle_event.set()

    @property
    def pending_count(self) -> int:
        with self._lock:
            return len(self._pending)

    def submit(self, payload: TaggedPayload) -> PendingSend:
        """Register ``payload`` as pending and start sending it.

        The entry is registered before the transport is invoked so a
        synchronous acknowledgement finds it. A transport raising from
        ``send`` counts as a failed completion.
        """
        pending = PendingSend()
        with self._lock:
            self._pending[pending.send_id] = pending
            self._idle_event.clear()
        LOGGER.debug("sending log event %s to loggly", pending.send_id)

        def acknowledge(error: BaseException | None = None) -> None:
            self._complete(pending.send_id, error)

        try:
            self._transport.send(payload.to_record(), payload.tags, acknowledge)
        except Exception as exc:  # noqa: BLE001
            self._complete(pending.send_id, exc)
        return pending

    def is_idle(self) -> bool:
        with self._lock:
            return not self._pending

    def await_idle(self, on_idle: Callable[[], None]) -> None:
        """Invoke ``on_idle`` once, now if idle, else when the last send completes."""
        with self._lock:
            if self._pending:
                self._idle_waiters.append(on_idle)
                return
        on_idle()

    def wait_until_idle(self, timeout: float | None = None) -> bool:
        """Block until every pending send completed or ``timeout`` elapses.

        Returns ``True`` when the queue drained; ``False`` on timeout.
        """

        return self._idle_event.wait(timeout)

    def _complete(self, send_id: str, error: BaseException | None) -> None:
        with self._lock:
            pending = self._pending.pop(send_id, None)
            if pending is None:
                LOGGER.debug("ignoring duplicate acknowledgement for %s", send_id)
                return
            pending.resolve(error)
            waiters: list[Callable[[], None]] = []
            if not self._pending:
                waiters, self._idle_waiters = self._idle_waiters, []
                self._idle_event.set()

        try:
            if error is not None:
                self._report_error(send_id, f"{self._name} - error occurred: {error}")
                self._emit_diagnostic("send_failed", {"send_id": send_id, "error": repr(error)})
            else:
                LOGGER.debug("log event %s received by loggly", send_id)
                self._emit_diagnostic("send_succeeded", {"send_id": send_id})
        finally:
            for waiter in waiters:
                try:
                    waiter()
                except Exception as waiter_exc:  # noqa: BLE001
                    LOGGER.error("Idle waiter raised after %s completed", send_id, exc_info=waiter_exc)

    def _report_error(self, send_id: str, line: str) -> None:
        """Write ``line`` to the error channel; a failing channel is only logged."""

        try:
            self._error_channel(line)
        except Exception as channel_exc:  # noqa: BLE001
            LOGGER.error("Dispatch error channel raised while reporting %s", send_id, exc_info=channel_exc)

    def _emit_diagnostic(self, name: str, payload: dict[str, Any]) -> None:
        """Invoke the diagnostic hook while guarding against callback failures."""

        if self._diagnostic is None:
            return
        try:
            self._diagnostic(name, payload)
        except Exception as diagnostic_exc:  # noqa: BLE001
            LOGGER.error("Dispatch diagnostic hook raised while reporting %s", name, exc_info=diagnostic_exc)


__all__ = ["DiagnosticHook", "DispatchQueue", "ErrorChannel", "stderr_channel"]
