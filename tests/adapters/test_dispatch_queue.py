from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Any

import pytest

from lib_log_loggly.adapters.dispatch import DispatchQueue
from lib_log_loggly.domain import LogLevel, SendState, TaggedPayload


def _payload(message: str = "A B", tags: tuple[str, ...] = ()) -> TaggedPayload:
    return TaggedPayload(
        message=message,
        tags=tags,
        level=LogLevel.TRACE,
        category="tests",
        timestamp=datetime(2025, 9, 23, 12, 0, tzinfo=timezone.utc),
        hostname="box",
    )


def test_submit_hands_record_and_tags_to_transport(held_transport: Any, error_lines: Any) -> None:
    queue = DispatchQueue(held_transport, error_channel=error_lines)
    queue.submit(_payload("A B", ("x", "y")))

    sent = held_transport.sent[0]
    assert sent["record"]["msg"] == "A B"
    assert sent["record"]["level"] == "TRACE"
    assert sent["record"]["hostname"] == "box"
    assert sent["tags"] == ["x", "y"]


def test_send_stays_pending_until_acknowledged(held_transport: Any, error_lines: Any) -> None:
    queue = DispatchQueue(held_transport, error_channel=error_lines)
    pending = queue.submit(_payload())

    assert queue.pending_count == 1
    assert not queue.is_idle()
    assert pending.state is SendState.PENDING

    held_transport.acknowledge()

    assert queue.is_idle()
    assert pending.state is SendState.SUCCEEDED
    assert error_lines.lines == []


def test_await_idle_fires_immediately_when_nothing_pending(held_transport: Any) -> None:
    queue = DispatchQueue(held_transport)
    fired: list[bool] = []
    queue.await_idle(lambda: fired.append(True))
    assert fired == [True]


def test_await_idle_fires_once_after_last_acknowledgement(held_transport: Any, error_lines: Any) -> None:
    queue = DispatchQueue(held_transport, error_channel=error_lines)
    queue.submit(_payload("one"))
    queue.submit(_payload("two"))
    fired: list[bool] = []
    queue.await_idle(lambda: fired.append(True))

    held_transport.acknowledge(1)
    assert fired == []

    held_transport.acknowledge(0)
    assert fired == [True]

    queue.submit(_payload("three"))
    held_transport.acknowledge(2)
    assert fired == [True]


def test_failed_send_writes_named_error_line(held_transport: Any, error_lines: Any) -> None:
    queue = DispatchQueue(held_transport, name="audit", error_channel=error_lines)
    pending = queue.submit(_payload())

    held_transport.acknowledge(error=RuntimeError("boom"))

    assert error_lines.lines == ["audit - error occurred: boom"]
    assert pending.state is SendState.FAILED
    assert queue.is_idle()


def test_synchronous_transport_exception_counts_as_failed_send(error_lines: Any) -> None:
    class ExplodingTransport:
        def send(self, record: Any, tags: Any, callback: Any) -> None:
            raise ConnectionError("refused")

        def close(self) -> None:
            pass

    queue = DispatchQueue(ExplodingTransport(), name="audit", error_channel=error_lines)
    pending = queue.submit(_payload())

    assert pending.state is SendState.FAILED
    assert queue.is_idle()
    assert error_lines.lines == ["audit - error occurred: refused"]


def test_synchronous_acknowledgement_is_tracked(error_lines: Any) -> None:
    class EagerTransport:
        def send(self, record: Any, tags: Any, callback: Any) -> None:
            callback(None)

        def close(self) -> None:
            pass

    queue = DispatchQueue(EagerTransport(), error_channel=error_lines)
    pending = queue.submit(_payload())

    assert pending.state is SendState.SUCCEEDED
    assert queue.is_idle()


def test_duplicate_acknowledgement_is_ignored(held_transport: Any, error_lines: Any) -> None:
    queue = DispatchQueue(held_transport, error_channel=error_lines)
    pending = queue.submit(_payload())

    held_transport.acknowledge()
    held_transport.acknowledge(error=RuntimeError("late"))

    assert pending.state is SendState.SUCCEEDED
    assert error_lines.lines == []


def test_diagnostic_hook_receives_outcomes(held_transport: Any, error_lines: Any) -> None:
    events: list[tuple[str, dict[str, Any]]] = []
    queue = DispatchQueue(held_transport, error_channel=error_lines, diagnostic=lambda name, payload: events.append((name, payload)))
    first = queue.submit(_payload())
    second = queue.submit(_payload())

    held_transport.acknowledge(0)
    held_transport.acknowledge(1, RuntimeError("boom"))

    assert events[0] == ("send_succeeded", {"send_id": first.send_id})
    assert events[1][0] == "send_failed"
    assert events[1][1]["send_id"] == second.send_id
    assert "boom" in events[1][1]["error"]


def test_diagnostic_hook_failure_does_not_break_completion(
    held_transport: Any, error_lines: Any, caplog: pytest.LogCaptureFixture
) -> None:
    def broken(name: str, payload: dict[str, Any]) -> None:
        raise RuntimeError("hook down")

    queue = DispatchQueue(held_transport, error_channel=error_lines, diagnostic=broken)
    queue.submit(_payload())

    with caplog.at_level("ERROR", logger="lib_log_loggly.adapters.dispatch"):
        held_transport.acknowledge()

    assert queue.is_idle()
    assert any("diagnostic hook" in record.getMessage() for record in caplog.records)


def test_wait_until_idle_blocks_until_other_thread_acknowledges(held_transport: Any, error_lines: Any) -> None:
    queue = DispatchQueue(held_transport, error_channel=error_lines)
    queue.submit(_payload())

    assert queue.wait_until_idle(timeout=0.01) is False

    worker = threading.Thread(target=held_transport.acknowledge)
    worker.start()
    assert queue.wait_until_idle(timeout=5) is True
    worker.join()


def test_concurrent_acknowledgements_drain_completely(held_transport: Any, error_lines: Any) -> None:
    queue = DispatchQueue(held_transport, error_channel=error_lines)
    for index in range(50):
        queue.submit(_payload(f"event {index}"))
    fired: list[bool] = []
    queue.await_idle(lambda: fired.append(True))

    workers = [threading.Thread(target=held_transport.acknowledge, args=(index,)) for index in range(50)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()

    assert queue.is_idle()
    assert fired == [True]


def test_failing_error_channel_still_releases_idle_waiters(held_transport: Any, caplog: pytest.LogCaptureFixture) -> None:
    def broken_channel(line: str) -> None:
        raise ValueError("stderr closed")

    queue = DispatchQueue(held_transport, error_channel=broken_channel)
    pending = queue.submit(_payload())
    fired: list[bool] = []
    queue.await_idle(lambda: fired.append(True))

    with caplog.at_level("ERROR", logger="lib_log_loggly.adapters.dispatch"):
        held_transport.acknowledge(error=RuntimeError("boom"))

    assert fired == [True]
    assert pending.state is SendState.FAILED
    assert any("error channel" in record.getMessage() for record in caplog.records)


def test_raising_idle_waiter_does_not_starve_later_waiters(
    held_transport: Any, error_lines: Any, caplog: pytest.LogCaptureFixture
) -> None:
    queue = DispatchQueue(held_transport, error_channel=error_lines)
    queue.submit(_payload())
    fired: list[str] = []

    def broken_waiter() -> None:
        raise RuntimeError("waiter down")

    queue.await_idle(broken_waiter)
    queue.await_idle(lambda: fired.append("second"))

    with caplog.at_level("ERROR", logger="lib_log_loggly.adapters.dispatch"):
        held_transport.acknowledge()

    assert fired == ["second"]
    assert any("Idle waiter raised" in record.getMessage() for record in caplog.records)
