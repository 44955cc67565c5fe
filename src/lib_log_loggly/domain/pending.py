"""In-flight send bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from uuid import uuid4


class SendState(Enum):
    """Completion state of a :class:`PendingSend`."""

    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def _new_id() -> str:
    return uuid4().hex


@dataclass(slots=True, eq=False)
class PendingSend:
    """One submitted-but-not-yet-acknowledged transport call.

    Only the dispatch queue resolves entries; each one moves from
    ``PENDING`` to a terminal state exactly once.
    """

    send_id: str = field(default_factory=_new_id)
    state: SendState = SendState.PENDING
    error: BaseException | None = None

    @property
    def done(self) -> bool:
        return self.state is not SendState.PENDING

    def resolve(self, error: BaseException | None) -> None:
        """Move the entry to its terminal state."""

        if self.done:
            raise RuntimeError(f"pending send {self.send_id} already resolved")
        self.error = error
        self.state = SendState.SUCCEEDED if error is None else SendState.FAILED


__all__ = ["PendingSend", "SendState"]
