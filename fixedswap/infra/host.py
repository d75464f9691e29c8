"""ExecutionHost: serial order and all-or-nothing commit for operations.

Stands in for the ledger a deployed engine runs on:
  1. One operation at a time. atomic() holds a re-entrant lock, so other
     threads wait, while a same-thread nested call (a collaborator calling
     back mid-transfer) gets through to the engine's reentrancy guard.
  2. Atomicity. atomic() snapshots every registered participant before
     running the operation and restores all of them if it returns Err.
     Callers pass the collaborators an operation touches as enlist; any of
     them that can snapshot/restore is registered first. Objects that
     cannot (a live external token, say) are outside the host's reach.
  3. Time. now() is the block timestamp stamped on events; tests inject a
     fixed clock. The clock is checked for timezone awareness once, when
     the host is built.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from typing import final

from fixedswap.core.result import Err, Ok
from fixedswap.core.types import UtcDatetime
from fixedswap.infra.protocols import Snapshottable

logger = logging.getLogger(__name__)


def _system_clock() -> datetime:
    return datetime.now(tz=UTC)


@final
class ExecutionHost:
    def __init__(self, clock: Callable[[], datetime] = _system_clock) -> None:
        match UtcDatetime.parse(clock()):
            case Err(e):
                raise TypeError(f"Host clock must be timezone-aware: {e}")
        self._clock = clock
        self._lock = threading.RLock()
        self._participants: list[Snapshottable] = []

    def register(self, participant: Snapshottable) -> None:
        """Bring a participant under rollback. Registering twice is a no-op."""
        if not isinstance(participant, Snapshottable):
            raise TypeError(f"{type(participant).__name__} does not implement snapshot/restore")
        if any(p is participant for p in self._participants):
            return
        self._participants.append(participant)

    def is_registered(self, participant: object) -> bool:
        return any(p is participant for p in self._participants)

    def now(self) -> UtcDatetime:
        return UtcDatetime(value=self._clock().astimezone(UTC))

    def atomic[T, E](
        self,
        operation: Callable[[], Ok[T] | Err[E]],
        *,
        enlist: Iterable[object] = (),
    ) -> Ok[T] | Err[E]:
        """Run operation; on Err (or an escaping exception) restore every
        participant to its prior state."""
        with self._lock:
            for candidate in enlist:
                if isinstance(candidate, Snapshottable):
                    self.register(candidate)
            saved = [(p, p.snapshot()) for p in self._participants]
            try:
                result = operation()
            except BaseException:
                self._rollback(saved)
                raise
            if isinstance(result, Err):
                self._rollback(saved)
            return result

    def _rollback(self, saved: list[tuple[Snapshottable, object]]) -> None:
        for participant, snap in reversed(saved):
            participant.restore(snap)
        logger.debug("rolled back %d participants", len(saved))
