"""Infrastructure protocol definitions.

Domain code depends on these abstractions; infra implementations satisfy
them. EventBus returns Ok[None] | Err[str]: transport failures are values,
never invisible exceptions.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from fixedswap.core.result import Err, Ok


@runtime_checkable
class EventBus(Protocol):
    """Append-only event transport for off-chain indexers.

    Messages are keyed by account for deterministic partitioning. Values are
    opaque bytes: serialization is the caller's responsibility.
    """

    def publish(
        self, topic: str, key: str, value: bytes,
    ) -> Ok[None] | Err[str]: ...


@runtime_checkable
class Snapshottable(Protocol):
    """State that the execution host can roll back.

    restore() receives only values previously returned by snapshot() on the
    same object.
    """

    def snapshot(self) -> object: ...

    def restore(self, snapshot: object) -> None: ...
