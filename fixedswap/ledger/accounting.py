"""Accounting ledger: global sale counters and per-account quotas.

Invariants:
  - total_sold == sum of every account's quota.
  - Counters and quotas never decrease; commit() is the only mutator.

AccountingLedger is @final but NOT a dataclass: it holds mutable internal
state. LedgerSnapshot is the frozen point-in-time copy used for rollback.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import final

from fixedswap.core.result import Err, Ok
from fixedswap.core.types import Address
from fixedswap.core.units import checked_add


@final
@dataclass(frozen=True, slots=True)
class LedgerSnapshot:
    total_sold: int
    total_received: int
    quotas: tuple[tuple[Address, int], ...]  # sorted by address

    def quota_of(self, account: Address) -> int:
        for addr, amount in self.quotas:
            if addr == account:
                return amount
        return 0


@final
class AccountingLedger:
    """Cumulative counters and the lazily-populated quota map."""

    def __init__(self) -> None:
        self._total_sold = 0
        self._total_received = 0
        self._quotas: dict[Address, int] = {}

    @property
    def total_sold(self) -> int:
        return self._total_sold

    @property
    def total_received(self) -> int:
        return self._total_received

    def quota_of(self, account: Address | None) -> int:
        """Reward-token amount purchased so far; zero for unknown or None."""
        if account is None:
            return 0
        return self._quotas.get(account, 0)

    def quotas(self) -> tuple[tuple[Address, int], ...]:
        return tuple(sorted(self._quotas.items()))

    def total_quota(self) -> int:
        return sum(self._quotas.values())

    def commit(self, account: Address, amount_in: int, amount_out: int) -> Ok[None] | Err[str]:
        """Record a completed swap. All sums are computed before any write."""
        match checked_add(self._total_sold, amount_out):
            case Err() as e:
                return e
            case Ok(new_sold):
                pass
        match checked_add(self._total_received, amount_in):
            case Err() as e:
                return e
            case Ok(new_received):
                pass
        match checked_add(self.quota_of(account), amount_out):
            case Err() as e:
                return e
            case Ok(new_quota):
                pass
        self._total_sold = new_sold
        self._total_received = new_received
        self._quotas[account] = new_quota
        return Ok(None)

    def snapshot(self) -> LedgerSnapshot:
        return LedgerSnapshot(
            total_sold=self._total_sold,
            total_received=self._total_received,
            quotas=self.quotas(),
        )

    def restore(self, snapshot: object) -> None:
        """Roll back to a snapshot taken by this ledger."""
        if not isinstance(snapshot, LedgerSnapshot):
            raise TypeError(f"Expected LedgerSnapshot, got {type(snapshot).__name__}")
        self._total_sold = snapshot.total_sold
        self._total_received = snapshot.total_received
        self._quotas = dict(snapshot.quotas)
