"""SwapEvent: the append-only audit record of a successful swap.

The wire schema {account, amountIn, amountOut, timestamp} is consumed by
off-chain indexers and must not change shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import final

from fixedswap.core.result import Err, Ok
from fixedswap.core.serialization import canonical_bytes
from fixedswap.core.types import Address, UtcDatetime

WIRE_KEYS: tuple[str, ...] = ("account", "amountIn", "amountOut", "timestamp")


@final
@dataclass(frozen=True, slots=True)
class SwapEvent:
    account: Address
    amount_in: int
    amount_out: int
    timestamp: UtcDatetime

    def to_wire(self) -> dict[str, object]:
        """Indexer-facing dict; timestamp in unix seconds."""
        return {
            "account": self.account.value,
            "amountIn": self.amount_in,
            "amountOut": self.amount_out,
            "timestamp": self.timestamp.unix_seconds,
        }

    def to_bytes(self) -> Ok[bytes] | Err[str]:
        return canonical_bytes(self.to_wire())

