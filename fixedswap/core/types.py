"""Core value types: UtcDatetime, Address.

Both validate at construction. Direct construction raises TypeError on bad
input; the parse() factories return a Result instead.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import final

from fixedswap.core.result import Err, Ok

_ADDRESS_RE = re.compile(r"^0x[0-9a-f]{40}$")


@final
@dataclass(frozen=True, slots=True)
class UtcDatetime:
    """Timezone-aware UTC datetime. Naive datetimes are rejected."""

    value: datetime

    def __post_init__(self) -> None:
        if self.value.tzinfo is None:
            raise TypeError("UtcDatetime requires timezone-aware datetime, got naive")

    @staticmethod
    def parse(raw: datetime) -> Ok[UtcDatetime] | Err[str]:
        if raw.tzinfo is None:
            return Err("UtcDatetime requires timezone-aware datetime, got naive")
        return Ok(UtcDatetime(value=raw.astimezone(UTC)))

    @staticmethod
    def now() -> UtcDatetime:
        return UtcDatetime(value=datetime.now(tz=UTC))

    @property
    def unix_seconds(self) -> int:
        """Whole seconds since the epoch, as carried on the event wire."""
        return int(self.value.timestamp())


@final
@dataclass(frozen=True, slots=True, order=True)
class Address:
    """Account identity: 0x followed by 40 lower-case hex digits.

    ZERO_ADDRESS stands for the null address and is never a valid
    destination for funds.
    """

    value: str

    def __post_init__(self) -> None:
        if not _ADDRESS_RE.match(self.value):
            raise TypeError(f"Address requires 0x + 40 lower-case hex digits, got {self.value!r}")

    @staticmethod
    def parse(raw: str) -> Ok[Address] | Err[str]:
        """Parse an address, accepting mixed case input."""
        if not isinstance(raw, str):
            return Err(f"Address requires str, got {type(raw).__name__}")
        normalized = raw.strip().lower()
        if not _ADDRESS_RE.match(normalized):
            return Err(f"Invalid address: {raw!r}")
        return Ok(Address(value=normalized))

    @property
    def is_zero(self) -> bool:
        return self.value == ZERO_ADDRESS.value

    def __str__(self) -> str:
        return self.value


ZERO_ADDRESS = Address(value="0x" + "0" * 40)


def is_null_address(addr: Address | None) -> bool:
    """True for None and for the zero address."""
    return addr is None or addr.is_zero
