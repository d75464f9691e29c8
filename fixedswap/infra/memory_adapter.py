"""In-memory implementations of the token and event-bus protocols.

Test doubles that let the whole suite (and the demo) run without a live
host ledger. Both classes are @final. Neither is production code.

InMemoryToken also plays the companion minting utility: mint() and
approve() are how fixtures fund accounts and set allowances.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import final

from fixedswap.core.errors import ExternalCallError
from fixedswap.core.result import Err, Ok
from fixedswap.core.types import Address, UtcDatetime
from fixedswap.core.units import UINT256_MAX, in_domain

type TransferHook = Callable[[Address, Address, int], None]


def _token_error(symbol: str, operation: str, detail: str) -> ExternalCallError:
    """Helper to construct ExternalCallError with consistent formatting."""
    return ExternalCallError(
        message=detail,
        code="EXTERNAL_CALL_FAILED",
        timestamp=UtcDatetime.now(),
        source=f"memory_adapter.{operation}",
        token=symbol,
        operation=operation,
    )


@final
@dataclass(frozen=True, slots=True)
class TokenSnapshot:
    balances: tuple[tuple[Address, int], ...]
    allowances: tuple[tuple[tuple[Address, Address], int], ...]
    total_supply: int


@final
class InMemoryToken:
    """Fungible token with standard balance/allowance semantics.

    on_transfer, when set, runs after every successful transfer or
    transfer_from with (sender, recipient, amount). Tests use it to stand
    in for a token that calls back into the engine mid-swap.
    """

    def __init__(
        self,
        symbol: str,
        *,
        on_transfer: TransferHook | None = None,
    ) -> None:
        self._symbol = symbol
        self._balances: dict[Address, int] = {}
        self._allowances: dict[tuple[Address, Address], int] = {}
        self._total_supply = 0
        self.on_transfer = on_transfer

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def total_supply(self) -> int:
        return self._total_supply

    # --- FungibleToken ---

    def balance_of(self, holder: Address) -> Ok[int] | Err[ExternalCallError]:
        return Ok(self._balances.get(holder, 0))

    def allowance(
        self, owner: Address, spender: Address,
    ) -> Ok[int] | Err[ExternalCallError]:
        return Ok(self._allowances.get((owner, spender), 0))

    def transfer(
        self, sender: Address, recipient: Address, amount: int,
    ) -> Ok[None] | Err[ExternalCallError]:
        match self._move(sender, recipient, amount, "transfer"):
            case Err() as e:
                return e
            case Ok():
                pass
        self._notify(sender, recipient, amount)
        return Ok(None)

    def transfer_from(
        self, spender: Address, owner: Address, recipient: Address, amount: int,
    ) -> Ok[None] | Err[ExternalCallError]:
        allowed = self._allowances.get((owner, spender), 0)
        if allowed < amount:
            return Err(_token_error(
                self._symbol, "transfer_from",
                f"{self._symbol}: allowance {allowed} < {amount} for {spender} on {owner}",
            ))
        match self._move(owner, recipient, amount, "transfer_from"):
            case Err() as e:
                return e
            case Ok():
                pass
        self._allowances[(owner, spender)] = allowed - amount
        self._notify(owner, recipient, amount)
        return Ok(None)

    # --- Fixture helpers ---

    def mint(self, to: Address, amount: int) -> Ok[None] | Err[ExternalCallError]:
        if not in_domain(amount) or self._total_supply + amount > UINT256_MAX:
            return Err(_token_error(self._symbol, "mint", f"{self._symbol}: bad mint {amount!r}"))
        self._balances[to] = self._balances.get(to, 0) + amount
        self._total_supply += amount
        return Ok(None)

    def approve(
        self, owner: Address, spender: Address, amount: int,
    ) -> Ok[None] | Err[ExternalCallError]:
        if not in_domain(amount):
            return Err(_token_error(
                self._symbol, "approve", f"{self._symbol}: bad allowance {amount!r}",
            ))
        self._allowances[(owner, spender)] = amount
        return Ok(None)

    # --- Snapshottable ---

    def snapshot(self) -> TokenSnapshot:
        return TokenSnapshot(
            balances=tuple(sorted(self._balances.items())),
            allowances=tuple(sorted(self._allowances.items())),
            total_supply=self._total_supply,
        )

    def restore(self, snapshot: object) -> None:
        if not isinstance(snapshot, TokenSnapshot):
            raise TypeError(f"Expected TokenSnapshot, got {type(snapshot).__name__}")
        self._balances = dict(snapshot.balances)
        self._allowances = dict(snapshot.allowances)
        self._total_supply = snapshot.total_supply

    # --- internals ---

    def _move(
        self, sender: Address, recipient: Address, amount: int, operation: str,
    ) -> Ok[None] | Err[ExternalCallError]:
        if not in_domain(amount):
            return Err(_token_error(
                self._symbol, operation, f"{self._symbol}: bad amount {amount!r}",
            ))
        if recipient.is_zero:
            return Err(_token_error(
                self._symbol, operation, f"{self._symbol}: transfer to the zero address",
            ))
        held = self._balances.get(sender, 0)
        if held < amount:
            return Err(_token_error(
                self._symbol, operation,
                f"{self._symbol}: balance {held} < {amount} for {sender}",
            ))
        self._balances[sender] = held - amount
        self._balances[recipient] = self._balances.get(recipient, 0) + amount
        return Ok(None)

    def _notify(self, sender: Address, recipient: Address, amount: int) -> None:
        if self.on_transfer is not None:
            self.on_transfer(sender, recipient, amount)


@final
class InMemoryEventBus:
    """In-memory event bus. Messages stored per-topic as (key, value) pairs."""

    def __init__(self) -> None:
        self._topics: dict[str, list[tuple[str, bytes]]] = {}

    def publish(
        self, topic: str, key: str, value: bytes,
    ) -> Ok[None] | Err[str]:
        self._topics.setdefault(topic, []).append((key, value))
        return Ok(None)

    def get_messages(self, topic: str) -> list[tuple[str, bytes]]:
        """Test-only helper."""
        return list(self._topics.get(topic, []))
