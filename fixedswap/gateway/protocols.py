"""FungibleToken: the four-method capability every token collaborator offers.

Semantics follow standard fungible-token contracts:
  - transfer_from(spender, owner, recipient, amount) moves owner's tokens
    and consumes spender's allowance; fails on insufficient balance or
    allowance.
  - transfer(sender, recipient, amount) moves sender's own tokens; fails on
    insufficient balance.
  - A failed call leaves every balance and allowance untouched.

The explicit spender/sender argument stands in for the host's implicit
caller identity.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from fixedswap.core.errors import ExternalCallError
from fixedswap.core.result import Err, Ok
from fixedswap.core.types import Address


@runtime_checkable
class FungibleToken(Protocol):
    @property
    def symbol(self) -> str: ...

    def balance_of(self, holder: Address) -> Ok[int] | Err[ExternalCallError]: ...

    def allowance(
        self, owner: Address, spender: Address,
    ) -> Ok[int] | Err[ExternalCallError]: ...

    def transfer_from(
        self, spender: Address, owner: Address, recipient: Address, amount: int,
    ) -> Ok[None] | Err[ExternalCallError]: ...

    def transfer(
        self, sender: Address, recipient: Address, amount: int,
    ) -> Ok[None] | Err[ExternalCallError]: ...


# What the owner configures as a token. Expected to be a FungibleToken but
# never checked; TokenGateway turns anything else into ExternalCallError.
type TokenRef = FungibleToken | object
