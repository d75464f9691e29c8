"""Owner-gated configuration of a fixed-price swap.

Every mutating method takes the caller first and runs require_owner()
before looking at its arguments. SwapConfiguration is frozen; setters swap
in a modified copy, so a failed setter leaves the stored value untouched.

Two lax-trust behaviors are kept on purpose:
  - set_max_supply() does not compare the new cap with what has already
    been sold. A cap below total_sold blocks every later swap through the
    ordinary SupplyExceededError path.
  - set_token_references() stores whatever it is given. A reference that
    does not behave like a token fails later, at call time, as
    ExternalCallError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import final

from fixedswap.core.errors import InvalidArgumentError, SwapError, UnauthorizedError
from fixedswap.core.result import Err, Ok
from fixedswap.core.types import Address, UtcDatetime, is_null_address
from fixedswap.core.units import in_domain
from fixedswap.gateway.protocols import TokenRef

logger = logging.getLogger(__name__)

_SOURCE = "admin.controller.AdminController"


@final
@dataclass(frozen=True, slots=True)
class SwapConfiguration:
    price: int  # reward units per source unit, scaled by PRICE_SCALE
    max_supply: int
    max_account_quota: int
    treasury_wallet: Address | None
    source_token: TokenRef
    reward_token: TokenRef
    paused: bool = False

    @staticmethod
    def create(
        *,
        price: int,
        max_supply: int,
        max_account_quota: int,
        source_token: TokenRef,
        reward_token: TokenRef,
        treasury_wallet: Address | None = None,
        paused: bool = False,
    ) -> Ok[SwapConfiguration] | Err[InvalidArgumentError]:
        """Validate initial values. The treasury wallet may be left unset."""
        for name, value in (
            ("price", price),
            ("max_supply", max_supply),
            ("max_account_quota", max_account_quota),
        ):
            if not _is_positive(value):
                return Err(_invalid(f"{name} must be a positive uint256", "create", name, value))
        if treasury_wallet is not None and treasury_wallet.is_zero:
            return Err(_invalid(
                "treasury_wallet must not be the zero address",
                "create", "treasury_wallet", treasury_wallet,
            ))
        return Ok(SwapConfiguration(
            price=price,
            max_supply=max_supply,
            max_account_quota=max_account_quota,
            treasury_wallet=treasury_wallet,
            source_token=source_token,
            reward_token=reward_token,
            paused=paused,
        ))


def _is_positive(value: object) -> bool:
    return in_domain(value) and value > 0  # type: ignore[operator]


def _invalid(message: str, operation: str, argument: str, value: object) -> InvalidArgumentError:
    return InvalidArgumentError(
        message=message,
        code="INVALID_ARGUMENT",
        timestamp=UtcDatetime.now(),
        source=f"{_SOURCE}.{operation}",
        argument=argument,
        actual_value=repr(value),
    )


@final
class AdminController:
    """Single-owner authority over a SwapConfiguration."""

    def __init__(self, owner: Address, config: SwapConfiguration) -> None:
        self._owner: Address | None = owner
        self._config = config

    @property
    def owner(self) -> Address | None:
        """Current owner; None once ownership has been renounced."""
        return self._owner

    @property
    def config(self) -> SwapConfiguration:
        return self._config

    def is_owner(self, caller: Address) -> bool:
        return self._owner is not None and caller == self._owner

    def require_owner(self, caller: Address, operation: str) -> Ok[None] | Err[SwapError]:
        if self.is_owner(caller):
            return Ok(None)
        logger.warning("unauthorized %s by %s", operation, caller)
        return Err(UnauthorizedError(
            message=f"{operation}: caller {caller} is not the owner",
            code="UNAUTHORIZED",
            timestamp=UtcDatetime.now(),
            source=f"{_SOURCE}.{operation}",
            caller=str(caller),
            operation=operation,
        ))

    def _commit(self, operation: str, **changes: object) -> Ok[SwapConfiguration]:
        old = self._config
        self._config = replace(old, **changes)
        for field, new in changes.items():
            logger.info("%s: %s %r -> %r", operation, field, getattr(old, field), new)
        return Ok(self._config)

    def _set_positive(
        self, caller: Address, operation: str, field: str, value: int,
    ) -> Ok[SwapConfiguration] | Err[SwapError]:
        match self.require_owner(caller, operation):
            case Err() as e:
                return e
        if not _is_positive(value):
            logger.warning("%s rejected: %r", operation, value)
            return Err(_invalid(f"{field} must be a positive uint256", operation, field, value))
        return self._commit(operation, **{field: value})

    def set_price(self, caller: Address, value: int) -> Ok[SwapConfiguration] | Err[SwapError]:
        return self._set_positive(caller, "set_price", "price", value)

    def set_max_supply(self, caller: Address, value: int) -> Ok[SwapConfiguration] | Err[SwapError]:
        return self._set_positive(caller, "set_max_supply", "max_supply", value)

    def set_max_account_quota(
        self, caller: Address, value: int,
    ) -> Ok[SwapConfiguration] | Err[SwapError]:
        return self._set_positive(caller, "set_max_account_quota", "max_account_quota", value)

    def set_treasury_wallet(
        self, caller: Address, addr: Address | None,
    ) -> Ok[SwapConfiguration] | Err[SwapError]:
        match self.require_owner(caller, "set_treasury_wallet"):
            case Err() as e:
                return e
        if is_null_address(addr):
            return Err(_invalid(
                "treasury wallet must be a non-zero address",
                "set_treasury_wallet", "treasury_wallet", addr,
            ))
        return self._commit("set_treasury_wallet", treasury_wallet=addr)

    def set_token_references(
        self, caller: Address, source: TokenRef, reward: TokenRef,
    ) -> Ok[SwapConfiguration] | Err[SwapError]:
        match self.require_owner(caller, "set_token_references"):
            case Err() as e:
                return e
        return self._commit("set_token_references", source_token=source, reward_token=reward)

    def pause(self, caller: Address) -> Ok[SwapConfiguration] | Err[SwapError]:
        match self.require_owner(caller, "pause"):
            case Err() as e:
                return e
        return self._commit("pause", paused=True)

    def unpause(self, caller: Address) -> Ok[SwapConfiguration] | Err[SwapError]:
        match self.require_owner(caller, "unpause"):
            case Err() as e:
                return e
        return self._commit("unpause", paused=False)

    def transfer_ownership(
        self, caller: Address, new_owner: Address | None,
    ) -> Ok[Address] | Err[SwapError]:
        match self.require_owner(caller, "transfer_ownership"):
            case Err() as e:
                return e
        if new_owner is None or new_owner.is_zero:
            return Err(_invalid(
                "new owner must be a non-zero address",
                "transfer_ownership", "new_owner", new_owner,
            ))
        logger.info("transfer_ownership: %s -> %s", self._owner, new_owner)
        self._owner = new_owner
        return Ok(new_owner)

    def renounce_ownership(self, caller: Address) -> Ok[None] | Err[SwapError]:
        """Give up ownership for good. Every admin call fails afterwards."""
        match self.require_owner(caller, "renounce_ownership"):
            case Err() as e:
                return e
        logger.info("renounce_ownership: %s", self._owner)
        self._owner = None
        return Ok(None)
