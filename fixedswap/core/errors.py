"""Error value hierarchy: no domain function raises exceptions.

Every error is a frozen dataclass value that can be pattern-matched,
serialized, and logged. Base class SwapError; one @final subclass per
failure category a swap, admin change, or withdrawal can hit.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import final

from fixedswap.core.types import UtcDatetime


@dataclass(frozen=True, slots=True)
class SwapError:
    """Base error value. NOT @final: has subclasses."""

    message: str
    code: str
    timestamp: UtcDatetime
    source: str  # "module.function" that produced this error

    def to_dict(self) -> dict[str, object]:
        return {
            "message": self.message,
            "code": self.code,
            "timestamp": self.timestamp.value.isoformat(),
            "source": self.source,
        }


@final
@dataclass(frozen=True, slots=True)
class UnauthorizedError(SwapError):
    """Caller is not the owner."""

    caller: str
    operation: str

    def to_dict(self) -> dict[str, object]:
        return {**SwapError.to_dict(self), "caller": self.caller, "operation": self.operation}


@final
@dataclass(frozen=True, slots=True)
class InvalidArgumentError(SwapError):
    """An argument is zero, negative, null, or outside the uint256 domain."""

    argument: str
    actual_value: str

    def to_dict(self) -> dict[str, object]:
        return {
            **SwapError.to_dict(self),
            "argument": self.argument,
            "actual_value": self.actual_value,
        }


@final
@dataclass(frozen=True, slots=True)
class PausedError(SwapError):
    """Swaps are paused by the owner."""


@final
@dataclass(frozen=True, slots=True)
class UnconfiguredError(SwapError):
    """A required configuration field has not been set."""

    missing: str

    def to_dict(self) -> dict[str, object]:
        return {**SwapError.to_dict(self), "missing": self.missing}


@final
@dataclass(frozen=True, slots=True)
class SupplyExceededError(SwapError):
    """total_sold + amount_out would exceed max_supply."""

    total_sold: int
    requested: int
    max_supply: int

    def to_dict(self) -> dict[str, object]:
        return {
            **SwapError.to_dict(self),
            "total_sold": str(self.total_sold),
            "requested": str(self.requested),
            "max_supply": str(self.max_supply),
        }


@final
@dataclass(frozen=True, slots=True)
class QuotaExceededError(SwapError):
    """The account's cumulative purchases would exceed max_account_quota."""

    account: str
    purchased: int
    requested: int
    max_account_quota: int

    def to_dict(self) -> dict[str, object]:
        return {
            **SwapError.to_dict(self),
            "account": self.account,
            "purchased": str(self.purchased),
            "requested": str(self.requested),
            "max_account_quota": str(self.max_account_quota),
        }


@final
@dataclass(frozen=True, slots=True)
class InsufficientAllowanceError(SwapError):
    """Caller has not approved enough source currency to the engine."""

    owner: str
    spender: str
    allowance: int
    required: int

    def to_dict(self) -> dict[str, object]:
        return {
            **SwapError.to_dict(self),
            "owner": self.owner,
            "spender": self.spender,
            "allowance": str(self.allowance),
            "required": str(self.required),
        }


@final
@dataclass(frozen=True, slots=True)
class InsufficientReserveError(SwapError):
    """The engine holds less of a token than the operation needs."""

    balance: int
    required: int

    def to_dict(self) -> dict[str, object]:
        return {
            **SwapError.to_dict(self),
            "balance": str(self.balance),
            "required": str(self.required),
        }


@final
@dataclass(frozen=True, slots=True)
class ArithmeticOverflowError(SwapError):
    """An intermediate value left the uint256 domain."""

    operation: str

    def to_dict(self) -> dict[str, object]:
        return {**SwapError.to_dict(self), "operation": self.operation}


@final
@dataclass(frozen=True, slots=True)
class ReentrancyError(SwapError):
    """A guarded operation was entered while another was still running."""

    operation: str

    def to_dict(self) -> dict[str, object]:
        return {**SwapError.to_dict(self), "operation": self.operation}


@final
@dataclass(frozen=True, slots=True)
class ExternalCallError(SwapError):
    """A token collaborator call failed, raised, or returned garbage."""

    token: str
    operation: str

    def to_dict(self) -> dict[str, object]:
        return {**SwapError.to_dict(self), "token": self.token, "operation": self.operation}
