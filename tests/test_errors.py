"""Tests for fixedswap.core.errors: Error value hierarchy."""

from __future__ import annotations

import dataclasses
import json

import pytest

from fixedswap.core.errors import (
    ArithmeticOverflowError,
    ExternalCallError,
    InsufficientAllowanceError,
    InsufficientReserveError,
    InvalidArgumentError,
    PausedError,
    QuotaExceededError,
    ReentrancyError,
    SupplyExceededError,
    SwapError,
    UnauthorizedError,
    UnconfiguredError,
)
from fixedswap.core.types import UtcDatetime
from fixedswap.core.units import UINT256_MAX


def _ts() -> UtcDatetime:
    return UtcDatetime.now()


def _base() -> SwapError:
    return SwapError(message="base error", code="E001", timestamp=_ts(), source="test.fn")


def _common(code: str) -> dict[str, object]:
    return {"message": "m", "code": code, "timestamp": _ts(), "source": "test.fn"}


_ALL: list[SwapError] = [
    UnauthorizedError(**_common("UNAUTHORIZED"), caller="0x01", operation="pause"),
    InvalidArgumentError(**_common("INVALID_ARGUMENT"), argument="price", actual_value="0"),
    PausedError(**_common("PAUSED")),
    UnconfiguredError(**_common("UNCONFIGURED"), missing="treasury_wallet"),
    SupplyExceededError(**_common("SUPPLY_EXCEEDED"), total_sold=60, requested=50, max_supply=100),
    QuotaExceededError(
        **_common("QUOTA_EXCEEDED"), account="0x01", purchased=90, requested=15, max_account_quota=100,
    ),
    InsufficientAllowanceError(
        **_common("INSUFFICIENT_ALLOWANCE"), owner="0x01", spender="0x02", allowance=1, required=2,
    ),
    InsufficientReserveError(**_common("INSUFFICIENT_RESERVE"), balance=1, required=2),
    ArithmeticOverflowError(**_common("ARITHMETIC_OVERFLOW"), operation="preview_swap"),
    ReentrancyError(**_common("REENTRANCY"), operation="execute_swap"),
    ExternalCallError(**_common("EXTERNAL_CALL_FAILED"), token="USDC", operation="transfer"),
]

# ---------------------------------------------------------------------------
# SwapError base
# ---------------------------------------------------------------------------


class TestSwapError:
    def test_is_frozen(self) -> None:
        err = _base()
        with pytest.raises(dataclasses.FrozenInstanceError):
            err.message = "changed"  # type: ignore[misc]

    def test_to_dict_keys(self) -> None:
        assert set(_base().to_dict()) == {"message", "code", "timestamp", "source"}


# ---------------------------------------------------------------------------
# Subclasses
# ---------------------------------------------------------------------------


class TestSubclasses:
    @pytest.mark.parametrize("err", _ALL, ids=lambda e: e.code)
    def test_is_swap_error(self, err: SwapError) -> None:
        assert isinstance(err, SwapError)

    @pytest.mark.parametrize("err", _ALL, ids=lambda e: e.code)
    def test_to_dict_json_serializable(self, err: SwapError) -> None:
        d = err.to_dict()
        assert d["code"] == err.code
        json.dumps(d)

    def test_codes_are_distinct(self) -> None:
        assert len({e.code for e in _ALL}) == len(_ALL)

    def test_large_amounts_serialized_as_strings(self) -> None:
        err = InsufficientReserveError(
            **_common("INSUFFICIENT_RESERVE"), balance=UINT256_MAX, required=UINT256_MAX,
        )
        assert err.to_dict()["balance"] == str(UINT256_MAX)

    def test_supply_fields(self) -> None:
        d = _ALL[4].to_dict()
        assert (d["total_sold"], d["requested"], d["max_supply"]) == ("60", "50", "100")

    def test_pattern_match(self) -> None:
        match _ALL[2]:
            case PausedError(code=code):
                assert code == "PAUSED"
            case _:
                pytest.fail("Should match PausedError")
