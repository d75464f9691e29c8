"""Tests for fixedswap.core.units: uint256 domain and price scaling."""

from __future__ import annotations

from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fixedswap.core.result import Err, Ok
from fixedswap.core.units import (
    PRICE_SCALE,
    UINT256_MAX,
    checked_add,
    checked_mul,
    from_base_units,
    in_domain,
    scale_by_price,
    to_base_units,
)

_uint = st.integers(min_value=0, max_value=UINT256_MAX)


class TestInDomain:
    @pytest.mark.parametrize("value", [0, 1, UINT256_MAX])
    def test_accepts(self, value: int) -> None:
        assert in_domain(value)

    @pytest.mark.parametrize("value", [-1, UINT256_MAX + 1, True, False, 1.0, "1", None, Decimal(1)])
    def test_rejects(self, value: object) -> None:
        assert not in_domain(value)


class TestCheckedArithmetic:
    def test_add_at_limit(self) -> None:
        assert checked_add(UINT256_MAX - 1, 1) == Ok(UINT256_MAX)
        assert isinstance(checked_add(UINT256_MAX, 1), Err)

    def test_mul_at_limit(self) -> None:
        assert checked_mul(2**128, 2**127) == Ok(2**255)
        assert isinstance(checked_mul(2**128, 2**128), Err)

    @given(a=_uint, b=_uint)
    def test_add_never_leaves_domain(self, a: int, b: int) -> None:
        match checked_add(a, b):
            case Ok(total):
                assert total == a + b
                assert in_domain(total)
            case Err(_):
                assert a + b > UINT256_MAX


class TestScaleByPrice:
    def test_unit_price(self) -> None:
        assert scale_by_price(7, PRICE_SCALE) == Ok(7)

    def test_floors(self) -> None:
        assert scale_by_price(1, PRICE_SCALE - 1) == Ok(0)
        assert scale_by_price(3, PRICE_SCALE // 2) == Ok(1)

    def test_overflow_in_product(self) -> None:
        """The intermediate product overflows even though the result would fit."""
        assert isinstance(scale_by_price(UINT256_MAX, PRICE_SCALE), Err)


class TestBaseUnits:
    def test_whole(self) -> None:
        assert to_base_units(Decimal("25"), 18) == Ok(25 * 10**18)

    def test_fraction(self) -> None:
        assert to_base_units(Decimal("1.5"), 6) == Ok(1_500_000)

    def test_zero_decimals(self) -> None:
        assert to_base_units(Decimal("42"), 0) == Ok(42)

    @pytest.mark.parametrize(
        "amount",
        [Decimal("0.001"), Decimal("-1"), Decimal("NaN"), Decimal("Infinity"), Decimal("1e80")],
    )
    def test_rejects(self, amount: Decimal) -> None:
        assert isinstance(to_base_units(amount, 2), Err)

    def test_rejects_float(self) -> None:
        assert isinstance(to_base_units(1.5, 2), Err)  # type: ignore[arg-type]

    def test_from_base_units(self) -> None:
        assert from_base_units(1_500_000, 6) == Decimal("1.5")

    @given(st.integers(min_value=0, max_value=10**30), st.integers(min_value=0, max_value=30))
    def test_inverse(self, amount: int, decimals: int) -> None:
        assert to_base_units(from_base_units(amount, decimals), decimals) == Ok(amount)
