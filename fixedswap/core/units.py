"""Base-unit integer arithmetic and the fixed-point price scale.

Token amounts are Python ints in the unsigned 256-bit domain. Every
operation that can leave the domain is checked and returns Err instead of
silently wrapping or growing without bound.

Human-readable quantities (configuration, demos) are Decimal and are
converted with SWAP_DECIMAL_CONTEXT, which traps inexact conversion so
that "0.1234" at 2 decimals is an error rather than a silent truncation.
"""

from __future__ import annotations

from decimal import ROUND_DOWN as _ROUND_DOWN
from decimal import (
    Context,
    Decimal,
    DivisionByZero,
    Inexact,
    InvalidOperation,
    Overflow,
    localcontext,
)

from fixedswap.core.result import Err, Ok

UINT256_MAX: int = 2**256 - 1

PRICE_DECIMALS: int = 18
PRICE_SCALE: int = 10**PRICE_DECIMALS

SWAP_DECIMAL_CONTEXT = Context(
    prec=100,
    rounding=_ROUND_DOWN,
    Emin=-999999,
    Emax=999999,
    capitals=1,
    clamp=0,
    flags=[],
    traps=[InvalidOperation, DivisionByZero, Overflow, Inexact],
)


def in_domain(value: object) -> bool:
    """True when value is an int (not bool) within [0, UINT256_MAX]."""
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and 0 <= value <= UINT256_MAX
    )


def checked_add(a: int, b: int) -> Ok[int] | Err[str]:
    total = a + b
    if total > UINT256_MAX:
        return Err(f"{a} + {b} exceeds uint256")
    return Ok(total)


def checked_mul(a: int, b: int) -> Ok[int] | Err[str]:
    product = a * b
    if product > UINT256_MAX:
        return Err(f"{a} * {b} exceeds uint256")
    return Ok(product)


def scale_by_price(amount: int, price: int) -> Ok[int] | Err[str]:
    """floor(amount * price / PRICE_SCALE), failing if the product overflows."""
    match checked_mul(amount, price):
        case Err() as e:
            return e
        case Ok(product):
            return Ok(product // PRICE_SCALE)


def to_base_units(amount: Decimal, decimals: int) -> Ok[int] | Err[str]:
    """Convert a human Decimal into integer base units at the given decimals.

    to_base_units(Decimal("25"), 18) == Ok(25 * 10**18)
    """
    if not isinstance(amount, Decimal):
        return Err(f"Amount must be Decimal, got {type(amount).__name__}")
    if not amount.is_finite():
        return Err(f"Amount must be finite, got {amount}")
    if amount < 0:
        return Err(f"Amount must be >= 0, got {amount}")
    try:
        with localcontext(SWAP_DECIMAL_CONTEXT):
            scaled = amount.scaleb(decimals).to_integral_exact()
    except (Inexact, InvalidOperation, Overflow) as e:
        return Err(f"Amount {amount} is not representable at {decimals} decimals: {e!r}")
    result = int(scaled)
    if result > UINT256_MAX:
        return Err(f"Amount {amount} exceeds uint256 at {decimals} decimals")
    return Ok(result)


def from_base_units(amount: int, decimals: int) -> Decimal:
    """Inverse of to_base_units, for display."""
    with localcontext(SWAP_DECIMAL_CONTEXT):
        return Decimal(amount).scaleb(-decimals)
