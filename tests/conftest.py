"""Hypothesis profiles, strategies and deployment builders for fixedswap tests.

Builders return a fully wired Sale: host with a frozen clock, two
InMemoryTokens, and an engine holding a reward reserve. The tokens are
not registered with the host here; the engine enlists them itself.
Test modules import what they need from here.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from hypothesis import HealthCheck, settings
from hypothesis import strategies as st
from hypothesis.strategies import SearchStrategy

from fixedswap.admin.controller import AdminController, SwapConfiguration
from fixedswap.core.errors import SwapError
from fixedswap.core.result import Err, unwrap
from fixedswap.core.types import Address
from fixedswap.core.units import PRICE_SCALE
from fixedswap.engine.swap import SwapEngine
from fixedswap.infra.host import ExecutionHost
from fixedswap.infra.memory_adapter import InMemoryEventBus, InMemoryToken
from fixedswap.ledger.accounting import LedgerSnapshot

# ---------------------------------------------------------------------------
# Hypothesis global settings
# ---------------------------------------------------------------------------

settings.register_profile(
    "ci",
    max_examples=200,
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)
settings.register_profile(
    "dev",
    max_examples=50,
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)
settings.load_profile("dev")


# ===================================================================
# ADDRESSES AND CLOCK
# ===================================================================


def addr(n: int) -> Address:
    """Deterministic address from a small integer."""
    return Address(value=f"0x{n:040x}")


OWNER = addr(0xA0)
ENGINE = addr(0xE0)
TREASURY = addr(0x70)
ALICE = addr(0x1)
BOB = addr(0x2)
CAROL = addr(0x3)

FIXED_NOW = datetime(2025, 6, 15, 10, 0, 0, tzinfo=UTC)


def fixed_clock() -> datetime:
    return FIXED_NOW


# ===================================================================
# STRATEGIES
# ===================================================================


def addresses() -> SearchStrategy[Address]:
    """Non-zero addresses."""
    return st.integers(min_value=1, max_value=2**160 - 1).map(addr)


def amounts(min_value: int = 1, max_value: int = 10**24) -> SearchStrategy[int]:
    return st.integers(min_value=min_value, max_value=max_value)


def prices() -> SearchStrategy[int]:
    """Fixed-point prices between 0.001 and 1000 reward per source."""
    return st.integers(min_value=PRICE_SCALE // 1000, max_value=1000 * PRICE_SCALE)


# ===================================================================
# DEPLOYMENT
# ===================================================================


@dataclass
class Sale:
    host: ExecutionHost
    engine: SwapEngine
    source: InMemoryToken
    reward: InMemoryToken
    bus: InMemoryEventBus

    def fund(self, account: Address, amount_in: int, *, approve: int | None = None) -> None:
        """Mint source currency to account and approve the engine for it."""
        unwrap(self.source.mint(account, amount_in))
        allowed = self.source.allowance(account, self.engine.address).unwrap()
        unwrap(self.source.approve(
            account, self.engine.address, allowed + amount_in if approve is None else approve,
        ))

    def state(self) -> tuple[LedgerSnapshot, object, object, tuple[object, ...]]:
        """Everything a failed operation must leave untouched."""
        return (
            self.engine.ledger.snapshot(),
            self.source.snapshot(),
            self.reward.snapshot(),
            self.engine.events,
        )


def deploy(
    *,
    price: int = PRICE_SCALE,
    max_supply: int = 1_000,
    max_account_quota: int = 500,
    reserve: int | None = None,
    treasury: Address | None = TREASURY,
    paused: bool = False,
) -> Sale:
    """Deploy a sale; reserve defaults to max_supply."""
    host = ExecutionHost(clock=fixed_clock)
    source = InMemoryToken("USDC")
    reward = InMemoryToken("RWD")
    bus = InMemoryEventBus()
    config = unwrap(SwapConfiguration.create(
        price=price,
        max_supply=max_supply,
        max_account_quota=max_account_quota,
        treasury_wallet=treasury,
        source_token=source,
        reward_token=reward,
        paused=paused,
    ))
    engine = SwapEngine(ENGINE, AdminController(OWNER, config), host=host, event_bus=bus)
    unwrap(reward.mint(ENGINE, max_supply if reserve is None else reserve))
    return Sale(host=host, engine=engine, source=source, reward=reward, bus=bus)


def error_code(result: object) -> str:
    """Code of an Err[SwapError]; fails the test on anything else."""
    assert isinstance(result, Err), f"expected Err, got {result!r}"
    assert isinstance(result.error, SwapError)
    return result.error.code
