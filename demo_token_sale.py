"""
demo_token_sale.py -- An educational walkthrough of a fixed-price token sale.

This file runs a small sale end to end: a project sells its reward token
(RWD) for a stablecoin (USDC) at a fixed price, with a cap on the total
sold and a cap per buyer. Every step prints what happened and why.

We will:
  1. Read deployment settings the way from_env() reads FIXEDSWAP_* variables
  2. Deploy the engine and fund its reward reserve
  3. Preview and execute a swap
  4. Watch the per-account cap reject an oversized swap
  5. Pause and unpause the sale
  6. Recover unsold tokens as the owner

Run this:  .venv/bin/python demo_token_sale.py
"""

from __future__ import annotations

from decimal import Decimal

from fixedswap.core.result import Err, Ok, unwrap
from fixedswap.core.types import Address
from fixedswap.core.units import from_base_units, to_base_units
from fixedswap.engine.swap import SwapEngine
from fixedswap.infra.config import SwapSettings, configure_logging
from fixedswap.infra.host import ExecutionHost
from fixedswap.infra.memory_adapter import InMemoryEventBus, InMemoryToken


def sep(title: str) -> None:
    """Print a section separator."""
    print(f"\n{'=' * 72}")
    print(f"  {title}")
    print(f"{'=' * 72}\n")


def tokens(amount: int) -> str:
    """Base units -> human string, assuming 18 decimals on both tokens."""
    return f"{from_base_units(amount, 18).normalize():f}"


def whole(amount: str) -> int:
    return unwrap(to_base_units(Decimal(amount), 18))


OWNER = unwrap(Address.parse("0x00000000000000000000000000000000000000a0"))
ENGINE = unwrap(Address.parse("0x00000000000000000000000000000000000000e0"))
TREASURY = unwrap(Address.parse("0x0000000000000000000000000000000000000070"))
ALICE = unwrap(Address.parse("0x0000000000000000000000000000000000000001"))
BOB = unwrap(Address.parse("0x0000000000000000000000000000000000000002"))


# ============================================================================
#  STEP 1: SETTINGS
# ============================================================================
#
# Settings come from FIXEDSWAP_* variables; a literal mapping stands in for
# os.environ here. Human decimals are converted to base
# units exactly once, here; a value that does not fit the token's decimals
# is an error, never a silent truncation. Unset variables keep defaults.

sep("STEP 1: Read settings")

env = {
    "FIXEDSWAP_PRICE": "2.5",
    "FIXEDSWAP_MAX_SUPPLY": "1000",
    "FIXEDSWAP_MAX_ACCOUNT_QUOTA": "300",
    "FIXEDSWAP_TREASURY_WALLET": TREASURY.value,
}

match SwapSettings.from_env(env):
    case Ok(settings):
        print("Settings parsed.")
    case Err(e):
        raise RuntimeError(f"Bad settings: {e.message}")

configure_logging(settings)

print(f"  Price:              {tokens(settings.price)} RWD per USDC")
print(f"  Sale cap:           {tokens(settings.max_supply)} RWD")
print(f"  Per-account cap:    {tokens(settings.max_account_quota)} RWD")
print(f"  Treasury:           {settings.treasury_wallet}")


# ============================================================================
#  STEP 2: DEPLOY
# ============================================================================
#
# The host gives every operation all-or-nothing semantics: the engine's
# ledger and both tokens roll back when an operation fails part-way. The
# engine enlists its tokens with the host on every call.

sep("STEP 2: Deploy the engine")

host = ExecutionHost()
bus = InMemoryEventBus()
usdc = InMemoryToken("USDC")
rwd = InMemoryToken("RWD")

match SwapEngine.deploy(
    settings, address=ENGINE, owner=OWNER,
    source_token=usdc, reward_token=rwd, host=host, event_bus=bus,
):
    case Ok(engine):
        print(f"Engine deployed at {engine.address}.")
    case Err(e):
        raise RuntimeError(f"Deploy failed: {e.message}")

# The engine pays out of its own balance, so fund the reserve first.
unwrap(rwd.mint(ENGINE, settings.max_supply))
print(f"  Reward reserve:     {tokens(unwrap(rwd.balance_of(ENGINE)))} RWD")

# Buyers hold USDC and approve the engine to pull it.
for buyer in (ALICE, BOB):
    unwrap(usdc.mint(buyer, whole("500")))
    unwrap(usdc.approve(buyer, ENGINE, whole("500")))
print("  Alice and Bob each hold and approve 500 USDC.")


# ============================================================================
#  STEP 3: PREVIEW AND SWAP
# ============================================================================
#
# preview_swap() is pure: floor(amount_in * price / 1e18). execute_swap()
# runs the same arithmetic, checks every limit, then moves both tokens.

sep("STEP 3: Preview and swap")

amount_in = whole("40")
print(f"  Preview 40 USDC ->  {tokens(unwrap(engine.preview_swap(amount_in)))} RWD")

match engine.execute_swap(ALICE, amount_in):
    case Ok(event):
        print(f"  Swap ok:            {tokens(event.amount_in)} USDC -> {tokens(event.amount_out)} RWD")
        print(f"  Wire event:         {unwrap(event.to_bytes()).decode()}")
    case Err(e):
        raise RuntimeError(f"Swap failed: {e.message}")


# ============================================================================
#  STEP 4: LIMITS
# ============================================================================
#
# Alice already holds 100 RWD of her 300 cap. Asking for 250 more would
# take her to 350, so the swap is refused and nothing moves.

sep("STEP 4: Limits")

match engine.execute_swap(ALICE, whole("100")):
    case Err(e):
        print(f"  Refused:            {e.code} ({e.message})")
    case Ok(_):
        raise RuntimeError("account cap should have applied")

print(f"  Alice still holds:  {tokens(unwrap(usdc.balance_of(ALICE)))} USDC")


# ============================================================================
#  STEP 5: PAUSE
# ============================================================================

sep("STEP 5: Pause and unpause")

unwrap(engine.admin.pause(OWNER))
match engine.execute_swap(BOB, whole("10")):
    case Err(e):
        print(f"  While paused:       {e.code}")
    case Ok(_):
        raise RuntimeError("paused sale accepted a swap")

unwrap(engine.admin.unpause(OWNER))
unwrap(engine.execute_swap(BOB, whole("10")))
print("  After unpause Bob's swap of 10 USDC went through.")


# ============================================================================
#  STEP 6: RECOVER UNSOLD TOKENS
# ============================================================================

sep("STEP 6: Withdraw the unsold reserve")

remaining = unwrap(rwd.balance_of(ENGINE))
unwrap(engine.withdraw(OWNER, rwd, OWNER, remaining))
print(f"  Owner recovered:    {tokens(remaining)} RWD")

info = engine.get_info(ALICE)
print()
print("  Final state")
print(f"    Total sold:       {tokens(info.total_sold)} RWD")
print(f"    Total received:   {tokens(info.total_received)} USDC")
print(f"    Treasury holds:   {tokens(unwrap(usdc.balance_of(TREASURY)))} USDC")
print(f"    Alice purchased:  {tokens(info.account_quota)} RWD")
print(f"    Events published: {len(bus.get_messages(settings.event_topic))} on {settings.event_topic}")
print()
print("Done.")
