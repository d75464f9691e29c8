"""Read-only view of a sale for observers. Nothing here mutates state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import final

from fixedswap.admin.controller import AdminController
from fixedswap.core.types import Address
from fixedswap.gateway.protocols import TokenRef
from fixedswap.ledger.accounting import AccountingLedger


@final
@dataclass(frozen=True, slots=True)
class SwapInfo:
    owner: Address | None
    price: int
    max_supply: int
    max_account_quota: int
    treasury_wallet: Address | None
    source_token: TokenRef
    reward_token: TokenRef
    paused: bool
    total_sold: int
    total_received: int
    account: Address | None
    account_quota: int
    remaining_supply: int  # floored at zero when the cap was lowered below total_sold
    remaining_quota: int


def build_info(
    admin: AdminController, ledger: AccountingLedger, account: Address | None = None,
) -> SwapInfo:
    config = admin.config
    quota = ledger.quota_of(account)
    return SwapInfo(
        owner=admin.owner,
        price=config.price,
        max_supply=config.max_supply,
        max_account_quota=config.max_account_quota,
        treasury_wallet=config.treasury_wallet,
        source_token=config.source_token,
        reward_token=config.reward_token,
        paused=config.paused,
        total_sold=ledger.total_sold,
        total_received=ledger.total_received,
        account=account,
        account_quota=quota,
        remaining_supply=max(0, config.max_supply - ledger.total_sold),
        remaining_quota=max(0, config.max_account_quota - quota),
    )
