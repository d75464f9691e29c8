"""Worked scenarios A-E: pricing, supply cap, pause, price validation, account cap."""

from __future__ import annotations

from conftest import ALICE, BOB, OWNER, deploy, error_code

from fixedswap.core.result import unwrap
from fixedswap.core.units import PRICE_SCALE


class TestScenarioA:
    def test_price_25_two_tokens_in(self) -> None:
        sale = deploy(price=25 * PRICE_SCALE)
        assert unwrap(sale.engine.preview_swap(2 * 10**18)) == 50 * 10**18


class TestScenarioB:
    def test_second_swap_hits_supply_cap(self) -> None:
        sale = deploy(max_supply=100, max_account_quota=100)
        sale.fund(ALICE, 60)
        sale.fund(BOB, 50)
        unwrap(sale.engine.execute_swap(ALICE, 60))
        assert sale.engine.ledger.total_sold == 60

        result = sale.engine.execute_swap(BOB, 50)
        assert error_code(result) == "SUPPLY_EXCEEDED"
        assert result.error.total_sold == 60  # type: ignore[union-attr]
        assert result.error.requested == 50  # type: ignore[union-attr]
        assert sale.engine.ledger.total_sold == 60
        assert sale.engine.ledger.quota_of(BOB) == 0


class TestScenarioC:
    def test_paused_blocks_valid_swap(self) -> None:
        sale = deploy()
        sale.fund(ALICE, 10)
        unwrap(sale.engine.admin.pause(OWNER))
        assert error_code(sale.engine.execute_swap(ALICE, 10)) == "PAUSED"

    def test_unpause_restores_service(self) -> None:
        sale = deploy()
        sale.fund(ALICE, 10)
        unwrap(sale.engine.admin.pause(OWNER))
        unwrap(sale.engine.admin.unpause(OWNER))
        assert unwrap(sale.engine.execute_swap(ALICE, 10)).amount_out == 10


class TestScenarioD:
    def test_zero_price_rejected(self) -> None:
        sale = deploy(price=7 * PRICE_SCALE)
        assert error_code(sale.engine.admin.set_price(OWNER, 0)) == "INVALID_ARGUMENT"
        assert sale.engine.admin.config.price == 7 * PRICE_SCALE


class TestScenarioE:
    def test_account_cap(self) -> None:
        sale = deploy(max_supply=1_000, max_account_quota=100)
        sale.fund(ALICE, 105)
        unwrap(sale.engine.execute_swap(ALICE, 90))
        assert sale.engine.ledger.quota_of(ALICE) == 90

        result = sale.engine.execute_swap(ALICE, 15)
        assert error_code(result) == "QUOTA_EXCEEDED"
        assert sale.engine.ledger.quota_of(ALICE) == 90

    def test_other_accounts_unaffected(self) -> None:
        sale = deploy(max_supply=1_000, max_account_quota=100)
        sale.fund(ALICE, 100)
        sale.fund(BOB, 100)
        unwrap(sale.engine.execute_swap(ALICE, 100))
        assert unwrap(sale.engine.execute_swap(BOB, 100)).amount_out == 100
