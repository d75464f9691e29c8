"""Fixed-price swap engine with supply and quota enforcement.

execute_swap() checks, in this order, and stops at the first failure:
  1. paused                      -> PausedError
  2. treasury wallet unset       -> UnconfiguredError
  3. amount_in == 0              -> InvalidArgumentError
  4. amount_out = preview_swap() -> ArithmeticOverflowError
  5. total_sold + out > cap      -> SupplyExceededError
  6. quota + out > account cap   -> QuotaExceededError
  7. allowance < amount_in       -> InsufficientAllowanceError
  8. reward reserve < amount_out -> InsufficientReserveError
then pulls source currency to the treasury, pushes reward token to the
caller, commits the counters and emits a SwapEvent.

The transfers run before the commit, so a token that calls back into the
engine mid-transfer would see stale counters. The _entered guard rejects
any such nested call with ReentrancyError, and the host rolls back every
participant when the operation returns Err. Both token references are
enlisted with the host on every call, so a token swapped in through
set_token_references() rolls back like one supplied at deploy time.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import final

from fixedswap.admin.controller import AdminController, SwapConfiguration
from fixedswap.core.errors import (
    ArithmeticOverflowError,
    InsufficientAllowanceError,
    InsufficientReserveError,
    InvalidArgumentError,
    PausedError,
    QuotaExceededError,
    ReentrancyError,
    SupplyExceededError,
    SwapError,
    UnconfiguredError,
)
from fixedswap.core.result import Err, Ok
from fixedswap.core.types import Address, UtcDatetime
from fixedswap.core.units import checked_add, in_domain, scale_by_price
from fixedswap.engine.query import SwapInfo, build_info
from fixedswap.gateway.protocols import TokenRef
from fixedswap.gateway.token_gateway import TokenGateway, describe_token
from fixedswap.infra.config import TOPIC_SWAPS, SwapSettings
from fixedswap.infra.host import ExecutionHost
from fixedswap.infra.protocols import EventBus
from fixedswap.ledger.accounting import AccountingLedger
from fixedswap.ledger.events import SwapEvent

logger = logging.getLogger(__name__)

_SOURCE = "engine.swap.SwapEngine"


def _invalid(operation: str, argument: str, value: object, message: str) -> InvalidArgumentError:
    return InvalidArgumentError(
        message=message, code="INVALID_ARGUMENT", timestamp=UtcDatetime.now(),
        source=f"{_SOURCE}.{operation}", argument=argument, actual_value=repr(value),
    )


def _overflow(operation: str, detail: str) -> ArithmeticOverflowError:
    return ArithmeticOverflowError(
        message=detail, code="ARITHMETIC_OVERFLOW", timestamp=UtcDatetime.now(),
        source=f"{_SOURCE}.{operation}", operation=operation,
    )


@final
class SwapEngine:
    """One sale: its configuration, its ledger, its audit trail.

    address is the engine's own identity on the host: the spender callers
    approve and the holder of the reward-token reserve.
    """

    def __init__(
        self,
        address: Address,
        admin: AdminController,
        *,
        host: ExecutionHost | None = None,
        event_bus: EventBus | None = None,
        topic: str = TOPIC_SWAPS,
    ) -> None:
        self._address = address
        self._admin = admin
        self._host = host if host is not None else ExecutionHost()
        self._ledger = AccountingLedger()
        self._events: list[SwapEvent] = []
        self._event_bus = event_bus
        self._topic = topic
        self._entered = False
        self._host.register(self._ledger)
        self._host.register(self)

    @staticmethod
    def deploy(
        settings: SwapSettings,
        *,
        address: Address,
        owner: Address,
        source_token: TokenRef,
        reward_token: TokenRef,
        host: ExecutionHost | None = None,
        event_bus: EventBus | None = None,
    ) -> Ok[SwapEngine] | Err[InvalidArgumentError]:
        """Build an engine from settings (see infra.config)."""
        match SwapConfiguration.create(
            price=settings.price,
            max_supply=settings.max_supply,
            max_account_quota=settings.max_account_quota,
            treasury_wallet=settings.treasury_wallet,
            source_token=source_token,
            reward_token=reward_token,
            paused=settings.start_paused,
        ):
            case Err() as e:
                return e
            case Ok(config):
                pass
        engine = SwapEngine(
            address, AdminController(owner, config),
            host=host, event_bus=event_bus, topic=settings.event_topic,
        )
        logger.info(
            "deployed swap engine %s: price=%d max_supply=%d max_account_quota=%d",
            address, config.price, config.max_supply, config.max_account_quota,
        )
        return Ok(engine)

    # --- accessors ---

    @property
    def address(self) -> Address:
        return self._address

    @property
    def admin(self) -> AdminController:
        return self._admin

    @property
    def ledger(self) -> AccountingLedger:
        return self._ledger

    @property
    def host(self) -> ExecutionHost:
        return self._host

    @property
    def events(self) -> tuple[SwapEvent, ...]:
        return tuple(self._events)

    # --- Snapshottable: the audit trail rolls back with the ledger ---

    def snapshot(self) -> tuple[SwapEvent, ...]:
        return tuple(self._events)

    def restore(self, snapshot: object) -> None:
        if not isinstance(snapshot, tuple):
            raise TypeError(f"Expected tuple snapshot, got {type(snapshot).__name__}")
        self._events = list(snapshot)

    # --- read-only ---

    def preview_swap(self, amount_in: int) -> Ok[int] | Err[SwapError]:
        """floor(amount_in * price / 1e18). Pure."""
        if not in_domain(amount_in):
            return Err(_invalid(
                "preview_swap", "amount_in", amount_in, "amount_in must be a uint256",
            ))
        match scale_by_price(amount_in, self._admin.config.price):
            case Err(detail):
                return Err(_overflow("preview_swap", detail))
            case Ok(amount_out):
                return Ok(amount_out)

    def get_info(self, account: Address | None = None) -> SwapInfo:
        return build_info(self._admin, self._ledger, account)

    # --- state transitions ---

    def execute_swap(self, caller: Address, amount_in: int) -> Ok[SwapEvent] | Err[SwapError]:
        config = self._admin.config
        return self._guarded(
            "execute_swap", lambda: self._execute_swap(caller, amount_in),
            enlist=(config.source_token, config.reward_token),
        )

    def withdraw(
        self, caller: Address, token: TokenRef, to: Address | None, amount: int,
    ) -> Ok[None] | Err[SwapError]:
        """Owner-only recovery of any token balance held by the engine."""
        return self._guarded(
            "withdraw", lambda: self._withdraw(caller, token, to, amount), enlist=(token,),
        )

    def _guarded[T](
        self,
        operation: str,
        body: Callable[[], Ok[T] | Err[SwapError]],
        *,
        enlist: tuple[object, ...],
    ) -> Ok[T] | Err[SwapError]:
        """Run body under the reentrancy guard and the host's rollback.

        enlist names the token collaborators body may move; the host brings
        the ones that support snapshot/restore under rollback, however they
        reached the configuration.
        """
        if self._entered:
            logger.warning("rejected nested %s", operation)
            return Err(ReentrancyError(
                message=f"{operation} entered while another operation is in progress",
                code="REENTRANCY",
                timestamp=UtcDatetime.now(),
                source=f"{_SOURCE}.{operation}",
                operation=operation,
            ))
        self._entered = True
        try:
            result = self._host.atomic(body, enlist=enlist)
        finally:
            self._entered = False
        if isinstance(result, Err):
            logger.warning("%s failed: %s", operation, result.error.to_dict())
        return result

    def _execute_swap(self, caller: Address, amount_in: int) -> Ok[SwapEvent] | Err[SwapError]:
        op = "execute_swap"
        config = self._admin.config
        now = self._host.now()

        # 1-3
        if config.paused:
            return Err(PausedError(
                message="swaps are paused", code="PAUSED", timestamp=now, source=f"{_SOURCE}.{op}",
            ))
        treasury = config.treasury_wallet
        if treasury is None or treasury.is_zero:
            return Err(UnconfiguredError(
                message="treasury wallet is not set", code="UNCONFIGURED",
                timestamp=now, source=f"{_SOURCE}.{op}", missing="treasury_wallet",
            ))
        if not in_domain(amount_in) or amount_in == 0:
            return Err(_invalid(op, "amount_in", amount_in, "amount_in must be a positive uint256"))

        # 4
        match self.preview_swap(amount_in):
            case Err() as e:
                return e
            case Ok(amount_out):
                pass

        # 5
        match checked_add(self._ledger.total_sold, amount_out):
            case Err(detail):
                return Err(_overflow(op, detail))
            case Ok(new_sold):
                pass
        if new_sold > config.max_supply:
            return Err(SupplyExceededError(
                message=f"sale cap reached: {self._ledger.total_sold} + {amount_out} > {config.max_supply}",
                code="SUPPLY_EXCEEDED", timestamp=now, source=f"{_SOURCE}.{op}",
                total_sold=self._ledger.total_sold, requested=amount_out,
                max_supply=config.max_supply,
            ))

        # 6
        purchased = self._ledger.quota_of(caller)
        match checked_add(purchased, amount_out):
            case Err(detail):
                return Err(_overflow(op, detail))
            case Ok(new_quota):
                pass
        if new_quota > config.max_account_quota:
            return Err(QuotaExceededError(
                message=f"account cap reached: {purchased} + {amount_out} > {config.max_account_quota}",
                code="QUOTA_EXCEEDED", timestamp=now, source=f"{_SOURCE}.{op}",
                account=str(caller), purchased=purchased, requested=amount_out,
                max_account_quota=config.max_account_quota,
            ))

        source = TokenGateway(config.source_token)
        reward = TokenGateway(config.reward_token)

        # 7
        match source.allowance(caller, self._address):
            case Err() as e:
                return e
            case Ok(allowed):
                pass
        if allowed < amount_in:
            return Err(InsufficientAllowanceError(
                message=f"{source.label} allowance {allowed} < {amount_in}",
                code="INSUFFICIENT_ALLOWANCE", timestamp=now, source=f"{_SOURCE}.{op}",
                owner=str(caller), spender=str(self._address),
                allowance=allowed, required=amount_in,
            ))

        # 8
        match reward.balance_of(self._address):
            case Err() as e:
                return e
            case Ok(reserve):
                pass
        if reserve < amount_out:
            return Err(InsufficientReserveError(
                message=f"{reward.label} reserve {reserve} < {amount_out}",
                code="INSUFFICIENT_RESERVE", timestamp=now, source=f"{_SOURCE}.{op}",
                balance=reserve, required=amount_out,
            ))

        # 9-10
        match source.transfer_from(self._address, caller, treasury, amount_in):
            case Err() as e:
                return e
        match reward.transfer(self._address, caller, amount_out):
            case Err() as e:
                return e

        # 11
        match self._ledger.commit(caller, amount_in, amount_out):
            case Err(detail):
                return Err(_overflow(op, detail))

        # 12
        event = SwapEvent(account=caller, amount_in=amount_in, amount_out=amount_out, timestamp=now)
        match self._publish(event):
            case Err() as e:
                return e
        self._events.append(event)
        logger.info(
            "swap %s: %d %s -> %d %s (sold %d/%d)",
            caller, amount_in, source.label, amount_out, reward.label,
            self._ledger.total_sold, config.max_supply,
        )
        return Ok(event)

    def _publish(self, event: SwapEvent) -> Ok[None] | Err[SwapError]:
        if self._event_bus is None:
            return Ok(None)
        match event.to_bytes():
            case Err(detail):
                return Err(_invalid("execute_swap", "event", event, detail))
            case Ok(payload):
                pass
        match self._event_bus.publish(self._topic, event.account.value, payload):
            case Err(detail):
                return Err(SwapError(
                    message=f"event publication failed: {detail}", code="EVENT_PUBLISH_FAILED",
                    timestamp=event.timestamp, source=f"{_SOURCE}.execute_swap",
                ))
        return Ok(None)

    def _withdraw(
        self, caller: Address, token: TokenRef, to: Address | None, amount: int,
    ) -> Ok[None] | Err[SwapError]:
        op = "withdraw"
        match self._admin.require_owner(caller, op):
            case Err() as e:
                return e
        if to is None or to.is_zero:
            return Err(_invalid(op, "to", to, "destination must be a non-zero address"))
        if not in_domain(amount) or amount == 0:
            return Err(_invalid(op, "amount", amount, "amount must be a positive uint256"))
        gateway = TokenGateway(token)
        match gateway.balance_of(self._address):
            case Err() as e:
                return e
            case Ok(held):
                pass
        if amount > held:
            return Err(InsufficientReserveError(
                message=f"{gateway.label} balance {held} < {amount}",
                code="INSUFFICIENT_RESERVE", timestamp=self._host.now(),
                source=f"{_SOURCE}.{op}", balance=held, required=amount,
            ))
        match gateway.transfer(self._address, to, amount):
            case Err() as e:
                return e
        logger.info("withdraw %d %s to %s", amount, describe_token(token), to)
        return Ok(None)
