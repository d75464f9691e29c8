"""Deployment settings for a swap engine, and the topic it publishes to.

No I/O beyond reading the mapping handed to from_env(). Amounts in the
environment are human decimals ("25", "1000000.5"); they are converted to
base units here, once, so the engine only ever sees ints.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import final

from fixedswap.core.errors import InvalidArgumentError
from fixedswap.core.result import Err, Ok
from fixedswap.core.types import Address, UtcDatetime
from fixedswap.core.units import PRICE_DECIMALS, PRICE_SCALE, to_base_units

# ---------------------------------------------------------------------------
# Topic names
# ---------------------------------------------------------------------------

TOPIC_SWAPS: str = "fixedswap.swaps"

ENV_PREFIX: str = "FIXEDSWAP_"

_LOG_LEVELS: frozenset[str] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@final
@dataclass(frozen=True, slots=True)
class SwapSettings:
    """Initial configuration of a sale, in base units."""

    price: int = PRICE_SCALE  # 1 reward unit per source unit
    max_supply: int = 1_000_000 * 10**18
    max_account_quota: int = 10_000 * 10**18
    treasury_wallet: Address | None = None
    reward_decimals: int = 18
    start_paused: bool = False
    event_topic: str = TOPIC_SWAPS
    log_level: str = "INFO"

    @staticmethod
    def from_env(environ: Mapping[str, str]) -> Ok[SwapSettings] | Err[InvalidArgumentError]:
        """Read FIXEDSWAP_* variables; unset variables keep their defaults.

        FIXEDSWAP_PRICE              reward tokens per source token (decimal)
        FIXEDSWAP_REWARD_DECIMALS    decimals of the reward token (int)
        FIXEDSWAP_MAX_SUPPLY         sale cap in reward tokens (decimal)
        FIXEDSWAP_MAX_ACCOUNT_QUOTA  per-account cap in reward tokens (decimal)
        FIXEDSWAP_TREASURY_WALLET    0x address
        FIXEDSWAP_START_PAUSED       true/false
        FIXEDSWAP_EVENT_TOPIC        event bus topic
        FIXEDSWAP_LOG_LEVEL          logging level name
        """
        defaults = SwapSettings()

        def get(name: str) -> str | None:
            raw = environ.get(ENV_PREFIX + name)
            return raw.strip() if raw is not None and raw.strip() else None

        reward_decimals = defaults.reward_decimals
        if (raw := get("REWARD_DECIMALS")) is not None:
            if not raw.isdigit() or int(raw) > 77:
                return Err(_env_error("REWARD_DECIMALS", raw, "must be an integer in [0, 77]"))
            reward_decimals = int(raw)

        amounts: dict[str, int] = {}
        for name, decimals, default in (
            ("PRICE", PRICE_DECIMALS, defaults.price),
            ("MAX_SUPPLY", reward_decimals, defaults.max_supply),
            ("MAX_ACCOUNT_QUOTA", reward_decimals, defaults.max_account_quota),
        ):
            raw = get(name)
            if raw is None:
                amounts[name] = default
                continue
            match _parse_amount(raw, decimals):
                case Err(detail):
                    return Err(_env_error(name, raw, detail))
                case Ok(value) if value == 0:
                    return Err(_env_error(name, raw, "must be > 0"))
                case Ok(value):
                    amounts[name] = value

        treasury = defaults.treasury_wallet
        if (raw := get("TREASURY_WALLET")) is not None:
            match Address.parse(raw):
                case Err(detail):
                    return Err(_env_error("TREASURY_WALLET", raw, detail))
                case Ok(addr) if addr.is_zero:
                    return Err(_env_error("TREASURY_WALLET", raw, "must not be the zero address"))
                case Ok(addr):
                    treasury = addr

        start_paused = defaults.start_paused
        if (raw := get("START_PAUSED")) is not None:
            lowered = raw.lower()
            if lowered not in ("true", "false", "1", "0", "yes", "no"):
                return Err(_env_error("START_PAUSED", raw, "must be a boolean"))
            start_paused = lowered in ("true", "1", "yes")

        log_level = (get("LOG_LEVEL") or defaults.log_level).upper()
        if log_level not in _LOG_LEVELS:
            return Err(_env_error("LOG_LEVEL", log_level, f"must be one of {sorted(_LOG_LEVELS)}"))

        return Ok(SwapSettings(
            price=amounts["PRICE"],
            max_supply=amounts["MAX_SUPPLY"],
            max_account_quota=amounts["MAX_ACCOUNT_QUOTA"],
            treasury_wallet=treasury,
            reward_decimals=reward_decimals,
            start_paused=start_paused,
            event_topic=get("EVENT_TOPIC") or defaults.event_topic,
            log_level=log_level,
        ))


def _parse_amount(raw: str, decimals: int) -> Ok[int] | Err[str]:
    try:
        value = Decimal(raw)
    except InvalidOperation:
        return Err(f"not a decimal number: {raw!r}")
    return to_base_units(value, decimals)


def _env_error(name: str, raw: str, detail: str) -> InvalidArgumentError:
    return InvalidArgumentError(
        message=f"{ENV_PREFIX}{name}: {detail}",
        code="INVALID_ARGUMENT",
        timestamp=UtcDatetime.now(),
        source="infra.config.SwapSettings.from_env",
        argument=ENV_PREFIX + name,
        actual_value=raw,
    )


def configure_logging(settings: SwapSettings) -> None:
    """Root logging setup for scripts. Library code never calls this."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
