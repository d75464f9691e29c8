"""TokenGateway: the engine's only path to a token collaborator.

Token references are set by the owner without validation, so the gateway
assumes nothing about them. Whatever goes wrong on the far side of a call
(a missing method, a raised exception, a return value that is not a
Result, a balance outside the uint256 domain) comes back as
Err[ExternalCallError]. The enclosing operation then aborts and the host
rolls it back.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import final

from fixedswap.core.errors import ExternalCallError
from fixedswap.core.result import Err, Ok
from fixedswap.core.types import Address, UtcDatetime
from fixedswap.core.units import in_domain
from fixedswap.gateway.protocols import TokenRef

logger = logging.getLogger(__name__)


def _external_error(token: str, operation: str, detail: str) -> ExternalCallError:
    return ExternalCallError(
        message=detail,
        code="EXTERNAL_CALL_FAILED",
        timestamp=UtcDatetime.now(),
        source=f"gateway.token_gateway.{operation}",
        token=token,
        operation=operation,
    )


def describe_token(token: TokenRef) -> str:
    """Best-effort label for logs and errors; never raises."""
    symbol = getattr(token, "symbol", None)
    if isinstance(symbol, str) and symbol:
        return symbol
    return type(token).__name__


@final
class TokenGateway:
    """Result-normalizing wrapper around one token reference."""

    def __init__(self, token: TokenRef) -> None:
        self._token = token
        self._label = describe_token(token)

    @property
    def label(self) -> str:
        return self._label

    def _call(
        self, operation: str, invoke: Callable[[object], object],
    ) -> Ok[object] | Err[ExternalCallError]:
        try:
            result = invoke(self._token)
        except Exception as exc:  # noqa: BLE001
            logger.warning("%s.%s raised %s", self._label, operation, type(exc).__name__)
            return Err(_external_error(
                self._label, operation, f"{self._label}.{operation} raised {exc!r}",
            ))
        match result:
            case Ok(value):
                return Ok(value)
            case Err(error) if isinstance(error, ExternalCallError):
                return Err(error)
            case Err(error):
                return Err(_external_error(
                    self._label, operation, f"{self._label}.{operation} failed: {error}",
                ))
            case _:
                return Err(_external_error(
                    self._label, operation,
                    f"{self._label}.{operation} returned non-Result {type(result).__name__}",
                ))

    def _amount(
        self, operation: str, result: Ok[object] | Err[ExternalCallError],
    ) -> Ok[int] | Err[ExternalCallError]:
        match result:
            case Err() as e:
                return e
            case Ok(value) if in_domain(value):
                return Ok(value)  # type: ignore[arg-type]
            case Ok(value):
                return Err(_external_error(
                    self._label, operation,
                    f"{self._label}.{operation} returned out-of-domain amount {value!r}",
                ))

    def balance_of(self, holder: Address) -> Ok[int] | Err[ExternalCallError]:
        op = "balance_of"
        return self._amount(op, self._call(op, lambda t: t.balance_of(holder)))  # type: ignore[attr-defined]

    def allowance(self, owner: Address, spender: Address) -> Ok[int] | Err[ExternalCallError]:
        op = "allowance"
        return self._amount(op, self._call(op, lambda t: t.allowance(owner, spender)))  # type: ignore[attr-defined]

    def transfer_from(
        self, spender: Address, owner: Address, recipient: Address, amount: int,
    ) -> Ok[None] | Err[ExternalCallError]:
        result = self._call(
            "transfer_from",
            lambda t: t.transfer_from(spender, owner, recipient, amount),  # type: ignore[attr-defined]
        )
        return result.map(lambda _: None)

    def transfer(
        self, sender: Address, recipient: Address, amount: int,
    ) -> Ok[None] | Err[ExternalCallError]:
        result = self._call(
            "transfer",
            lambda t: t.transfer(sender, recipient, amount),  # type: ignore[attr-defined]
        )
        return result.map(lambda _: None)
