"""fixedswap.core: value types, errors, results and unit arithmetic."""

from fixedswap.core.errors import ArithmeticOverflowError as ArithmeticOverflowError
from fixedswap.core.errors import ExternalCallError as ExternalCallError
from fixedswap.core.errors import InsufficientAllowanceError as InsufficientAllowanceError
from fixedswap.core.errors import InsufficientReserveError as InsufficientReserveError
from fixedswap.core.errors import InvalidArgumentError as InvalidArgumentError
from fixedswap.core.errors import PausedError as PausedError
from fixedswap.core.errors import QuotaExceededError as QuotaExceededError
from fixedswap.core.errors import ReentrancyError as ReentrancyError
from fixedswap.core.errors import SupplyExceededError as SupplyExceededError
from fixedswap.core.errors import SwapError as SwapError
from fixedswap.core.errors import UnauthorizedError as UnauthorizedError
from fixedswap.core.errors import UnconfiguredError as UnconfiguredError
from fixedswap.core.result import Err as Err
from fixedswap.core.result import Ok as Ok
from fixedswap.core.result import Result as Result
from fixedswap.core.result import unwrap as unwrap
from fixedswap.core.serialization import canonical_bytes as canonical_bytes
from fixedswap.core.types import ZERO_ADDRESS as ZERO_ADDRESS
from fixedswap.core.types import Address as Address
from fixedswap.core.types import UtcDatetime as UtcDatetime
from fixedswap.core.units import PRICE_SCALE as PRICE_SCALE
from fixedswap.core.units import UINT256_MAX as UINT256_MAX
