"""fixedswap.engine: swap execution, withdrawal and the read-only info view."""

from fixedswap.engine.query import SwapInfo as SwapInfo
from fixedswap.engine.swap import SwapEngine as SwapEngine
