"""fixedswap.infra: execution host, protocols, in-memory adapters and settings."""

from fixedswap.infra.config import TOPIC_SWAPS as TOPIC_SWAPS
from fixedswap.infra.config import SwapSettings as SwapSettings
from fixedswap.infra.config import configure_logging as configure_logging
from fixedswap.infra.host import ExecutionHost as ExecutionHost
from fixedswap.infra.memory_adapter import InMemoryEventBus as InMemoryEventBus
from fixedswap.infra.memory_adapter import InMemoryToken as InMemoryToken
from fixedswap.infra.protocols import EventBus as EventBus
from fixedswap.infra.protocols import Snapshottable as Snapshottable
