"""fixedswap.admin: owner-gated sale configuration."""

from fixedswap.admin.controller import AdminController as AdminController
from fixedswap.admin.controller import SwapConfiguration as SwapConfiguration
