"""fixedswap.gateway: the token collaborator capability and its Result-normalizing wrapper."""

from fixedswap.gateway.protocols import FungibleToken as FungibleToken
from fixedswap.gateway.token_gateway import TokenGateway as TokenGateway
