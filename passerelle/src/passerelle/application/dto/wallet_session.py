"""
Wallet session DTO.
"""

from dataclasses import dataclass
from typing import Optional

from passerelle.domain.services.i_wallet_capability import WalletCapability


@dataclass
class WalletSession:
    """
    Connected wallet held by the UI/CLI shell for a user session.

    Never persisted.
    """

    chain_id: str
    capability: Optional[WalletCapability] = None
    address: Optional[str] = None
    is_connected: bool = False

    def matches(self, chain_id: str) -> bool:
        """True if connected to the given chain with a known address."""
        return (
            self.is_connected
            and self.capability is not None
            and bool(self.address)
            and self.chain_id == chain_id
        )
