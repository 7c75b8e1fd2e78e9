"""
Lace wallet adapter for the privacy chain.

CIP-30 connect flow (enable, then used addresses, falling back to the
change address) driven through the wallet bridge.
"""

from typing import Any, Optional

from passerelle.domain.exceptions import (
    SigningError,
    WalletNotDetectedError,
)
from passerelle.domain.services.i_wallet_capability import (
    ICapabilityProvider,
    IPrivacyChainSigner,
)
from passerelle.domain.value_objects.chain import MIDNIGHT
from passerelle.infrastructure.blockchain.wallet_bridge_client import (
    WalletBridgeClient,
)

WALLET_NAME = "Lace"


class LaceWalletSigner(IPrivacyChainSigner):
    """Privacy-chain signer exposed by the Lace extension."""

    chain_id = MIDNIGHT

    def __init__(self, bridge: WalletBridgeClient):
        self.bridge = bridge
        self.address: Optional[str] = None

    async def connect(self) -> str:
        """
        Enable Lace and resolve the wallet address.

        Raises:
            WalletNotDetectedError: If Lace is not available
            UserRejectedError: If the user declines
            SigningError: If the wallet exposes no address
        """
        if not await _lace_present(self.bridge):
            raise WalletNotDetectedError(WALLET_NAME)

        await self.bridge.call_bridge("/lace/enable", method="POST")

        used = await self.bridge.call_bridge("/lace/used-addresses", method="GET")
        addresses = _field(used, "addresses") or []

        if addresses:
            self.address = addresses[0]
        else:
            change = await self.bridge.call_bridge(
                "/lace/change-address", method="GET"
            )
            self.address = _field(change, "address")

        if not self.address:
            raise SigningError(f"{WALLET_NAME} returned no address")

        return self.address

    async def disconnect(self) -> None:
        self.address = None
        await self.bridge.call_bridge("/lace/disconnect", method="POST")


class LaceCapabilityProvider(ICapabilityProvider):
    """Asks the wallet bridge whether Lace is injected, on every probe."""

    chain_id = MIDNIGHT
    wallet_name = WALLET_NAME

    def __init__(self, bridge: WalletBridgeClient):
        self.bridge = bridge

    async def probe(self) -> Optional[LaceWalletSigner]:
        if not await _lace_present(self.bridge):
            return None
        return LaceWalletSigner(self.bridge)


async def _lace_present(bridge: WalletBridgeClient) -> bool:
    detected = await bridge.call_bridge("/lace/detect", method="GET")
    return bool(_field(detected, "present"))


def _field(body: Any, key: str) -> Any:
    # Bridge replies that are not JSON objects carry no fields
    return body.get(key) if isinstance(body, dict) else None
