"""
Wallet capability interfaces.

Two signer variants unified by capability rather than inheritance: the
public-chain signer can sign and submit, the privacy-chain signer can only
connect. Callers check which variant they hold with isinstance.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Union

from passerelle.domain.value_objects.transfer import Account, UnsignedTransfer


class IPublicChainSigner(ABC):
    """Wallet-standard style signer for the public chain."""

    chain_id: str

    @abstractmethod
    async def connect(self) -> Account:
        """
        Request account access.

        Returns:
            Connected account

        Raises:
            UserRejectedError: If the user declines
        """

    @abstractmethod
    async def sign_and_send(self, unsigned: UnsignedTransfer, network: str) -> Any:
        """
        Sign transfer and hand it to the network.

        Args:
            unsigned: Transfer to sign (consumed by this call)
            network: Network identifier, e.g. "solana:devnet"

        Returns:
            Raw wallet response, in whatever shape the wallet produces

        Raises:
            SigningError: If signing fails or is rejected
        """

    @abstractmethod
    async def disconnect(self) -> None:
        """Release account access."""


class IPrivacyChainSigner(ABC):
    """CIP-30 style signer for the privacy chain (connect only)."""

    chain_id: str

    @abstractmethod
    async def connect(self) -> str:
        """
        Enable wallet and resolve its address.

        Returns:
            Wallet address

        Raises:
            WalletNotDetectedError: If the wallet is absent
            UserRejectedError: If the user declines
        """

    @abstractmethod
    async def disconnect(self) -> None:
        """Release wallet access."""


WalletCapability = Union[IPublicChainSigner, IPrivacyChainSigner]


class ICapabilityProvider(ABC):
    """
    Environment probe for a wallet capability.

    Probing is repeated on every connection attempt; a wallet may appear
    after an earlier probe found nothing.
    """

    chain_id: str
    wallet_name: str

    @abstractmethod
    async def probe(self) -> Optional[WalletCapability]:
        """
        Look for the wallet in the host environment.

        Returns:
            Capability if present, None otherwise
        """
