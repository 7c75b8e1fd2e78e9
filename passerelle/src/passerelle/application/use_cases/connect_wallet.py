"""
Connect / Disconnect Wallet use cases.

Wallet sessions are built from capability providers that are probed on
every connection attempt.
"""

from typing import Iterable, Optional

from passerelle.application.dto.wallet_session import WalletSession
from passerelle.domain.exceptions import (
    UnsupportedChainError,
    WalletNotDetectedError,
)
from passerelle.domain.services.i_wallet_capability import (
    ICapabilityProvider,
    IPublicChainSigner,
)
from passerelle.infrastructure.monitoring.system_reporter import SystemReporter


class ConnectWallet:
    """
    Connect the wallet for a chain.

    Business rules:
    - Detection is re-probed on each call, never cached
    - Public-chain signers yield an Account, privacy-chain signers an address
    """

    def __init__(
        self,
        providers: Iterable[ICapabilityProvider],
        reporter: Optional[SystemReporter] = None,
    ):
        """
        Initialize use case with dependencies.

        Args:
            providers: One capability provider per chain
            reporter: Optional SystemReporter for logging
        """
        self.providers = {provider.chain_id: provider for provider in providers}
        self.reporter = reporter or SystemReporter(name="passerelle")

    async def execute(self, chain_id: str) -> WalletSession:
        """
        Probe and connect.

        Returns:
            Connected WalletSession

        Raises:
            UnsupportedChainError: If no provider serves the chain
            WalletNotDetectedError: If the probe finds no wallet
            UserRejectedError: If the user declines
        """
        provider = self.providers.get(chain_id)
        if provider is None:
            raise UnsupportedChainError(chain_id)

        capability = await provider.probe()
        if capability is None:
            raise WalletNotDetectedError(provider.wallet_name)

        if isinstance(capability, IPublicChainSigner):
            account = await capability.connect()
            address = account.address
        else:
            address = await capability.connect()

        self.reporter.info(
            f"Connected {provider.wallet_name}: {address}", context="Wallet"
        )

        return WalletSession(
            chain_id=chain_id,
            capability=capability,
            address=address,
            is_connected=True,
        )


class DisconnectWallet:
    """Release a wallet session."""

    def __init__(self, reporter: Optional[SystemReporter] = None):
        self.reporter = reporter or SystemReporter(name="passerelle")

    async def execute(self, session: WalletSession) -> WalletSession:
        """
        Disconnect the session's capability.

        Returns:
            Cleared session for the same chain
        """
        if session.capability is not None and session.is_connected:
            await session.capability.disconnect()
            self.reporter.info(
                f"Disconnected {session.chain_id} wallet", context="Wallet"
            )

        return WalletSession(chain_id=session.chain_id)
