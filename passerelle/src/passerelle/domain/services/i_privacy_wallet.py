"""
Privacy-chain wallet interface.
"""

from abc import ABC, abstractmethod
from typing import AsyncIterator

from passerelle.domain.value_objects.privacy import (
    BalancedTransaction,
    PaymentSkeleton,
    ProvedTransaction,
    WalletState,
)
from passerelle.domain.value_objects.transfer import SubmissionReceipt


class IPrivacyWallet(ABC):
    """
    Seeded wallet on the privacy chain.

    The wallet keeps its own view of owned coins, synchronised from the
    indexer. Balancing against that view before sync completes yields
    stale results.
    """

    @abstractmethod
    async def state(self) -> WalletState:
        """Current wallet state snapshot."""

    @abstractmethod
    def state_stream(self) -> AsyncIterator[WalletState]:
        """Async stream of state snapshots, until the wallet is closed."""

    @abstractmethod
    async def build_skeleton(
        self, recipient: str, asset: str, amount: int
    ) -> PaymentSkeleton:
        """
        Build an unbalanced transfer with one output and no inputs.

        Args:
            recipient: Shielded recipient address
            asset: Asset id (native asset for plain payments)
            amount: Positive amount in base units
        """

    @abstractmethod
    async def balance(self, skeleton: PaymentSkeleton) -> BalancedTransaction:
        """Select funding inputs and change for the skeleton."""

    @abstractmethod
    async def submit(self, proved: ProvedTransaction) -> SubmissionReceipt:
        """Submit a proved transaction to the network."""

    @abstractmethod
    async def close(self) -> None:
        """Stop syncing and release the wallet."""
