"""
Proof service interface.
"""

from abc import ABC, abstractmethod

from passerelle.domain.value_objects.privacy import (
    BalancedTransaction,
    ProvedTransaction,
)


class IProofService(ABC):
    """Remote zero-knowledge prover."""

    @abstractmethod
    async def prove(self, balanced: BalancedTransaction) -> ProvedTransaction:
        """
        Attach a validity proof to a balanced transaction.

        A failure leaves the balanced transaction unusable; it must be
        discarded, not proved again.

        Raises:
            NetworkError: If the proof server fails or is unreachable
        """

    @abstractmethod
    async def close(self) -> None:
        """Close underlying HTTP resources."""
