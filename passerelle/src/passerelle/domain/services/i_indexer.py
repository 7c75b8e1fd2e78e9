"""
Indexer interface.
"""

from abc import ABC, abstractmethod

from passerelle.domain.value_objects.privacy import IndexedTransaction


class IIndexer(ABC):
    """Public indexer of the privacy chain."""

    @abstractmethod
    async def recent_transactions(
        self, address: str, limit: int = 10
    ) -> list[IndexedTransaction]:
        """
        Fetch the latest transactions involving an address.

        Returns:
            Transactions, highest block first; empty if unavailable
        """

    @abstractmethod
    async def close(self) -> None:
        """Close underlying HTTP resources."""
