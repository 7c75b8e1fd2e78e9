"""
Intent ledger interface.
"""

from abc import ABC, abstractmethod

from passerelle.domain.entities.bridge_intent import BridgeIntent


class IIntentLedger(ABC):
    """
    Interface for bridge intent persistence.

    Append-only: no update or delete is exposed. Concurrent inserts are
    not deduplicated.
    """

    @abstractmethod
    async def insert(self, intent: BridgeIntent) -> BridgeIntent:
        """
        Insert new bridge intent.

        Args:
            intent: Intent to persist (id may be None)

        Returns:
            Persisted intent carrying its store-assigned id

        Raises:
            StoreError: If the write fails
        """

    @abstractmethod
    async def list_by_user(
        self,
        user_address: str,
        limit: int = 10,
        newest_first: bool = True,
    ) -> list[BridgeIntent]:
        """
        List intents created by a user address.

        Args:
            user_address: Wallet address that created the intents
            limit: Maximum number of rows
            newest_first: Order by created_at descending when True

        Returns:
            Intents of that address only

        Raises:
            StoreError: If the read fails
        """

    @abstractmethod
    async def commit(self) -> None:
        """
        Make inserted intents durable.

        Raises:
            StoreError: If the commit fails
        """
