"""
Get Recent Transactions use case (privacy chain).
"""

from passerelle.domain.exceptions import PreconditionError
from passerelle.domain.services.i_indexer import IIndexer
from passerelle.domain.value_objects.privacy import IndexedTransaction


class GetRecentTransactions:
    """Latest indexed transactions for the wallet address."""

    def __init__(self, indexer: IIndexer):
        self.indexer = indexer

    async def execute(self, address: str, limit: int = 10) -> list[IndexedTransaction]:
        if not address:
            raise PreconditionError("Wallet address is required", code="NO_ADDRESS")
        return await self.indexer.recent_transactions(address, limit=limit)
