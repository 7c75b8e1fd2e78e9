"""
List Bridge Intents use case.

Transaction history for a wallet address.
"""

from passerelle.domain.entities.bridge_intent import BridgeIntent
from passerelle.domain.exceptions import PreconditionError
from passerelle.domain.repositories.i_intent_ledger import IIntentLedger

DEFAULT_HISTORY_LIMIT = 10


class ListBridgeIntents:
    """List the latest intents of one address, newest first."""

    def __init__(self, intent_ledger: IIntentLedger):
        self.intent_ledger = intent_ledger

    async def execute(
        self,
        user_address: str,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> list[BridgeIntent]:
        """
        Execute history lookup.

        Raises:
            PreconditionError: If address is empty or limit < 1
            StoreError: If the ledger cannot be read
        """
        if not user_address or not user_address.strip():
            raise PreconditionError("Connect wallet first", code="NO_ADDRESS")

        if limit < 1:
            raise PreconditionError(
                "Limit must be at least 1",
                code="INVALID_LIMIT",
                details={"limit": limit},
            )

        return await self.intent_ledger.list_by_user(
            user_address.strip(),
            limit=limit,
            newest_first=True,
        )
