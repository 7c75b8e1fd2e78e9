"""
Intent ledger repository implementation using SQLAlchemy.
"""

from decimal import Decimal
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from passerelle.domain.entities.bridge_intent import BridgeIntent, IntentStatus
from passerelle.domain.exceptions import StoreError
from passerelle.domain.repositories.i_intent_ledger import IIntentLedger
from passerelle.infrastructure.persistence.models import BridgeTransactionModel


class IntentLedgerRepository(IIntentLedger):
    """
    SQLAlchemy implementation of the intent ledger.

    Rows in ``bridge_transactions`` are inserted once and never updated here.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def insert(self, intent: BridgeIntent) -> BridgeIntent:
        """
        Insert bridge intent, assigning its id.

        Args:
            intent: BridgeIntent entity to persist

        Returns:
            Persisted intent with store-assigned id

        Raises:
            StoreError: If the insert fails
        """
        model = BridgeTransactionModel(
            id=intent.id or uuid4(),
            user_address=intent.user_address,
            source_chain=intent.source_chain,
            destination_chain=intent.destination_chain,
            source_token=intent.source_token,
            destination_token=intent.destination_token,
            amount=intent.amount,
            status=intent.status.value,
            is_private=intent.is_private,
            fee_amount=intent.fee_amount,
            source_tx_hash=intent.source_tx_hash,
            destination_tx_hash=intent.destination_tx_hash,
            created_at=intent.created_at,
            updated_at=intent.updated_at,
            completed_at=intent.completed_at,
            estimated_completion=intent.estimated_completion,
        )

        try:
            self.session.add(model)
            await self.session.flush()
        except SQLAlchemyError as e:
            raise StoreError(
                f"Failed to insert bridge intent: {e}",
                details={"user_address": intent.user_address},
            ) from e

        return intent.with_id(model.id)

    async def list_by_user(
        self,
        user_address: str,
        limit: int = 10,
        newest_first: bool = True,
    ) -> list[BridgeIntent]:
        """
        List bridge intents created by a user address.

        Args:
            user_address: Wallet address
            limit: Maximum number of rows (>= 1)
            newest_first: Order by created_at descending when True

        Returns:
            List of BridgeIntent entities

        Raises:
            ValueError: If limit < 1
            StoreError: If the query fails
        """
        if limit < 1:
            raise ValueError("Limit must be at least 1")

        order = (
            BridgeTransactionModel.created_at.desc()
            if newest_first
            else BridgeTransactionModel.created_at.asc()
        )
        stmt = (
            select(BridgeTransactionModel)
            .where(BridgeTransactionModel.user_address == user_address)
            .order_by(order)
            .limit(limit)
        )

        try:
            result = await self.session.execute(stmt)
            models = result.scalars().all()
        except SQLAlchemyError as e:
            raise StoreError(
                f"Failed to list bridge intents: {e}",
                details={"user_address": user_address},
            ) from e

        return [self._to_entity(model) for model in models]

    async def commit(self) -> None:
        """Commit the session's pending inserts."""
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StoreError(
                f"Failed to commit ledger changes: {e}",
                code="COMMIT_FAILED",
            ) from e

    def _to_entity(self, model: BridgeTransactionModel) -> BridgeIntent:
        """Convert ORM model to domain entity."""
        return BridgeIntent(
            id=model.id,
            user_address=model.user_address,
            source_chain=model.source_chain,
            destination_chain=model.destination_chain,
            source_token=model.source_token,
            destination_token=model.destination_token,
            amount=Decimal(model.amount),
            fee_amount=Decimal(model.fee_amount),
            status=IntentStatus(model.status),
            is_private=model.is_private,
            source_tx_hash=model.source_tx_hash,
            destination_tx_hash=model.destination_tx_hash,
            created_at=model.created_at,
            updated_at=model.updated_at,
            completed_at=model.completed_at,
            estimated_completion=model.estimated_completion,
        )
