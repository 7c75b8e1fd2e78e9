"""
BridgeIntent entity - Domain model for a user's bridge request.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID

from passerelle.domain.value_objects.amount import FEE_RATE, compute_fee


class IntentStatus(str, Enum):
    """Bridge intent lifecycle states."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class BridgeIntent:
    """
    BridgeIntent entity, one per user-initiated bridge action.

    Business rules:
    - Amount must be positive
    - Fee is amount * fee rate (4dp), fixed at creation
    - Status is PROCESSING when a source transaction hash exists, else PENDING
    - Source tx hash is set at most once; the entity is immutable
    - Destination hash, completion time and final status belong to
      external reconciliation, never to this service
    """

    user_address: str
    source_chain: str
    destination_chain: str
    source_token: str
    destination_token: str
    amount: Decimal
    fee_amount: Decimal
    status: IntentStatus = IntentStatus.PENDING
    is_private: bool = True
    source_tx_hash: Optional[str] = None
    destination_tx_hash: Optional[str] = None
    id: Optional[UUID] = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)
    completed_at: Optional[datetime] = None
    estimated_completion: Optional[datetime] = None

    def __post_init__(self):
        """Validate intent data after initialization."""
        if not self.user_address:
            raise ValueError("User address is required")

        if self.amount <= 0:
            raise ValueError("Bridge amount must be positive")

        if self.fee_amount < 0:
            raise ValueError("Fee amount cannot be negative")

        if self.source_tx_hash is not None and not self.source_tx_hash:
            raise ValueError("Source tx hash cannot be empty")

    @classmethod
    def create(
        cls,
        user_address: str,
        source_chain: str,
        destination_chain: str,
        source_token: str,
        destination_token: str,
        amount: Decimal,
        is_private: bool = True,
        source_tx_hash: Optional[str] = None,
        fee_rate: Decimal = FEE_RATE,
        eta: timedelta = timedelta(minutes=5),
        now: Optional[datetime] = None,
    ) -> "BridgeIntent":
        """
        Create a new intent after any on-chain submission attempt.

        Args:
            user_address: Address of the wallet that initiated the bridge
            source_chain: Chain funds leave from
            destination_chain: Chain funds arrive at
            source_token: Token sent
            destination_token: Token received
            amount: Amount in source token units
            is_private: Privacy mode flag
            source_tx_hash: Canonical tx id of the source transfer, if any
            fee_rate: Fee rate applied to amount
            eta: Time until the transfer is expected to settle
            now: Creation timestamp override

        Returns:
            New BridgeIntent (not yet persisted, id is None)
        """
        created_at = now or _utcnow()
        status = IntentStatus.PROCESSING if source_tx_hash else IntentStatus.PENDING

        return cls(
            user_address=user_address,
            source_chain=source_chain,
            destination_chain=destination_chain,
            source_token=source_token,
            destination_token=destination_token,
            amount=amount,
            fee_amount=compute_fee(amount, fee_rate),
            status=status,
            is_private=is_private,
            source_tx_hash=source_tx_hash,
            created_at=created_at,
            updated_at=created_at,
            estimated_completion=created_at + eta,
        )

    def with_id(self, intent_id: UUID) -> "BridgeIntent":
        """Return a copy carrying the store-assigned id."""
        return replace(self, id=intent_id)

    def to_dict(self) -> dict:
        """Convert entity to dictionary representation."""
        return {
            "id": str(self.id) if self.id else None,
            "user_address": self.user_address,
            "source_chain": self.source_chain,
            "destination_chain": self.destination_chain,
            "source_token": self.source_token,
            "destination_token": self.destination_token,
            "amount": str(self.amount),
            "status": self.status.value,
            "is_private": self.is_private,
            "fee_amount": str(self.fee_amount),
            "source_tx_hash": self.source_tx_hash,
            "destination_tx_hash": self.destination_tx_hash,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "completed_at": (
                self.completed_at.isoformat() if self.completed_at else None
            ),
            "estimated_completion": (
                self.estimated_completion.isoformat()
                if self.estimated_completion
                else None
            ),
        }
