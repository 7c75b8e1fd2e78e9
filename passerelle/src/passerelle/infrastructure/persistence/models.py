"""
SQLAlchemy models for Passerelle persistence.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import (
    Boolean,
    DateTime,
    Index,
    Numeric,
    String,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""


class BridgeTransactionModel(Base):
    """Bridge intent database model (append-only)."""

    __tablename__ = "bridge_transactions"

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    user_address: Mapped[str] = mapped_column(String(128), nullable=False)
    source_chain: Mapped[str] = mapped_column(String(32), nullable=False)
    destination_chain: Mapped[str] = mapped_column(String(32), nullable=False)
    source_token: Mapped[str] = mapped_column(String(16), nullable=False)
    destination_token: Mapped[str] = mapped_column(String(16), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(78, 18), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    is_private: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    fee_amount: Mapped[Decimal] = mapped_column(Numeric(78, 18), nullable=False)
    source_tx_hash: Mapped[str | None] = mapped_column(String(128))
    destination_tx_hash: Mapped[str | None] = mapped_column(String(128))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    estimated_completion: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True)
    )

    __table_args__ = (
        Index("ix_bridge_transactions_user_created", "user_address", "created_at"),
    )
