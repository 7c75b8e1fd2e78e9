"""Persistence infrastructure."""

from passerelle.infrastructure.persistence.database import Database
from passerelle.infrastructure.persistence.models import (
    Base,
    BridgeTransactionModel,
)

__all__ = ["Database", "Base", "BridgeTransactionModel"]
