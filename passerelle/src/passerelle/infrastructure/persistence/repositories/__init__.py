"""Repository implementations."""

from passerelle.infrastructure.persistence.repositories.intent_ledger_repository import (  # noqa: E501
    IntentLedgerRepository,
)

__all__ = ["IntentLedgerRepository"]
