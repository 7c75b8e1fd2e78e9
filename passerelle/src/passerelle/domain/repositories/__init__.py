"""Domain repository interfaces."""

from passerelle.domain.repositories.i_intent_ledger import IIntentLedger

__all__ = [
    "IIntentLedger",
]
