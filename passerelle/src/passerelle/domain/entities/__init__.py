"""
Domain entities.
"""

from passerelle.domain.entities.bridge_intent import BridgeIntent, IntentStatus

__all__ = [
    "BridgeIntent",
    "IntentStatus",
]
