"""
Application DTOs.
"""

from passerelle.application.dto.bridge_dto import (
    BridgeRequest,
    BridgeResult,
    BridgeStage,
)
from passerelle.application.dto.wallet_session import WalletSession

__all__ = [
    "BridgeRequest",
    "BridgeResult",
    "BridgeStage",
    "WalletSession",
]
