"""
Bridge Data Transfer Objects.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from passerelle.domain.entities.bridge_intent import BridgeIntent


class BridgeStage(str, Enum):
    """Orchestrator stages, in execution order."""

    IDLE = "Idle"
    VALIDATING = "Validating"
    BUILDING = "Building"
    SIGNING = "Signing"
    NORMALIZING = "Normalizing"
    PERSISTING = "Persisting"
    SUCCESS = "Success"
    FAILED = "Failed"


@dataclass(frozen=True)
class BridgeRequest:
    """
    User request to move value between chains.

    Amount is kept raw; parsing happens during validation.
    """

    source_chain: str
    destination_chain: str
    source_token: str
    amount: Any
    is_private: bool = True


@dataclass(frozen=True)
class BridgeResult:
    """
    Result of a bridge action.

    Attributes:
        intent: Persisted intent
        reference: Source transaction id, or a local placeholder when the
            source chain is not submitted on-chain
        simulated: True when reference is a placeholder
        explorer_url: Block explorer link for real submissions
        stage: Terminal stage reached
    """

    intent: BridgeIntent
    reference: str
    simulated: bool
    explorer_url: Optional[str] = None
    stage: BridgeStage = BridgeStage.SUCCESS
