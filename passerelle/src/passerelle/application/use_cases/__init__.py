"""
Application use cases.
"""

from passerelle.application.use_cases.connect_wallet import (
    ConnectWallet,
    DisconnectWallet,
)
from passerelle.application.use_cases.create_bridge_intent import (
    CreateBridgeIntent,
    placeholder_reference,
)
from passerelle.application.use_cases.get_recent_transactions import (
    GetRecentTransactions,
)
from passerelle.application.use_cases.list_bridge_intents import ListBridgeIntents
from passerelle.application.use_cases.send_private_payment import (
    PaymentPipeline,
    wait_synced,
)

__all__ = [
    "ConnectWallet",
    "DisconnectWallet",
    "CreateBridgeIntent",
    "placeholder_reference",
    "ListBridgeIntents",
    "PaymentPipeline",
    "wait_synced",
    "GetRecentTransactions",
]
