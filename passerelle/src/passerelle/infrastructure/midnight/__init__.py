"""Midnight (privacy chain) infrastructure."""

from passerelle.infrastructure.midnight.indexer_client import IndexerClient
from passerelle.infrastructure.midnight.proof_server_client import ProofServerClient
from passerelle.infrastructure.midnight.wallet_client import (
    MidnightWalletClient,
    parse_submission,
    parse_wallet_state,
)

__all__ = [
    "MidnightWalletClient",
    "ProofServerClient",
    "IndexerClient",
    "parse_submission",
    "parse_wallet_state",
]
