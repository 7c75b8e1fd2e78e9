"""Blockchain infrastructure."""

from passerelle.infrastructure.blockchain.keypair_signer import (
    KeypairCapabilityProvider,
    KeypairSigner,
    load_keypair,
)
from passerelle.infrastructure.blockchain.lace_wallet_adapter import (
    LaceCapabilityProvider,
    LaceWalletSigner,
)
from passerelle.infrastructure.blockchain.solana_rpc_client import SolanaRPCClient
from passerelle.infrastructure.blockchain.solana_transfer_builder import (
    SolanaTransferBuilder,
    parse_pubkey,
)
from passerelle.infrastructure.blockchain.wallet_bridge_client import (
    WalletBridgeClient,
)

__all__ = [
    "SolanaRPCClient",
    "SolanaTransferBuilder",
    "parse_pubkey",
    "KeypairSigner",
    "KeypairCapabilityProvider",
    "load_keypair",
    "WalletBridgeClient",
    "LaceWalletSigner",
    "LaceCapabilityProvider",
]
