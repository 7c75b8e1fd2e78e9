"""
Domain service interfaces.
"""

from passerelle.domain.services.i_chain_transport import IChainTransport
from passerelle.domain.services.i_indexer import IIndexer
from passerelle.domain.services.i_privacy_wallet import IPrivacyWallet
from passerelle.domain.services.i_proof_service import IProofService
from passerelle.domain.services.i_transfer_builder import ITransferBuilder
from passerelle.domain.services.i_wallet_capability import (
    ICapabilityProvider,
    IPrivacyChainSigner,
    IPublicChainSigner,
    WalletCapability,
)

__all__ = [
    "IChainTransport",
    "ITransferBuilder",
    "IPublicChainSigner",
    "IPrivacyChainSigner",
    "ICapabilityProvider",
    "WalletCapability",
    "IPrivacyWallet",
    "IProofService",
    "IIndexer",
]
