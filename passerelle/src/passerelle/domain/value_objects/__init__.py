"""
Value objects for Passerelle domain.
"""

from passerelle.domain.value_objects.amount import (
    FEE_RATE,
    compute_fee,
    parse_amount,
    to_base_units,
)
from passerelle.domain.value_objects.chain import (
    MIDNIGHT,
    SOL,
    SOLANA,
    TDUST,
    ChainCatalog,
    ChainDescriptor,
    Token,
    default_catalog,
)
from passerelle.domain.value_objects.privacy import (
    NATIVE_ASSET,
    BalancedTransaction,
    IndexedTransaction,
    PaymentSkeleton,
    ProvedTransaction,
    WalletState,
)
from passerelle.domain.value_objects.transfer import (
    Account,
    BlockReference,
    SubmissionReceipt,
    UnsignedTransfer,
)

__all__ = [
    "Token",
    "ChainDescriptor",
    "ChainCatalog",
    "default_catalog",
    "SOLANA",
    "MIDNIGHT",
    "SOL",
    "TDUST",
    "FEE_RATE",
    "parse_amount",
    "to_base_units",
    "compute_fee",
    "Account",
    "BlockReference",
    "UnsignedTransfer",
    "SubmissionReceipt",
    "NATIVE_ASSET",
    "WalletState",
    "PaymentSkeleton",
    "BalancedTransaction",
    "ProvedTransaction",
    "IndexedTransaction",
]
