"""
Domain exceptions package.
"""

# Base exceptions
from passerelle.domain.exceptions.base import (
    InvalidAddressError,
    InvalidAmountError,
    PasserelleException,
    PreconditionError,
    StoreError,
    UnsupportedChainError,
    WalletNotConnectedError,
)

# Network exceptions
from passerelle.domain.exceptions.network import (
    NetworkError,
    PaymentStageError,
    RPCError,
    SyncTimeoutError,
)

# Wallet exceptions
from passerelle.domain.exceptions.wallet import (
    NoSignatureError,
    SigningError,
    UserRejectedError,
    WalletNotDetectedError,
    WalletNotSyncedError,
)

__all__ = [
    # Base
    "PasserelleException",
    "PreconditionError",
    "WalletNotConnectedError",
    "InvalidAmountError",
    "InvalidAddressError",
    "UnsupportedChainError",
    "StoreError",
    # Wallet
    "SigningError",
    "UserRejectedError",
    "WalletNotDetectedError",
    "NoSignatureError",
    "WalletNotSyncedError",
    # Network
    "NetworkError",
    "RPCError",
    "SyncTimeoutError",
    "PaymentStageError",
]
