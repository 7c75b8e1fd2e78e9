"""
Wallet and signing exceptions.
"""

from passerelle.domain.exceptions.base import PasserelleException, PreconditionError


class SigningError(PasserelleException):
    """
    Base exception for wallet signing failures.

    The wallet-provided message is kept verbatim whenever one exists.
    """


class UserRejectedError(SigningError):
    """Raised when the user declines a connection or signature request."""

    def __init__(self, message: str = "User rejected the request"):
        super().__init__(message, code="USER_REJECTED")


class WalletNotDetectedError(SigningError):
    """Raised when the wallet capability is absent from the host."""

    def __init__(self, wallet_name: str):
        super().__init__(
            f"{wallet_name} wallet not detected",
            code="WALLET_NOT_DETECTED",
            details={"wallet": wallet_name},
        )
        self.wallet_name = wallet_name


class NoSignatureError(SigningError):
    """Raised when a wallet reply carries no usable transaction identifier."""

    def __init__(
        self,
        message: str = "Failed to retrieve transaction signature from wallet response",
    ):
        super().__init__(message, code="NO_SIGNATURE")


class WalletNotSyncedError(PreconditionError):
    """Raised when a balance is requested before the wallet reached sync."""

    def __init__(self, source_gap: int | None = None, apply_gap: int | None = None):
        super().__init__(
            "Wallet is not synced; refusing to balance against a stale view",
            code="WALLET_NOT_SYNCED",
            details={"source_gap": source_gap, "apply_gap": apply_gap},
        )
