"""
Base domain exceptions.
"""

from typing import Optional


class PasserelleException(Exception):
    """Base exception for all Passerelle domain errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: Optional[dict] = None,
    ):
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class PreconditionError(PasserelleException):
    """Raised when a request is rejected before any network call."""


class WalletNotConnectedError(PreconditionError):
    """Raised when no connected wallet matches the source chain."""

    def __init__(self, chain_id: str, message: str | None = None):
        super().__init__(
            message or f"Connect a {chain_id} wallet first",
            code="WALLET_NOT_CONNECTED",
            details={"chain": chain_id},
        )
        self.chain_id = chain_id


class InvalidAmountError(PreconditionError):
    """Raised when an amount is not a positive, representable number."""

    def __init__(self, amount: object, reason: str = "Please enter a valid amount"):
        super().__init__(
            reason,
            code="INVALID_AMOUNT",
            details={"amount": str(amount)},
        )
        self.amount = amount


class InvalidAddressError(PreconditionError):
    """Raised when an address cannot be parsed for its chain."""

    def __init__(self, address: str, chain_id: str):
        super().__init__(
            f"Invalid {chain_id} address: {address}",
            code="INVALID_ADDRESS",
            details={"address": address, "chain": chain_id},
        )
        self.address = address


class UnsupportedChainError(PasserelleException):
    """
    Raised for a chain or (chain, token) pair outside what is supported.

    This is a declared limitation, not an execution failure.
    """

    def __init__(self, chain_id: str, token: str | None = None):
        if token:
            message = f"Native transfers of {token} on {chain_id} are not supported"
        else:
            message = f"Unsupported chain: {chain_id}"
        super().__init__(
            message,
            code="UNSUPPORTED_CHAIN",
            details={"chain": chain_id, "token": token},
        )
        self.chain_id = chain_id
        self.token = token


class StoreError(PasserelleException):
    """Raised when the intent ledger cannot be read or written."""
