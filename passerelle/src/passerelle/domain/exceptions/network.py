"""
Network-related exceptions.

Defines failures of the chain RPC, proof service, wallet bridge and
submission endpoints. None of these are retried automatically.
"""

from typing import Optional

from passerelle.domain.exceptions.base import PasserelleException


class NetworkError(PasserelleException):
    """Base exception for remote call failures."""


class RPCError(NetworkError):
    """Raised when a JSON-RPC endpoint returns an error object."""

    def __init__(self, message: str, method: str, error: Optional[dict] = None):
        """
        Initialize RPC error.

        Args:
            message: Error message
            method: RPC method that failed
            error: Raw error object returned by the node
        """
        super().__init__(
            message,
            code="RPC_ERROR",
            details={"method": method, "error": error},
        )
        self.method = method


class SyncTimeoutError(NetworkError):
    """Raised when the wallet does not reach sync within the given timeout."""

    def __init__(self, timeout: float):
        super().__init__(
            f"Wallet did not sync within {timeout:.1f}s",
            code="SYNC_TIMEOUT",
            details={"timeout": timeout},
        )
        self.timeout = timeout


class PaymentStageError(PasserelleException):
    """
    Raised when a payment pipeline stage fails.

    Carries the stage name so operators can tell which remote step broke.
    """

    def __init__(self, stage: str, cause: Exception):
        """
        Initialize payment stage error.

        Args:
            stage: Failing stage (skeleton, balance, prove, submit)
            cause: Underlying exception
        """
        super().__init__(
            f"{stage} stage failed: {cause}",
            code="PAYMENT_STAGE_FAILED",
            details={"stage": stage},
        )
        self.stage = stage
        self.cause = cause
