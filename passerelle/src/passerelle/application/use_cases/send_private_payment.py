"""
Private payment use case for the privacy chain.

Pipeline: skeleton -> balance -> prove -> submit. Each stage takes only
the previous stage's output. Balancing is gated on a synced wallet.
"""

import asyncio
from typing import Optional

from passerelle.domain.exceptions import (
    InvalidAddressError,
    InvalidAmountError,
    NetworkError,
    PaymentStageError,
    SyncTimeoutError,
    WalletNotSyncedError,
)
from passerelle.domain.services.i_privacy_wallet import IPrivacyWallet
from passerelle.domain.services.i_proof_service import IProofService
from passerelle.domain.value_objects.chain import MIDNIGHT
from passerelle.domain.value_objects.privacy import NATIVE_ASSET, WalletState
from passerelle.domain.value_objects.transfer import SubmissionReceipt
from passerelle.infrastructure.monitoring.system_reporter import SystemReporter


async def wait_synced(
    wallet: IPrivacyWallet,
    timeout: Optional[float] = None,
    reporter: Optional[SystemReporter] = None,
) -> WalletState:
    """
    Block until the wallet reports it is synced.

    Args:
        wallet: Wallet whose state stream is observed
        timeout: Seconds to wait; None waits indefinitely
        reporter: Optional SystemReporter for sync progress

    Returns:
        First synced state

    Raises:
        SyncTimeoutError: If timeout elapses first
        NetworkError: If the state stream ends before sync
    """
    reporter = reporter or SystemReporter(name="passerelle")

    async def _wait() -> WalletState:
        async for state in wallet.state_stream():
            reporter.info(
                f"Sync: synced={str(state.synced).lower()} "
                f"sourceGap={state.source_gap} applyGap={state.apply_gap}",
                context="Sync",
                verbose_level=2,
            )
            if state.synced:
                return state
        raise NetworkError("Wallet state stream ended before sync")

    if timeout is None:
        return await _wait()

    try:
        return await asyncio.wait_for(_wait(), timeout)
    except asyncio.TimeoutError:
        raise SyncTimeoutError(timeout) from None


class PaymentPipeline:
    """
    Send native tokens on the privacy chain.

    Business rules:
    - Amount is a positive integer of native base units
    - The balance stage re-reads wallet state and refuses to run unless synced
    - A failed stage aborts the attempt; a balanced transaction that
      fails to prove is discarded, never proved again
    """

    def __init__(
        self,
        wallet: IPrivacyWallet,
        proof_service: IProofService,
        reporter: Optional[SystemReporter] = None,
    ):
        """
        Initialize pipeline with dependencies.

        Args:
            wallet: Seeded privacy-chain wallet
            proof_service: Remote prover
            reporter: Optional SystemReporter for logging
        """
        self.wallet = wallet
        self.proof_service = proof_service
        self.reporter = reporter or SystemReporter(name="passerelle")

    async def send(self, recipient: str, amount: int) -> SubmissionReceipt:
        """
        Build, balance, prove and submit a payment.

        Args:
            recipient: Shielded recipient address
            amount: Native base units

        Returns:
            SubmissionReceipt (height None while pending)

        Raises:
            InvalidAmountError: If amount is not a positive integer
            InvalidAddressError: If recipient is empty
            WalletNotSyncedError: If the wallet is not synced at balance time
            PaymentStageError: If any remote stage fails
        """
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise InvalidAmountError(amount)

        recipient = (recipient or "").strip()
        if not recipient:
            raise InvalidAddressError(recipient, MIDNIGHT)

        self.reporter.info("Building payment", context="Payment")
        try:
            skeleton = await self.wallet.build_skeleton(recipient, NATIVE_ASSET, amount)
        except Exception as e:
            raise PaymentStageError("skeleton", e) from e

        try:
            state = await self.wallet.state()
        except Exception as e:
            raise PaymentStageError("balance", e) from e

        if not state.synced:
            raise WalletNotSyncedError(state.source_gap, state.apply_gap)

        try:
            balanced = await self.wallet.balance(skeleton)
        except Exception as e:
            raise PaymentStageError("balance", e) from e

        self.reporter.info("Proving", context="Payment", verbose_level=2)
        try:
            proved = await self.proof_service.prove(balanced)
        except Exception as e:
            raise PaymentStageError("prove", e) from e

        self.reporter.info("Submitting", context="Payment")
        try:
            receipt = await self.wallet.submit(proved)
        except Exception as e:
            raise PaymentStageError("submit", e) from e

        self.reporter.info(
            f"Sent {amount} to {recipient}: {receipt.tx_id} "
            f"(block {receipt.height_display})",
            context="Payment",
        )
        return receipt
