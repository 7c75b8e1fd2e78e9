"""
Create Bridge Intent use case.

Validates a bridge request, submits the native transfer when the source
chain supports it, and records the intent in the ledger.
"""

import secrets
import time
from contextlib import contextmanager
from datetime import timedelta
from decimal import Decimal
from typing import Iterator, Optional

from passerelle.application.dto.bridge_dto import (
    BridgeRequest,
    BridgeResult,
    BridgeStage,
)
from passerelle.application.dto.wallet_session import WalletSession
from passerelle.domain.entities.bridge_intent import BridgeIntent
from passerelle.domain.exceptions import (
    NetworkError,
    PasserelleException,
    PreconditionError,
    SigningError,
    StoreError,
    WalletNotConnectedError,
)
from passerelle.domain.repositories.i_intent_ledger import IIntentLedger
from passerelle.domain.services.i_transfer_builder import ITransferBuilder
from passerelle.domain.services.i_wallet_capability import IPublicChainSigner
from passerelle.domain.services.response_normalizer import normalize
from passerelle.domain.value_objects.amount import (
    FEE_RATE,
    compute_fee,
    parse_amount,
    to_base_units,
)
from passerelle.domain.value_objects.chain import SOLANA, ChainCatalog
from passerelle.infrastructure.monitoring.system_reporter import SystemReporter

EXPLORER_URL = "https://explorer.solana.com/tx/{signature}?cluster={cluster}"

# Error class for foreign exceptions raised inside each stage
STAGE_ERRORS = {
    BridgeStage.VALIDATING: PreconditionError,
    BridgeStage.BUILDING: NetworkError,
    BridgeStage.SIGNING: SigningError,
    BridgeStage.NORMALIZING: SigningError,
    BridgeStage.PERSISTING: StoreError,
}


def placeholder_reference(chain_id: str) -> str:
    """Local, per-call unique id for sources that are not submitted on-chain."""
    return f"{chain_id}-sim-{int(time.time() * 1000)}-{secrets.token_hex(4)}"


class CreateBridgeIntent:
    """
    Bridge orchestrator.

    Stages: Idle -> Validating -> (Building -> Signing -> Normalizing)?
    -> Persisting -> Success | Failed.

    Business rules:
    - A wallet connected to the source chain and a positive amount are
      required; validation makes no network call
    - Only pairs the transfer builder supports are submitted on-chain;
      other sources get a simulated placeholder reference
    - The intent is always persisted, as processing when a source tx id
      exists, else pending, and committed before Success is reported
    - The first error aborts the action and is raised with its stage in
      ``details["stage"]``; nothing is retried
    - A store failure after a real submission leaves that submission
      unrecorded
    """

    def __init__(
        self,
        catalog: ChainCatalog,
        transfer_builder: ITransferBuilder,
        intent_ledger: IIntentLedger,
        bridge_wallet_address: str,
        network: str,
        fee_rate: Decimal = FEE_RATE,
        eta_minutes: int = 5,
        reporter: Optional[SystemReporter] = None,
    ):
        """
        Initialize use case with dependencies.

        Args:
            catalog: Supported chains and tokens
            transfer_builder: Builder for submittable source chains
            intent_ledger: Ledger the intent is recorded in
            bridge_wallet_address: Custody address receiving transfers
            network: Signing network, e.g. "solana:devnet"
            fee_rate: Bridge fee rate
            eta_minutes: Expected settlement time
            reporter: Optional SystemReporter for logging
        """
        self.catalog = catalog
        self.transfer_builder = transfer_builder
        self.intent_ledger = intent_ledger
        self.bridge_wallet_address = bridge_wallet_address
        self.network = network
        self.fee_rate = fee_rate
        self.eta = timedelta(minutes=eta_minutes)
        self.reporter = reporter or SystemReporter(name="passerelle")

    async def execute(
        self,
        request: BridgeRequest,
        session: Optional[WalletSession],
    ) -> BridgeResult:
        """
        Execute bridge action.

        Args:
            request: Bridge request from the UI/CLI
            session: Active wallet session (may be None)

        Returns:
            BridgeResult with the persisted intent

        Raises:
            PreconditionError: Invalid request or no matching wallet
            UnsupportedChainError: Source pair rejected by the builder
            SigningError: Wallet refused, failed or replied without a signature
            NetworkError: RPC or submission failure
            StoreError: Ledger write failure
        """
        with self._stage(BridgeStage.VALIDATING):
            amount = self._validate(request, session)

        tx_id: Optional[str] = None
        explorer_url: Optional[str] = None

        if self.transfer_builder.supports(request.source_chain, request.source_token):
            with self._stage(BridgeStage.BUILDING):
                unsigned = await self.transfer_builder.build(
                    request.source_chain,
                    request.source_token,
                    session.address,
                    self.bridge_wallet_address,
                    amount,
                )

            with self._stage(BridgeStage.SIGNING):
                capability = session.capability
                if not isinstance(capability, IPublicChainSigner):
                    raise SigningError("Wallet does not support transaction signing")
                raw_response = await capability.sign_and_send(unsigned, self.network)

            with self._stage(BridgeStage.NORMALIZING):
                tx_id = normalize(raw_response)

            explorer_url = self._explorer_url(request.source_chain, tx_id)
            reference = tx_id
            self.reporter.info(
                f"Transfer submitted: {tx_id}", context="Bridge", verbose_level=1
            )
        else:
            reference = placeholder_reference(request.source_chain)
            self.reporter.warning(
                f"Simulated {request.source_chain} transfer, reference {reference}",
                context="Bridge",
            )

        with self._stage(BridgeStage.PERSISTING):
            intent = BridgeIntent.create(
                user_address=session.address,
                source_chain=request.source_chain,
                destination_chain=request.destination_chain,
                source_token=request.source_token,
                destination_token=self.catalog.destination_token(
                    request.destination_chain, request.source_token
                ),
                amount=amount,
                is_private=request.is_private,
                source_tx_hash=tx_id,
                fee_rate=self.fee_rate,
                eta=self.eta,
            )
            saved = await self.intent_ledger.insert(intent)
            await self.intent_ledger.commit()

        self.reporter.info(
            f"{BridgeStage.SUCCESS.value}: intent {saved.id} {saved.status.value}",
            context="Bridge",
        )

        return BridgeResult(
            intent=saved,
            reference=reference,
            simulated=tx_id is None,
            explorer_url=explorer_url,
            stage=BridgeStage.SUCCESS,
        )

    def _validate(
        self, request: BridgeRequest, session: Optional[WalletSession]
    ) -> Decimal:
        for chain_id in (request.source_chain, request.destination_chain):
            if chain_id not in self.catalog:
                raise PreconditionError(
                    f"Unsupported chain: {chain_id}",
                    code="UNKNOWN_CHAIN",
                    details={"chain": chain_id},
                )

        if request.source_chain == request.destination_chain:
            raise PreconditionError(
                "Source and destination chains must differ",
                code="SAME_CHAIN",
            )

        if not self.catalog.supports_token(request.source_chain, request.source_token):
            raise PreconditionError(
                f"{request.source_token} is not available on {request.source_chain}",
                code="UNSUPPORTED_TOKEN",
                details={
                    "chain": request.source_chain,
                    "token": request.source_token,
                },
            )

        if session is None or not session.matches(request.source_chain):
            raise WalletNotConnectedError(request.source_chain)

        amount = parse_amount(request.amount)

        # Amounts that cannot be transferred or charged fail here, before any I/O
        if self.transfer_builder.supports(request.source_chain, request.source_token):
            token = self.catalog.get(request.source_chain).get_token(request.source_token)
            to_base_units(amount, token.decimals)
        compute_fee(amount, self.fee_rate)

        return amount

    def _explorer_url(self, chain_id: str, tx_id: str) -> Optional[str]:
        if chain_id != SOLANA:
            return None
        cluster = self.network.split(":", 1)[-1]
        return EXPLORER_URL.format(signature=tx_id, cluster=cluster)

    @contextmanager
    def _stage(self, stage: BridgeStage) -> Iterator[None]:
        self.reporter.info(stage.value, context="Bridge", verbose_level=2)
        try:
            yield
        except PasserelleException as e:
            e.details.setdefault("stage", stage.value)
            self._report_failure(stage, e)
            raise
        except Exception as e:
            error_class = STAGE_ERRORS[stage]
            wrapped = error_class(str(e), details={"stage": stage.value})
            self._report_failure(stage, wrapped)
            raise wrapped from e

    def _report_failure(self, stage: BridgeStage, error: PasserelleException) -> None:
        self.reporter.error(
            f"{BridgeStage.FAILED.value} at {stage.value}: {error.message}",
            context="Bridge",
        )
