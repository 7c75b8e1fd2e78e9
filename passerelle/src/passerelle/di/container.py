"""
Dependency Injection Container for Passerelle.

Manages all service instances and their dependencies.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from passerelle.application.use_cases.connect_wallet import (
    ConnectWallet,
    DisconnectWallet,
)
from passerelle.application.use_cases.create_bridge_intent import (
    CreateBridgeIntent,
)
from passerelle.application.use_cases.get_recent_transactions import (
    GetRecentTransactions,
)
from passerelle.application.use_cases.list_bridge_intents import ListBridgeIntents
from passerelle.application.use_cases.send_private_payment import PaymentPipeline
from passerelle.config.settings import Settings, get_settings
from passerelle.domain.repositories.i_intent_ledger import IIntentLedger
from passerelle.domain.services.i_chain_transport import IChainTransport
from passerelle.domain.services.i_indexer import IIndexer
from passerelle.domain.services.i_privacy_wallet import IPrivacyWallet
from passerelle.domain.services.i_proof_service import IProofService
from passerelle.domain.services.i_transfer_builder import ITransferBuilder
from passerelle.domain.value_objects.chain import ChainCatalog, default_catalog
from passerelle.infrastructure.blockchain.keypair_signer import (
    KeypairCapabilityProvider,
)
from passerelle.infrastructure.blockchain.lace_wallet_adapter import (
    LaceCapabilityProvider,
)
from passerelle.infrastructure.blockchain.solana_rpc_client import SolanaRPCClient
from passerelle.infrastructure.blockchain.solana_transfer_builder import (
    SolanaTransferBuilder,
)
from passerelle.infrastructure.blockchain.wallet_bridge_client import (
    WalletBridgeClient,
)
from passerelle.infrastructure.midnight.indexer_client import IndexerClient
from passerelle.infrastructure.midnight.proof_server_client import ProofServerClient
from passerelle.infrastructure.midnight.wallet_client import MidnightWalletClient
from passerelle.infrastructure.monitoring.system_reporter import (
    SystemReporter,
    reporter_from_settings,
)
from passerelle.infrastructure.persistence.database import Database
from passerelle.infrastructure.persistence.repositories.intent_ledger_repository import (  # noqa: E501
    IntentLedgerRepository,
)


class DIContainer:
    """
    Dependency Injection Container.

    Manages singleton instances of clients and infrastructure.
    Repositories and use cases that touch the ledger are session-scoped.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize container with None instances."""
        self._settings = settings

        # Infrastructure
        self._database: Optional[Database] = None
        self._reporter: Optional[SystemReporter] = None
        self._catalog: Optional[ChainCatalog] = None

        # Clients
        self._solana_transport: Optional[SolanaRPCClient] = None
        self._wallet_bridge: Optional[WalletBridgeClient] = None
        self._proof_service: Optional[ProofServerClient] = None
        self._indexer: Optional[IndexerClient] = None

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    async def initialize(self) -> None:
        """Connect the database and create missing tables."""
        await self.database.connect()
        await self.database.create_tables()

    async def shutdown(self) -> None:
        """Cleanup resources and close connections."""
        if self._database:
            await self._database.disconnect()

        for client in (
            self._solana_transport,
            self._wallet_bridge,
            self._proof_service,
            self._indexer,
        ):
            if client:
                await client.close()

    # Infrastructure Getters

    @property
    def database(self) -> Database:
        """Get database instance."""
        if self._database is None:
            self._database = Database(
                database_url=self.settings.DATABASE_URL,
                echo=self.settings.DATABASE_ECHO,
            )
        return self._database

    @property
    def reporter(self) -> SystemReporter:
        """Get shared reporter."""
        if self._reporter is None:
            self._reporter = reporter_from_settings(settings=self.settings)
        return self._reporter

    @property
    def catalog(self) -> ChainCatalog:
        if self._catalog is None:
            self._catalog = default_catalog()
        return self._catalog

    # Client Getters

    @property
    def solana_transport(self) -> IChainTransport:
        """Get Solana RPC client instance."""
        if self._solana_transport is None:
            self._solana_transport = SolanaRPCClient(
                rpc_url=self.settings.SOLANA_RPC_URL,
                commitment=self.settings.SOLANA_COMMITMENT,
                timeout=self.settings.RPC_TIMEOUT,
            )
        return self._solana_transport

    @property
    def transfer_builder(self) -> ITransferBuilder:
        return SolanaTransferBuilder(self.solana_transport)

    @property
    def wallet_bridge(self) -> WalletBridgeClient:
        """Get wallet bridge client instance."""
        if self._wallet_bridge is None:
            self._wallet_bridge = WalletBridgeClient(
                bridge_url=self.settings.MIDNIGHT_WALLET_BRIDGE_URL,
                timeout=self.settings.RPC_TIMEOUT,
            )
        return self._wallet_bridge

    @property
    def proof_service(self) -> IProofService:
        """Get proof server client instance."""
        if self._proof_service is None:
            self._proof_service = ProofServerClient(
                proof_server_url=self.settings.MIDNIGHT_PROOF_SERVER_URL,
                timeout=self.settings.MIDNIGHT_PROOF_TIMEOUT,
            )
        return self._proof_service

    @property
    def indexer(self) -> IIndexer:
        """Get indexer client instance."""
        if self._indexer is None:
            self._indexer = IndexerClient(
                indexer_url=self.settings.MIDNIGHT_INDEXER_URL,
                timeout=self.settings.RPC_TIMEOUT,
                reporter=self.reporter,
            )
        return self._indexer

    # Repository Getters (Session-scoped)

    def get_intent_ledger(self, session: AsyncSession) -> IIntentLedger:
        return IntentLedgerRepository(session)

    # Use Case Getters

    def get_connect_wallet(self) -> ConnectWallet:
        """Get connect wallet use case with both chain providers."""
        return ConnectWallet(
            providers=[
                KeypairCapabilityProvider(
                    keypair_path=self.settings.SOLANA_KEYPAIR_PATH,
                    transport=self.solana_transport,
                    network=self.settings.solana_chain_id,
                ),
                LaceCapabilityProvider(self.wallet_bridge),
            ],
            reporter=self.reporter,
        )

    def get_disconnect_wallet(self) -> DisconnectWallet:
        return DisconnectWallet(reporter=self.reporter)

    def get_create_bridge_intent(self, session: AsyncSession) -> CreateBridgeIntent:
        """
        Get bridge orchestrator with session-scoped ledger.

        Args:
            session: Active database session

        Returns:
            CreateBridgeIntent use case instance
        """
        return CreateBridgeIntent(
            catalog=self.catalog,
            transfer_builder=self.transfer_builder,
            intent_ledger=self.get_intent_ledger(session),
            bridge_wallet_address=self.settings.BRIDGE_WALLET_ADDRESS,
            network=self.settings.solana_chain_id,
            fee_rate=self.settings.BRIDGE_FEE_RATE,
            eta_minutes=self.settings.BRIDGE_ETA_MINUTES,
            reporter=self.reporter,
        )

    def get_list_bridge_intents(self, session: AsyncSession) -> ListBridgeIntents:
        return ListBridgeIntents(self.get_intent_ledger(session))

    async def build_midnight_wallet(self, seed: str) -> MidnightWalletClient:
        """Build and start the seeded privacy-chain wallet."""
        return await MidnightWalletClient.build_from_seed(
            bridge=self.wallet_bridge,
            seed=seed,
            indexer_url=self.settings.MIDNIGHT_INDEXER_URL,
            indexer_ws_url=self.settings.MIDNIGHT_INDEXER_WS_URL,
            proof_server_url=self.settings.MIDNIGHT_PROOF_SERVER_URL,
            node_url=self.settings.MIDNIGHT_NODE_URL,
            poll_interval=self.settings.MIDNIGHT_SYNC_POLL_INTERVAL,
        )

    def get_payment_pipeline(self, wallet: IPrivacyWallet) -> PaymentPipeline:
        return PaymentPipeline(
            wallet=wallet,
            proof_service=self.proof_service,
            reporter=self.reporter,
        )

    def get_recent_transactions(self) -> GetRecentTransactions:
        return GetRecentTransactions(self.indexer)
