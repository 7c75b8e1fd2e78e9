"""
Unit tests for the Midnight wallet, proof server and indexer clients.

Usage:
    pytest passerelle/tests/unit/infrastructure/test_midnight_clients.py
"""

import pytest
import pytest_asyncio

from passerelle.application.use_cases.send_private_payment import (
    PaymentPipeline,
    wait_synced,
)
from passerelle.domain.exceptions import (
    NetworkError,
    PaymentStageError,
    PreconditionError,
)
from passerelle.domain.value_objects.privacy import (
    NATIVE_ASSET,
    BalancedTransaction,
    ProvedTransaction,
)
from passerelle.infrastructure.blockchain.wallet_bridge_client import (
    WalletBridgeClient,
)
from passerelle.infrastructure.midnight.indexer_client import IndexerClient
from passerelle.infrastructure.midnight.proof_server_client import ProofServerClient
from passerelle.infrastructure.midnight.wallet_client import (
    MidnightWalletClient,
    parse_submission,
    parse_wallet_state,
)

SEED = "a" * 64
WALLET_ADDRESS = "mn_shield-addr_test1sender"
RECIPIENT = "mn_shield-addr_test1recipient"


def state_document(synced: bool, source_gap: int = 0, apply_gap: int = 0) -> dict:
    return {
        "address": WALLET_ADDRESS,
        "balances": {NATIVE_ASSET: "25000000"},
        "syncProgress": {
            "synced": synced,
            "lag": {"sourceGap": source_gap, "applyGap": apply_gap},
        },
    }


@pytest_asyncio.fixture
async def bridge(fake_service):
    client = WalletBridgeClient(fake_service.url, timeout=2.0)
    yield client
    await client.close()


# ================================================================
# Parsers
# ================================================================


class TestParseWalletState:
    """Tests for wallet state documents."""

    def test_synced_state(self):
        state = parse_wallet_state(state_document(True))

        assert state.synced
        assert state.address == WALLET_ADDRESS
        assert state.native_balance == 25_000_000
        assert state.source_gap == 0

    def test_lagging_state(self):
        state = parse_wallet_state(state_document(False, source_gap=120, apply_gap=4))

        assert not state.synced
        assert (state.source_gap, state.apply_gap) == (120, 4)

    def test_empty_document(self):
        state = parse_wallet_state({})

        assert not state.synced
        assert state.native_balance == 0
        assert state.source_gap is None


class TestParseSubmission:
    """Tests for submission reply shapes."""

    @pytest.mark.parametrize(
        "raw, tx_id, height",
        [
            ({"public": {"txId": "0xaa", "blockHeight": 77}}, "0xaa", 77),
            ({"txId": "0xbb", "blockHeight": 78}, "0xbb", 78),
            ({"public": {"txId": "0xcc"}, "blockHeight": 79}, "0xcc", 79),
            ({"txId": "0xdd"}, "0xdd", None),
            ("0xee", "0xee", None),
            ({}, "(unknown)", None),
            (None, "(unknown)", None),
        ],
    )
    def test_shapes(self, raw, tx_id, height):
        receipt = parse_submission(raw)

        assert receipt.tx_id == tx_id
        assert receipt.height == height

    def test_pending_height_display(self):
        assert parse_submission({"txId": "0x1"}).height_display == "pending"
        assert parse_submission({"txId": "0x1", "blockHeight": 9}).height_display == "9"


# ================================================================
# Wallet client
# ================================================================


class TestMidnightWalletClient:
    """Tests for the bridge-hosted wallet."""

    async def test_build_from_seed(self, fake_service, bridge):
        fake_service.reply("POST", "/wallet/build", {"ok": True})

        wallet = await MidnightWalletClient.build_from_seed(
            bridge,
            f"  {SEED}\n",
            indexer_url="http://indexer",
            indexer_ws_url="ws://indexer",
            proof_server_url="http://prover",
            node_url="http://node",
        )

        assert isinstance(wallet, MidnightWalletClient)
        request = fake_service.calls("POST", "/wallet/build")[0]
        assert request["seed"] == SEED
        assert request["networkId"] == "TestNet"
        assert request["proofServer"] == "http://prover"

    @pytest.mark.parametrize("seed", ["", "abc", "g" * 64, "a" * 63])
    async def test_invalid_seed(self, fake_service, bridge, seed):
        with pytest.raises(PreconditionError) as exc_info:
            await MidnightWalletClient.build_from_seed(
                bridge, seed, "http://i", "ws://i", "http://p", "http://n"
            )

        assert exc_info.value.code == "INVALID_SEED"
        assert fake_service.requests == []

    async def test_state_stream_until_closed(self, fake_service, bridge):
        fake_service.reply("GET", "/wallet/state", state_document(False, 3, 1))
        fake_service.reply("POST", "/wallet/close", {"ok": True})
        wallet = MidnightWalletClient(bridge, poll_interval=0.01)

        states = []
        async for state in wallet.state_stream():
            states.append(state)
            if len(states) == 2:
                await wallet.close()

        assert len(states) == 2
        assert states[0].source_gap == 3

    async def test_close_is_idempotent(self, fake_service, bridge):
        fake_service.reply("POST", "/wallet/close", {"ok": True})
        wallet = MidnightWalletClient(bridge)

        await wallet.close()
        await wallet.close()

        assert len(fake_service.calls("POST", "/wallet/close")) == 1

    async def test_wait_synced_over_bridge(self, fake_service, bridge, reporter):
        documents = iter(
            [state_document(False, 10, 2), state_document(False, 0, 1)]
        )
        fake_service.reply(
            "GET",
            "/wallet/state",
            lambda _: next(documents, state_document(True)),
        )
        wallet = MidnightWalletClient(bridge, poll_interval=0.01)

        state = await wait_synced(wallet, timeout=5.0, reporter=reporter)

        assert state.synced
        assert len(fake_service.calls("GET", "/wallet/state")) == 3

    async def test_transaction_calls(self, fake_service, bridge):
        fake_service.reply("POST", "/transaction/skeleton", {"transaction": "sk"})
        fake_service.reply("POST", "/transaction/balance", {"transaction": "bal"})
        fake_service.reply(
            "POST",
            "/transaction/submit",
            {"public": {"txId": "0xfeed", "blockHeight": 501}},
        )
        wallet = MidnightWalletClient(bridge)

        skeleton = await wallet.build_skeleton(RECIPIENT, NATIVE_ASSET, 5_000_000)
        balanced = await wallet.balance(skeleton)
        receipt = await wallet.submit(ProvedTransaction(payload="proved"))

        assert skeleton.payload == "sk"
        assert balanced.payload == "bal"
        assert (receipt.tx_id, receipt.height) == ("0xfeed", 501)
        assert fake_service.calls("POST", "/transaction/skeleton")[0] == {
            "address": RECIPIENT,
            "asset": NATIVE_ASSET,
            "amount": "5000000",
        }
        assert fake_service.calls("POST", "/transaction/balance")[0] == {
            "transaction": "sk",
            "newCoins": [],
        }
        assert fake_service.calls("POST", "/transaction/submit")[0] == {
            "transaction": "proved"
        }


# ================================================================
# Proof server
# ================================================================


class TestProofServerClient:
    """Tests for the remote prover."""

    async def test_prove(self, fake_service):
        fake_service.reply("POST", "/prove", {"transaction": "proved-payload"})
        client = ProofServerClient(fake_service.url, timeout=2.0)

        try:
            proved = await client.prove(BalancedTransaction(payload="balanced"))
        finally:
            await client.close()

        assert proved.payload == "proved-payload"
        assert fake_service.calls("POST", "/prove") == [{"transaction": "balanced"}]

    async def test_missing_transaction(self, fake_service):
        fake_service.reply("POST", "/prove", {})
        client = ProofServerClient(fake_service.url, timeout=2.0)

        try:
            with pytest.raises(NetworkError, match="no transaction"):
                await client.prove(BalancedTransaction(payload="balanced"))
        finally:
            await client.close()

    async def test_server_error(self, fake_service):
        fake_service.reply("POST", "/prove", {"error": "bad proof"}, status=500)
        client = ProofServerClient(fake_service.url, timeout=2.0)

        try:
            with pytest.raises(NetworkError) as exc_info:
                await client.prove(BalancedTransaction(payload="balanced"))
        finally:
            await client.close()

        assert exc_info.value.code == "PROOF_SERVER_ERROR"

    async def test_pipeline_discards_unproved_transaction(
        self, fake_service, bridge, reporter
    ):
        fake_service.reply("POST", "/transaction/skeleton", {"transaction": "sk"})
        fake_service.reply("GET", "/wallet/state", state_document(True))
        fake_service.reply("POST", "/transaction/balance", {"transaction": "bal"})
        fake_service.reply("POST", "/prove", {"error": "prover down"}, status=502)
        prover = ProofServerClient(fake_service.url, timeout=2.0)
        pipeline = PaymentPipeline(MidnightWalletClient(bridge), prover, reporter=reporter)

        try:
            with pytest.raises(PaymentStageError) as exc_info:
                await pipeline.send(RECIPIENT, 1_000)
        finally:
            await prover.close()

        assert exc_info.value.stage == "prove"
        assert len(fake_service.calls("POST", "/prove")) == 1
        assert fake_service.calls("POST", "/transaction/submit") == []


# ================================================================
# Indexer
# ================================================================


class TestIndexerClient:
    """Tests for the best-effort indexer lookup."""

    async def test_recent_transactions(self, fake_service, reporter):
        fake_service.reply(
            "POST",
            "/graphql",
            {
                "data": {
                    "transactions": [
                        {"txId": "0x1", "blockHeight": 90, "amount": "500", "direction": "in"},
                        {"txId": "0x2", "blockHeight": 88, "amount": 7, "direction": "sideways"},
                    ]
                }
            },
        )
        client = IndexerClient(f"{fake_service.url}/graphql", reporter=reporter)

        try:
            rows = await client.recent_transactions(WALLET_ADDRESS, limit=2)
        finally:
            await client.close()

        assert [row.tx_id for row in rows] == ["0x1", "0x2"]
        assert rows[0].amount == 500
        assert rows[0].direction == "in"
        assert rows[1].direction == "unknown"
        variables = fake_service.calls("POST", "/graphql")[0]["variables"]
        assert variables == {"addr": WALLET_ADDRESS, "limit": 2}

    async def test_graphql_errors_yield_empty(self, fake_service, reporter):
        fake_service.reply(
            "POST", "/graphql", {"errors": [{"message": "unknown field"}]}
        )
        client = IndexerClient(f"{fake_service.url}/graphql", reporter=reporter)

        try:
            assert await client.recent_transactions(WALLET_ADDRESS) == []
        finally:
            await client.close()

    async def test_unreachable_indexer_yields_empty(self, reporter):
        client = IndexerClient("http://127.0.0.1:1/graphql", timeout=2.0, reporter=reporter)

        try:
            assert await client.recent_transactions(WALLET_ADDRESS) == []
        finally:
            await client.close()
