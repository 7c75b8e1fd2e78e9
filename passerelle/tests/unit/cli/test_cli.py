"""
Tests for the Passerelle CLI and the Midnight wallet menu.

CLI commands run their own event loop, so these tests are synchronous.

Usage:
    pytest passerelle/tests/unit/cli/test_cli.py
"""

import json
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner
from solders.hash import Hash
from solders.pubkey import Pubkey

from helpers.factories import make_intent
from passerelle.application.use_cases.get_recent_transactions import (
    GetRecentTransactions,
)
from passerelle.application.use_cases.send_private_payment import PaymentPipeline
from passerelle.cli.main import cli, format_intent, run
from passerelle.cli.midnight_menu import (
    FAUCET_URL,
    parse_native_amount,
    read_deployment,
)
from passerelle.config.settings import Settings
from passerelle.di.container import DIContainer
from passerelle.domain.exceptions import NetworkError, PaymentStageError
from passerelle.domain.services.i_chain_transport import IChainTransport
from passerelle.domain.services.i_privacy_wallet import IPrivacyWallet
from passerelle.domain.value_objects.privacy import (
    NATIVE_ASSET,
    IndexedTransaction,
    WalletState,
)
from passerelle.domain.value_objects.transfer import BlockReference, SubmissionReceipt
from passerelle.infrastructure.monitoring.system_reporter import SystemReporter

SIGNATURE = "4Nd1mBQtrMJVYVfKf2PJy9NZUZdTAsp7D4xWLs4gDB4TaUFyNZGdRxUXUMigAxWT5hFbDFXmN6Pq89eMBMqnwMiP"
SEED = "0" * 63 + "1"
MIDNIGHT_ADDRESS = "mn_shield-addr_test1menu"


# ================================================================
# Helpers
# ================================================================


class TestFormatting:
    """Tests for small CLI helpers."""

    def test_format_intent(self):
        intent = make_intent(
            amount="1.5",
            source_tx_hash="sig-1",
            now=datetime(2026, 3, 1, 12, 30, tzinfo=timezone.utc),
        )

        assert format_intent(intent) == (
            "2026-03-01 12:30 | solana -> midnight | 1.5 SOL | fee 0.0045 | "
            "processing | sig-1"
        )

    def test_format_pending_intent(self):
        assert format_intent(make_intent()).endswith("| pending | -")

    @pytest.mark.parametrize(
        "raw, expected",
        [("42", 42), (" 7 ", 7), ("0", None), ("-1", None), ("1.5", None), ("abc", None)],
    )
    def test_parse_native_amount(self, raw, expected):
        assert parse_native_amount(raw) == expected

    def test_read_deployment(self, tmp_path):
        path = tmp_path / "deployment.json"
        assert read_deployment(str(path)) is None

        path.write_text(json.dumps({"contractAddress": "0xc0ffee"}))
        assert read_deployment(str(path)) == {"contractAddress": "0xc0ffee"}

        path.write_text("{not json")
        assert read_deployment(str(path)) is None

    def test_run_reports_errors(self, capsys):
        async def fail():
            raise RuntimeError("boom")

        with pytest.raises(SystemExit) as exc_info:
            run(fail())

        assert exc_info.value.code == 1
        assert "Error: boom" in capsys.readouterr().err


# ================================================================
# Bridge commands
# ================================================================


@pytest.fixture
def cli_settings(tmp_path, keypair_path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}",
        SOLANA_KEYPAIR_PATH=keypair_path,
        BRIDGE_WALLET_ADDRESS=str(Pubkey.new_unique()),
        LOG_VERBOSE=0,
    )


@pytest.fixture
def transport() -> MagicMock:
    transport = MagicMock(spec=IChainTransport)
    transport.get_latest_block_reference.return_value = BlockReference(
        hash=str(Hash.new_unique()), valid_height=300
    )
    transport.send_raw_transaction.return_value = SIGNATURE
    return transport


@pytest.fixture
def container_factory(cli_settings, transport):
    def build():
        container = DIContainer(cli_settings)
        container._solana_transport = transport
        return container

    return build


class TestBridgeCommands:
    """Tests for bridge send / history."""

    def test_send_and_history(self, container_factory, transport, keypair):
        runner = CliRunner()

        with patch("passerelle.cli.main.DIContainer", side_effect=container_factory):
            sent = runner.invoke(cli, ["bridge", "send", "--amount", "1.5"])
            listed = runner.invoke(cli, ["bridge", "history"])

        assert sent.exit_code == 0, sent.output
        assert f"Connected: {keypair.pubkey()}" in sent.output
        assert "Status: processing" in sent.output
        assert "Fee: 0.0045 SOL" in sent.output
        assert "Amount: 1.5 SOL -> tDUST" in sent.output
        assert f"Explorer: https://explorer.solana.com/tx/{SIGNATURE}?cluster=devnet" in sent.output
        assert transport.send_raw_transaction.await_count == 1

        assert listed.exit_code == 0, listed.output
        assert f"processing | {SIGNATURE}" in listed.output

    def test_history_for_unknown_address(self, container_factory):
        runner = CliRunner()

        with patch("passerelle.cli.main.DIContainer", side_effect=container_factory):
            result = runner.invoke(cli, ["bridge", "history", "--address", "nobody"])

        assert result.exit_code == 0
        assert "No transactions yet" in result.output

    def test_invalid_amount(self, container_factory, transport):
        runner = CliRunner()

        with patch("passerelle.cli.main.DIContainer", side_effect=container_factory):
            result = runner.invoke(cli, ["bridge", "send", "--amount", "abc"])

        assert result.exit_code == 1
        assert "Error: Please enter a valid amount" in result.output
        assert transport.get_latest_block_reference.await_count == 0

    def test_same_chain(self, container_factory):
        runner = CliRunner()

        with patch("passerelle.cli.main.DIContainer", side_effect=container_factory):
            result = runner.invoke(
                cli,
                ["bridge", "send", "--amount", "1", "--destination", "solana"],
            )

        assert result.exit_code == 1
        assert "Error: Source and destination chains must differ" in result.output

    def test_missing_keypair(self, container_factory, cli_settings, tmp_path):
        cli_settings.SOLANA_KEYPAIR_PATH = str(tmp_path / "absent.json")
        runner = CliRunner()

        with patch("passerelle.cli.main.DIContainer", side_effect=container_factory):
            result = runner.invoke(cli, ["bridge", "send", "--amount", "1"])

        assert result.exit_code == 1
        assert "Error: Solana keypair wallet not detected" in result.output


# ================================================================
# Midnight wallet menu
# ================================================================


async def synced_stream(state):
    yield state


def fake_midnight_container(pipeline_send=None) -> MagicMock:
    state = WalletState(
        address=MIDNIGHT_ADDRESS,
        balances={NATIVE_ASSET: 10_000_000},
        synced=True,
        source_gap=0,
        apply_gap=0,
    )
    wallet = MagicMock(spec=IPrivacyWallet)
    wallet.state.return_value = state
    wallet.state_stream.side_effect = lambda: synced_stream(state)

    pipeline = MagicMock(spec=PaymentPipeline)
    pipeline.send.return_value = SubmissionReceipt(tx_id="0xfeed", height=1234)
    if pipeline_send is not None:
        pipeline.send.side_effect = pipeline_send

    history = MagicMock(spec=GetRecentTransactions)
    history.execute.return_value = [IndexedTransaction("0x1", 90, "in", 500)]

    container = MagicMock(spec=DIContainer)
    container.settings = Settings(MIDNIGHT_SYNC_TIMEOUT=1.0)
    container.reporter = SystemReporter(name="passerelle_cli_test", verbose=0)
    container.build_midnight_wallet.return_value = wallet
    container.get_payment_pipeline.return_value = pipeline
    container.get_recent_transactions.return_value = history
    return container


class TestMidnightMenu:
    """Tests for the interactive wallet menu."""

    def test_full_session(self):
        container = fake_midnight_container()
        runner = CliRunner()
        answers = "\n".join(
            [SEED, "1", "2", "mn_shield-addr_test1bob", "5000", "3", "9", "4"]
        )

        with runner.isolated_filesystem():
            with open("deployment.json", "w") as f:
                json.dump({"contractAddress": "0xc0ffee"}, f)

            with patch("passerelle.cli.main.DIContainer", return_value=container):
                result = runner.invoke(cli, ["midnight", "wallet"], input=answers + "\n")

        assert result.exit_code == 0, result.output
        output = result.output
        assert "(Found deployment.json - contract: 0xc0ffee)" in output
        assert "Connecting & syncing..." in output
        assert f"Address: {MIDNIGHT_ADDRESS}" in output
        assert "Balance: 10000000 (native)" in output
        assert FAUCET_URL in output
        assert "Building payment..." in output
        assert "Sent!" in output
        assert "Tx ID: 0xfeed" in output
        assert "Included at block: 1234" in output
        assert "Fetching last 10 transactions..." in output
        assert "- 0x1 | block 90 | in | amount 500" in output
        assert "Please choose 1, 2, 3, or 4." in output
        assert "Goodbye!" in output

        container.build_midnight_wallet.assert_awaited_once_with(SEED)
        pipeline = container.get_payment_pipeline.return_value
        pipeline.send.assert_awaited_once_with("mn_shield-addr_test1bob", 5000)
        container.build_midnight_wallet.return_value.close.assert_awaited_once()
        container.shutdown.assert_awaited_once()

    def test_invalid_amount_and_failed_send(self):
        failure = PaymentStageError("prove", NetworkError("prover down"))
        container = fake_midnight_container(pipeline_send=failure)
        runner = CliRunner()
        answers = "\n".join(
            [SEED, "2", "bob", "zero", "2", "bob", "10", "3", "4"]
        )
        container.get_recent_transactions.return_value.execute.return_value = []

        with runner.isolated_filesystem():
            with patch("passerelle.cli.main.DIContainer", return_value=container):
                result = runner.invoke(cli, ["midnight", "wallet"], input=answers + "\n")

        assert result.exit_code == 0, result.output
        assert "Invalid amount." in result.output
        assert "Send failed: prove stage failed: prover down" in result.output
        assert "No recent transactions found." in result.output
        assert "Goodbye!" in result.output
        pipeline = container.get_payment_pipeline.return_value
        assert pipeline.send.await_count == 1

    def test_sync_failure_closes_wallet(self):
        container = fake_midnight_container()
        wallet = container.build_midnight_wallet.return_value

        async def never_synced():
            yield WalletState(address=MIDNIGHT_ADDRESS, synced=False)

        wallet.state_stream.side_effect = never_synced
        runner = CliRunner()

        with runner.isolated_filesystem():
            with patch("passerelle.cli.main.DIContainer", return_value=container):
                result = runner.invoke(cli, ["midnight", "wallet"], input=SEED + "\n")

        assert result.exit_code == 1
        assert "Error: Wallet state stream ended before sync" in result.output
        wallet.close.assert_awaited_once()
        container.shutdown.assert_awaited_once()
