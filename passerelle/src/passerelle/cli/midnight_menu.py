"""
Menu-driven Midnight wallet client.

Line-based prompts and output: show address, send, recent transactions,
exit.
"""

import json
from pathlib import Path
from typing import Optional

import click

from passerelle.application.use_cases.send_private_payment import wait_synced
from passerelle.di.container import DIContainer
from passerelle.domain.exceptions import PasserelleException
from passerelle.domain.services.i_privacy_wallet import IPrivacyWallet

FAUCET_URL = "https://midnight.network/test-faucet"
HISTORY_LIMIT = 10
DEPLOYMENT_FILE = "deployment.json"


def read_deployment(path: str = DEPLOYMENT_FILE) -> Optional[dict]:
    """Contract deployment record left by a previous deploy, if readable."""
    file = Path(path)
    if not file.exists():
        return None
    try:
        return json.loads(file.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return None


def parse_native_amount(raw: str) -> Optional[int]:
    """Positive integer amount, or None when the input is not one."""
    try:
        amount = int(raw.strip())
    except ValueError:
        return None
    return amount if amount > 0 else None


async def run_wallet_menu(container: DIContainer) -> None:
    """Interactive wallet session, from seed prompt to Goodbye."""
    click.echo("\nMidnight Wallet CLI (Testnet)\n")

    deployment = read_deployment()
    if deployment and deployment.get("contractAddress"):
        click.echo(f"(Found {DEPLOYMENT_FILE} - contract: {deployment['contractAddress']})\n")

    seed = click.prompt("Enter your 64-char wallet seed (hex)", hide_input=True)

    click.echo("\nConnecting & syncing...")
    wallet = await container.build_midnight_wallet(seed)

    try:
        await wait_synced(
            wallet,
            timeout=container.settings.MIDNIGHT_SYNC_TIMEOUT,
            reporter=container.reporter,
        )
        address = (await wallet.state()).address
        click.echo(f"\nAddress: {address}")

        await _menu_loop(container, wallet, address)
    finally:
        await wallet.close()

    click.echo("\nGoodbye!\n")


async def _menu_loop(container: DIContainer, wallet: IPrivacyWallet, address: str) -> None:
    pipeline = container.get_payment_pipeline(wallet)
    history = container.get_recent_transactions()

    while True:
        balance = (await wallet.state()).native_balance
        click.echo("\n--- Menu ---")
        click.echo(f"Balance: {balance} (native)")
        click.echo("1) Show address (receive)")
        click.echo("2) Send tokens")
        click.echo("3) View recent transactions")
        click.echo("4) Exit")
        choice = click.prompt("\nYour choice", default="", show_default=False).strip()

        if choice == "1":
            click.echo(f"\nYour shield address:\n{address}")
            click.echo(f"\nGet test tokens:\n{FAUCET_URL}\n")

        elif choice == "2":
            recipient = click.prompt("\nRecipient shield address")
            amount = parse_native_amount(click.prompt("Amount (integer, native units)"))
            if amount is None:
                click.echo("Invalid amount.", err=True)
                continue

            click.echo("\nBuilding payment...")
            try:
                receipt = await pipeline.send(recipient, amount)
            except PasserelleException as e:
                click.echo(f"\nSend failed: {e.message}", err=True)
                continue

            click.echo("\nSent!")
            click.echo(f"Tx ID: {receipt.tx_id}")
            click.echo(f"Included at block: {receipt.height_display}")

        elif choice == "3":
            click.echo(f"\nFetching last {HISTORY_LIMIT} transactions...")
            items = await history.execute(address, limit=HISTORY_LIMIT)
            if not items:
                click.echo("No recent transactions found.")
            for tx in items:
                click.echo(
                    f"- {tx.tx_id} | block {tx.block_height} | {tx.direction} "
                    f"| amount {tx.amount}"
                )

        elif choice == "4":
            return

        else:
            click.echo("Please choose 1, 2, 3, or 4.")
