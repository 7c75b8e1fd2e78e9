"""
Passerelle CLI.

Usage:
    passerelle bridge send --amount AMOUNT [--source solana] [--destination midnight]
                           [--token SOL] [--public]
    passerelle bridge history [--address ADDRESS] [--chain solana] [--limit 10]
    passerelle midnight wallet
"""

import asyncio
import os
import sys

import click

from passerelle.application.dto.bridge_dto import BridgeRequest, BridgeResult
from passerelle.cli.midnight_menu import run_wallet_menu
from passerelle.config.settings import reset_settings
from passerelle.di.container import DIContainer
from passerelle.domain.entities.bridge_intent import BridgeIntent
from passerelle.domain.value_objects.chain import MIDNIGHT, SOLANA


def run(coro) -> None:
    """Run a coroutine, turning any failure into 'Error: ...' and exit 1."""
    try:
        asyncio.run(coro)
    except (click.ClickException, click.Abort):
        raise
    except Exception as e:
        click.echo(f"Error: {getattr(e, 'message', None) or e}", err=True)
        sys.exit(1)


@click.group()
@click.option("--env", default=None, help="Environment (production, development, test)")
def cli(env):
    """Passerelle - Solana / Midnight bridge."""
    if env:
        os.environ["ENV"] = env
        reset_settings()


@cli.group()
def bridge():
    """Bridge intent commands."""


@bridge.command()
@click.option("--source", default=SOLANA, show_default=True, help="Source chain")
@click.option("--destination", default=MIDNIGHT, show_default=True, help="Destination chain")
@click.option("--token", default="SOL", show_default=True, help="Source token")
@click.option("--amount", required=True, help="Amount in source token units")
@click.option("--public", "public", is_flag=True, help="Disable privacy mode")
def send(source, destination, token, amount, public):
    """Bridge tokens from the source chain."""
    request = BridgeRequest(
        source_chain=source,
        destination_chain=destination,
        source_token=token,
        amount=amount,
        is_private=not public,
    )
    run(_send(request))


async def _send(request: BridgeRequest) -> None:
    container = DIContainer()
    await container.initialize()
    session = None

    try:
        session = await container.get_connect_wallet().execute(request.source_chain)
        click.echo(f"Connected: {session.address}")

        async with container.database.session() as db_session:
            use_case = container.get_create_bridge_intent(db_session)
            result = await use_case.execute(request, session)

        _print_result(result)
    finally:
        if session is not None:
            await container.get_disconnect_wallet().execute(session)
        await container.shutdown()


def _print_result(result: BridgeResult) -> None:
    intent = result.intent
    click.echo("Bridge transaction initiated!")
    click.echo(f"Intent: {intent.id}")
    click.echo(f"Status: {intent.status.value}")
    click.echo(
        f"Amount: {intent.amount} {intent.source_token} -> {intent.destination_token}"
    )
    click.echo(f"Fee: {intent.fee_amount} {intent.source_token}")
    click.echo(f"Reference: {result.reference}")
    if result.simulated:
        click.echo("(simulated transfer, nothing was submitted on-chain)")
    if result.explorer_url:
        click.echo(f"Explorer: {result.explorer_url}")
    if intent.estimated_completion:
        click.echo(f"ETA: {intent.estimated_completion.isoformat(timespec='seconds')}")


@bridge.command()
@click.option("--address", default=None, help="Wallet address (default: connected wallet)")
@click.option("--chain", default=SOLANA, show_default=True, help="Wallet chain")
@click.option("--limit", default=10, show_default=True, type=int)
def history(address, chain, limit):
    """List recent bridge intents."""
    run(_history(address, chain, limit))


async def _history(address, chain: str, limit: int) -> None:
    container = DIContainer()
    await container.initialize()

    try:
        if not address:
            session = await container.get_connect_wallet().execute(chain)
            address = session.address
            await container.get_disconnect_wallet().execute(session)

        async with container.database.session() as db_session:
            intents = await container.get_list_bridge_intents(db_session).execute(
                address, limit=limit
            )
    finally:
        await container.shutdown()

    if not intents:
        click.echo("No transactions yet")
        return

    for intent in intents:
        click.echo(format_intent(intent))


def format_intent(intent: BridgeIntent) -> str:
    """One-line history row."""
    return (
        f"{intent.created_at:%Y-%m-%d %H:%M} | "
        f"{intent.source_chain} -> {intent.destination_chain} | "
        f"{intent.amount} {intent.source_token} | fee {intent.fee_amount} | "
        f"{intent.status.value} | {intent.source_tx_hash or '-'}"
    )


@cli.group()
def midnight():
    """Midnight wallet commands."""


@midnight.command()
def wallet():
    """Interactive Midnight wallet (address, send, history)."""
    run(_wallet())


async def _wallet() -> None:
    container = DIContainer()
    try:
        await run_wallet_menu(container)
    finally:
        await container.shutdown()


def main():
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
