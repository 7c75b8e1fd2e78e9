"""
Midnight wallet client.

Seeded wallet hosted by the wallet bridge. State, skeleton building,
balancing and submission are remote calls; transaction payloads are
opaque serialized strings.
"""

import asyncio
import re
from typing import Any, AsyncIterator, Optional

from passerelle.domain.exceptions import PreconditionError
from passerelle.domain.services.i_privacy_wallet import IPrivacyWallet
from passerelle.domain.value_objects.privacy import (
    BalancedTransaction,
    PaymentSkeleton,
    ProvedTransaction,
    WalletState,
)
from passerelle.domain.value_objects.transfer import SubmissionReceipt
from passerelle.infrastructure.blockchain.wallet_bridge_client import (
    WalletBridgeClient,
)

SEED_PATTERN = re.compile(r"^[0-9a-fA-F]{64}$")
NETWORK_ID = "TestNet"


def parse_wallet_state(raw: dict) -> WalletState:
    """Map the bridge's state document to a WalletState."""
    progress = raw.get("syncProgress") or {}
    lag = progress.get("lag") or {}

    return WalletState(
        address=raw.get("address", ""),
        balances={
            asset: int(amount) for asset, amount in (raw.get("balances") or {}).items()
        },
        synced=progress.get("synced") is True,
        source_gap=_optional_int(lag.get("sourceGap")),
        apply_gap=_optional_int(lag.get("applyGap")),
    )


def parse_submission(raw: Any) -> SubmissionReceipt:
    """
    Extract tx id and inclusion height from a submission reply.

    Tx id: ``public.txId``, then ``txId``, then the reply itself when it
    is a plain string. Height: ``public.blockHeight``, then
    ``blockHeight``, else pending.
    """
    if isinstance(raw, dict):
        public = raw.get("public") or {}
        tx_id = public.get("txId") or raw.get("txId")
        height = public.get("blockHeight")
        if height is None:
            height = raw.get("blockHeight")
        return SubmissionReceipt(
            tx_id=str(tx_id) if tx_id else "(unknown)",
            height=_optional_int(height),
        )

    if raw is None or raw == "":
        return SubmissionReceipt(tx_id="(unknown)")

    return SubmissionReceipt(tx_id=str(raw))


def _optional_int(value: Any) -> Optional[int]:
    return int(value) if value is not None else None


class MidnightWalletClient(IPrivacyWallet):
    """IPrivacyWallet over the wallet bridge HTTP API."""

    def __init__(self, bridge: WalletBridgeClient, poll_interval: float = 2.0):
        """
        Initialize wallet client.

        Args:
            bridge: Wallet bridge client
            poll_interval: Seconds between state polls in state_stream
        """
        self.bridge = bridge
        self.poll_interval = poll_interval
        self._closed = False

    @classmethod
    async def build_from_seed(
        cls,
        bridge: WalletBridgeClient,
        seed: str,
        indexer_url: str,
        indexer_ws_url: str,
        proof_server_url: str,
        node_url: str,
        poll_interval: float = 2.0,
    ) -> "MidnightWalletClient":
        """
        Build and start a wallet from a hex seed.

        Raises:
            PreconditionError: If seed is not 64 hex characters
            NetworkError: If the wallet bridge fails
        """
        seed = seed.strip()
        if not SEED_PATTERN.match(seed):
            raise PreconditionError(
                "Wallet seed must be 64 hex characters",
                code="INVALID_SEED",
            )

        await bridge.call_bridge(
            "/wallet/build",
            method="POST",
            data={
                "seed": seed,
                "indexer": indexer_url,
                "indexerWS": indexer_ws_url,
                "proofServer": proof_server_url,
                "node": node_url,
                "networkId": NETWORK_ID,
            },
        )
        return cls(bridge, poll_interval=poll_interval)

    async def state(self) -> WalletState:
        raw = await self.bridge.call_bridge("/wallet/state", method="GET")
        return parse_wallet_state(raw or {})

    async def state_stream(self) -> AsyncIterator[WalletState]:
        while not self._closed:
            yield await self.state()
            await asyncio.sleep(self.poll_interval)

    async def build_skeleton(
        self, recipient: str, asset: str, amount: int
    ) -> PaymentSkeleton:
        raw = await self.bridge.call_bridge(
            "/transaction/skeleton",
            method="POST",
            data={"address": recipient, "asset": asset, "amount": str(amount)},
        )
        return PaymentSkeleton(
            recipient=recipient,
            asset=asset,
            amount=amount,
            payload=raw["transaction"],
        )

    async def balance(self, skeleton: PaymentSkeleton) -> BalancedTransaction:
        raw = await self.bridge.call_bridge(
            "/transaction/balance",
            method="POST",
            data={"transaction": skeleton.payload, "newCoins": []},
        )
        return BalancedTransaction(payload=raw["transaction"])

    async def submit(self, proved: ProvedTransaction) -> SubmissionReceipt:
        raw = await self.bridge.call_bridge(
            "/transaction/submit",
            method="POST",
            data={"transaction": proved.payload},
        )
        return parse_submission(raw)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self.bridge.call_bridge("/wallet/close", method="POST")
