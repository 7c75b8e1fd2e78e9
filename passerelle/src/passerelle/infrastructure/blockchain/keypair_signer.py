"""
Local keypair signer for the public chain.

Stands in for a browser wallet: the keypair file produced by
solana-keygen signs the unsigned transfer, and the chain transport
submits it.
"""

import json
from pathlib import Path
from typing import Any, Optional

from solders.hash import Hash
from solders.keypair import Keypair
from solders.transaction import Transaction

from passerelle.domain.exceptions import SigningError, WalletNotDetectedError
from passerelle.domain.services.i_chain_transport import IChainTransport
from passerelle.domain.services.i_wallet_capability import (
    ICapabilityProvider,
    IPublicChainSigner,
)
from passerelle.domain.value_objects.chain import SOLANA
from passerelle.domain.value_objects.transfer import Account, UnsignedTransfer

WALLET_NAME = "Solana keypair"


def load_keypair(keypair_path: str) -> Keypair:
    """
    Load Solana keypair from JSON file.

    Args:
        keypair_path: Path to keypair JSON file (64-byte array)

    Returns:
        Solana Keypair object

    Raises:
        WalletNotDetectedError: If the file does not exist
        SigningError: If the file is not a valid keypair
    """
    path = Path(keypair_path).expanduser()

    if not path.exists():
        raise WalletNotDetectedError(WALLET_NAME)

    try:
        with open(path, "r") as f:
            secret_key = json.load(f)
        return Keypair.from_bytes(bytes(secret_key))
    except (ValueError, TypeError) as e:
        raise SigningError(f"Invalid keypair file {path}: {e}") from e


class KeypairSigner(IPublicChainSigner):
    """Public-chain signer backed by a local keypair."""

    chain_id = SOLANA

    def __init__(self, keypair_path: str, transport: IChainTransport, network: str):
        """
        Initialize signer.

        Args:
            keypair_path: Path to keypair JSON file
            transport: Transport used to submit signed transactions
            network: Network this signer signs for, e.g. "solana:devnet"
        """
        self.keypair_path = keypair_path
        self.transport = transport
        self.network = network
        self._keypair: Optional[Keypair] = None

    async def connect(self) -> Account:
        self._keypair = load_keypair(self.keypair_path)
        return Account(address=str(self._keypair.pubkey()), chain=self.network)

    async def disconnect(self) -> None:
        self._keypair = None

    async def sign_and_send(self, unsigned: UnsignedTransfer, network: str) -> Any:
        """
        Sign with the keypair and submit through the transport.

        Returns:
            Raw transport response (base58 signature string)

        Raises:
            SigningError: If not connected, on network mismatch, or if the
                keypair is not the transfer's fee payer
        """
        if self._keypair is None:
            raise SigningError("Wallet is not connected")

        if network != self.network:
            raise SigningError(
                f"Wallet is on {self.network}, cannot sign for {network}",
                details={"expected": self.network, "requested": network},
            )

        if str(self._keypair.pubkey()) != unsigned.fee_payer:
            raise SigningError(
                "Keypair does not match the transfer's fee payer",
                details={"fee_payer": unsigned.fee_payer},
            )

        transaction = Transaction.from_bytes(unsigned.serialized_bytes)
        transaction.sign([self._keypair], Hash.from_string(unsigned.block_reference.hash))

        return await self.transport.send_raw_transaction(bytes(transaction))


class KeypairCapabilityProvider(ICapabilityProvider):
    """Reports a KeypairSigner whenever the keypair file exists."""

    chain_id = SOLANA
    wallet_name = WALLET_NAME

    def __init__(self, keypair_path: str, transport: IChainTransport, network: str):
        self.keypair_path = keypair_path
        self.transport = transport
        self.network = network

    async def probe(self) -> Optional[KeypairSigner]:
        if not Path(self.keypair_path).expanduser().exists():
            return None
        return KeypairSigner(self.keypair_path, self.transport, self.network)
