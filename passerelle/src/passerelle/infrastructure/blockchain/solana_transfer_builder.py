"""
Solana native transfer builder.

Builds an unsigned SystemProgram transfer of SOL. All validation happens
before the single blockhash read.
"""

from decimal import Decimal

from solders.hash import Hash
from solders.message import Message
from solders.pubkey import Pubkey
from solders.system_program import TransferParams, transfer
from solders.transaction import Transaction

from passerelle.domain.exceptions import (
    InvalidAddressError,
    UnsupportedChainError,
)
from passerelle.domain.services.i_chain_transport import IChainTransport
from passerelle.domain.services.i_transfer_builder import ITransferBuilder
from passerelle.domain.value_objects.amount import parse_amount, to_base_units
from passerelle.domain.value_objects.chain import SOL, SOLANA
from passerelle.domain.value_objects.transfer import UnsignedTransfer


def parse_pubkey(address: str) -> Pubkey:
    """
    Parse base58 Solana address.

    Raises:
        InvalidAddressError: If address is not a valid public key
    """
    try:
        return Pubkey.from_string(address)
    except (ValueError, TypeError) as e:
        raise InvalidAddressError(str(address), SOLANA) from e


class SolanaTransferBuilder(ITransferBuilder):
    """Unsigned SOL transfers, fee paid by the sender."""

    def __init__(self, transport: IChainTransport):
        """
        Initialize builder.

        Args:
            transport: Chain transport used for the blockhash read
        """
        self.transport = transport

    def supports(self, chain_id: str, token: str) -> bool:
        return chain_id == SOLANA and token == SOL.symbol

    async def build(
        self,
        chain_id: str,
        token: str,
        from_address: str,
        to_address: str,
        amount: Decimal,
    ) -> UnsignedTransfer:
        """Build unsigned SOL transfer (see ITransferBuilder.build)."""
        if not self.supports(chain_id, token):
            raise UnsupportedChainError(chain_id, token)

        lamports = to_base_units(parse_amount(amount), SOL.decimals)
        from_pubkey = parse_pubkey(from_address)
        to_pubkey = parse_pubkey(to_address)

        block_reference = await self.transport.get_latest_block_reference()

        instruction = transfer(
            TransferParams(
                from_pubkey=from_pubkey,
                to_pubkey=to_pubkey,
                lamports=lamports,
            )
        )
        message = Message.new_with_blockhash(
            [instruction],
            from_pubkey,
            Hash.from_string(block_reference.hash),
        )
        transaction = Transaction.new_unsigned(message)

        return UnsignedTransfer(
            chain_id=chain_id,
            token=token,
            fee_payer=str(from_pubkey),
            to_address=str(to_pubkey),
            base_units=lamports,
            block_reference=block_reference,
            instructions=(instruction,),
            serialized_bytes=bytes(transaction),
        )
