"""
Transfer builder interface.
"""

from abc import ABC, abstractmethod
from decimal import Decimal

from passerelle.domain.value_objects.transfer import UnsignedTransfer


class ITransferBuilder(ABC):
    """Builds unsigned native transfers for the chains it supports."""

    @abstractmethod
    def supports(self, chain_id: str, token: str) -> bool:
        """Check whether a native transfer can be built for the pair."""

    @abstractmethod
    async def build(
        self,
        chain_id: str,
        token: str,
        from_address: str,
        to_address: str,
        amount: Decimal,
    ) -> UnsignedTransfer:
        """
        Build unsigned native transfer.

        Performs a single read-only call for the latest block reference,
        after all local validation has passed.

        Args:
            chain_id: Source chain
            token: Token to move
            from_address: Fee payer and sender
            to_address: Recipient
            amount: Amount in token units

        Returns:
            UnsignedTransfer ready for one signing call

        Raises:
            UnsupportedChainError: If the pair cannot be built (no network call)
            InvalidAmountError: If amount is not representable in base units
            InvalidAddressError: If an address cannot be parsed
            NetworkError: If the block reference cannot be fetched
        """
