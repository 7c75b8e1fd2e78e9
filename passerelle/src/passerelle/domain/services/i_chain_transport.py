"""
Chain transport interface.
"""

from abc import ABC, abstractmethod
from typing import Any

from passerelle.domain.value_objects.transfer import BlockReference, SubmissionReceipt


class IChainTransport(ABC):
    """
    Read/submit access to a chain's RPC node.

    Timeouts are those of the underlying HTTP transport; nothing is retried.
    """

    @abstractmethod
    async def get_latest_block_reference(self) -> BlockReference:
        """
        Fetch the block reference new transactions are anchored to.

        Raises:
            NetworkError: If the node cannot be reached
            RPCError: If the node returns an error
        """

    @abstractmethod
    async def send_raw_transaction(self, serialized_tx: bytes) -> Any:
        """
        Submit signed transaction bytes.

        Returns:
            Node response, untouched
        """

    @abstractmethod
    async def submit(self, serialized_tx: bytes) -> SubmissionReceipt:
        """
        Submit signed transaction bytes.

        Returns:
            Receipt with transaction id and inclusion height (None = pending)
        """

    @abstractmethod
    async def close(self) -> None:
        """Close underlying HTTP resources."""
