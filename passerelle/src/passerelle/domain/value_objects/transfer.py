"""
Transfer value objects - ephemeral data passed between build, sign and submit.
"""

import base64
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class BlockReference:
    """Recent block reference a transaction is anchored to."""

    hash: str
    valid_height: int


@dataclass(frozen=True)
class UnsignedTransfer:
    """
    Unsigned native transfer.

    Constructed once, consumed by exactly one signing call, then discarded.
    """

    chain_id: str
    token: str
    fee_payer: str
    to_address: str
    base_units: int
    block_reference: BlockReference
    instructions: tuple[Any, ...] = field(repr=False)
    serialized_bytes: bytes = field(repr=False)

    def to_base64(self) -> str:
        return base64.b64encode(self.serialized_bytes).decode("ascii")


@dataclass(frozen=True)
class Account:
    """Account exposed by a connected public-chain signer."""

    address: str
    chain: str


@dataclass(frozen=True)
class SubmissionReceipt:
    """
    Result of handing a transaction to a network.

    Attributes:
        tx_id: Transaction identifier assigned by the network
        height: Inclusion height, None while still pending
    """

    tx_id: str
    height: Optional[int] = None

    @property
    def height_display(self) -> str:
        return str(self.height) if self.height is not None else "pending"
