"""
Privacy-chain value objects.

Wallet state snapshots and the opaque transaction payloads that move through
the skeleton -> balance -> prove -> submit pipeline. Payloads are serialized
by the remote wallet and never interpreted here.
"""

from dataclasses import dataclass, field
from typing import Optional

NATIVE_ASSET = "0" * 64


@dataclass(frozen=True)
class WalletState:
    """
    Snapshot of a privacy-chain wallet.

    Attributes:
        address: Shielded address of the wallet
        balances: Balance per asset id, in native base units
        synced: True once the wallet has caught up with the indexer
        source_gap: Blocks not yet fetched from the indexer
        apply_gap: Blocks fetched but not yet applied
    """

    address: str
    balances: dict[str, int] = field(default_factory=dict)
    synced: bool = False
    source_gap: Optional[int] = None
    apply_gap: Optional[int] = None

    @property
    def native_balance(self) -> int:
        return self.balances.get(NATIVE_ASSET, 0)


@dataclass(frozen=True)
class PaymentSkeleton:
    """Unbalanced transfer with a single output and no inputs."""

    recipient: str
    asset: str
    amount: int
    payload: str = field(repr=False)

    def __post_init__(self):
        if self.amount <= 0:
            raise ValueError("Payment amount must be positive")

        if not self.recipient:
            raise ValueError("Recipient address is required")


@dataclass(frozen=True)
class BalancedTransaction:
    """Transfer with funding inputs and change chosen by the wallet."""

    payload: str = field(repr=False)


@dataclass(frozen=True)
class ProvedTransaction:
    """Balanced transfer carrying its zero-knowledge proof."""

    payload: str = field(repr=False)


@dataclass(frozen=True)
class IndexedTransaction:
    """Transaction involving an address, as reported by the indexer."""

    tx_id: str
    block_height: int
    direction: str
    amount: int
