"""
Chain value objects - Immutable description of supported ledgers.
"""

from dataclasses import dataclass
from typing import Iterable

from passerelle.domain.exceptions import UnsupportedChainError

SOLANA = "solana"
MIDNIGHT = "midnight"


@dataclass(frozen=True)
class Token:
    """
    Value object representing a chain's token.

    Business rules:
    - Symbol is required
    - Decimals express the base-unit scale (SOL: 9 -> lamports)
    """

    symbol: str
    decimals: int

    def __post_init__(self):
        """Validate token on creation."""
        if not self.symbol:
            raise ValueError("Token symbol is required")

        if self.decimals < 0:
            raise ValueError("Token decimals cannot be negative")


@dataclass(frozen=True)
class ChainDescriptor:
    """Static description of a ledger and the tokens it carries."""

    id: str
    display_name: str
    supported_tokens: frozenset[Token]

    def __post_init__(self):
        """Validate chain descriptor on creation."""
        if not self.id:
            raise ValueError("Chain id is required")

        if not self.supported_tokens:
            raise ValueError(f"Chain {self.id} must support at least one token")

    @property
    def native_token(self) -> Token:
        """Token listed first for the chain (sorted by symbol)."""
        return sorted(self.supported_tokens, key=lambda token: token.symbol)[0]

    def get_token(self, symbol: str) -> Token | None:
        for token in self.supported_tokens:
            if token.symbol == symbol:
                return token
        return None


class ChainCatalog:
    """
    Catalog of chains known to the bridge.

    Loaded once at process start and never mutated afterwards.
    """

    def __init__(self, chains: Iterable[ChainDescriptor]):
        self._chains = {chain.id: chain for chain in chains}

    def __contains__(self, chain_id: str) -> bool:
        return chain_id in self._chains

    def __iter__(self):
        return iter(self._chains.values())

    def get(self, chain_id: str) -> ChainDescriptor:
        """
        Get chain descriptor by id.

        Raises:
            UnsupportedChainError: If the chain is unknown
        """
        chain = self._chains.get(chain_id)
        if chain is None:
            raise UnsupportedChainError(chain_id)
        return chain

    def supports_token(self, chain_id: str, symbol: str) -> bool:
        chain = self._chains.get(chain_id)
        return chain is not None and chain.get_token(symbol) is not None

    def destination_token(self, destination_chain: str, source_token: str) -> str:
        """
        Resolve the token received on the destination chain.

        Midnight receives tDUST and Solana receives SOL; any other
        destination keeps the source token.
        """
        if destination_chain == MIDNIGHT:
            return "tDUST"
        if destination_chain == SOLANA:
            return "SOL"
        return source_token


SOL = Token(symbol="SOL", decimals=9)
TDUST = Token(symbol="tDUST", decimals=6)

DEFAULT_CHAINS = (
    ChainDescriptor(id=SOLANA, display_name="Solana", supported_tokens=frozenset({SOL})),
    ChainDescriptor(
        id=MIDNIGHT, display_name="Midnight", supported_tokens=frozenset({TDUST})
    ),
)


def default_catalog() -> ChainCatalog:
    """Build the catalog of the two bridged ledgers."""
    return ChainCatalog(DEFAULT_CHAINS)
