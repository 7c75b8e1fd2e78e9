"""
Unit tests for ChainCatalog and chain value objects.

Usage:
    pytest passerelle/tests/unit/domain/test_chain_catalog.py
"""

import pytest

from passerelle.domain.exceptions import UnsupportedChainError
from passerelle.domain.value_objects.chain import (
    MIDNIGHT,
    SOL,
    SOLANA,
    TDUST,
    ChainCatalog,
    ChainDescriptor,
    Token,
    default_catalog,
)


class TestChainCatalog:
    """Static chain and token lookups."""

    def test_default_chains(self):
        catalog = default_catalog()

        assert SOLANA in catalog
        assert MIDNIGHT in catalog
        assert "ethereum" not in catalog
        assert {chain.id for chain in catalog} == {SOLANA, MIDNIGHT}

    def test_get_unknown_chain_raises(self):
        with pytest.raises(UnsupportedChainError) as exc_info:
            default_catalog().get("ethereum")

        assert exc_info.value.message == "Unsupported chain: ethereum"
        assert exc_info.value.chain_id == "ethereum"

    def test_supports_token(self):
        catalog = default_catalog()

        assert catalog.supports_token(SOLANA, "SOL")
        assert catalog.supports_token(MIDNIGHT, "tDUST")
        assert not catalog.supports_token(SOLANA, "tDUST")
        assert not catalog.supports_token("ethereum", "ETH")

    @pytest.mark.parametrize(
        "destination, source_token, expected",
        [
            (MIDNIGHT, "SOL", "tDUST"),
            (SOLANA, "tDUST", "SOL"),
            ("other", "SOL", "SOL"),
        ],
    )
    def test_destination_token(self, destination, source_token, expected):
        assert default_catalog().destination_token(destination, source_token) == expected

    def test_native_token(self):
        solana = default_catalog().get(SOLANA)

        assert solana.native_token == SOL
        assert solana.get_token("SOL").decimals == 9
        assert solana.get_token("USDC") is None
        assert default_catalog().get(MIDNIGHT).native_token == TDUST

    def test_custom_catalog(self):
        usdc = Token(symbol="USDC", decimals=6)
        catalog = ChainCatalog(
            [ChainDescriptor(id="solana", display_name="Solana", supported_tokens=frozenset({SOL, usdc}))]
        )

        assert catalog.supports_token("solana", "USDC")
        assert MIDNIGHT not in catalog


class TestChainValueObjects:
    """Validation on construction."""

    def test_token_requires_symbol(self):
        with pytest.raises(ValueError, match="symbol"):
            Token(symbol="", decimals=9)

    def test_token_rejects_negative_decimals(self):
        with pytest.raises(ValueError, match="decimals"):
            Token(symbol="SOL", decimals=-1)

    def test_chain_requires_tokens(self):
        with pytest.raises(ValueError, match="at least one token"):
            ChainDescriptor(id="solana", display_name="Solana", supported_tokens=frozenset())

    def test_descriptors_are_immutable(self):
        chain = default_catalog().get(SOLANA)

        with pytest.raises(AttributeError):
            chain.display_name = "Other"
