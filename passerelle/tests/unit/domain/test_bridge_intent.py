"""
Unit tests for BridgeIntent entity.

Usage:
    pytest passerelle/tests/unit/domain/test_bridge_intent.py
"""

from dataclasses import FrozenInstanceError
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from passerelle.domain.entities.bridge_intent import BridgeIntent, IntentStatus
from helpers.factories import make_intent


class TestBridgeIntent:
    """Intent creation rules."""

    def test_pending_without_source_tx(self):
        intent = make_intent(source_tx_hash=None)

        assert intent.status == IntentStatus.PENDING
        assert intent.source_tx_hash is None
        assert intent.id is None

    def test_processing_with_source_tx(self):
        intent = make_intent(source_tx_hash="5sig")

        assert intent.status == IntentStatus.PROCESSING
        assert intent.source_tx_hash == "5sig"

    def test_fee_fixed_at_creation(self):
        intent = make_intent(amount="1.5")

        assert intent.fee_amount == Decimal("0.0045")

    def test_estimated_completion(self):
        now = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

        intent = make_intent(now=now, eta=timedelta(minutes=5))

        assert intent.created_at == now
        assert intent.updated_at == now
        assert intent.estimated_completion == now + timedelta(minutes=5)
        assert intent.completed_at is None
        assert intent.destination_tx_hash is None

    @pytest.mark.parametrize("amount", ["0", "-1"])
    def test_amount_must_be_positive(self, amount):
        with pytest.raises(ValueError, match="positive"):
            make_intent(amount=amount)

    def test_user_address_required(self):
        with pytest.raises(ValueError, match="User address"):
            make_intent(user_address="")

    def test_immutable(self):
        intent = make_intent(source_tx_hash="5sig")

        with pytest.raises(FrozenInstanceError):
            intent.source_tx_hash = "other"

    def test_with_id_returns_copy(self):
        intent = make_intent()
        intent_id = uuid4()

        saved = intent.with_id(intent_id)

        assert saved.id == intent_id
        assert intent.id is None
        assert saved.amount == intent.amount

    def test_to_dict(self):
        intent = make_intent(source_tx_hash="5sig").with_id(uuid4())

        data = intent.to_dict()

        assert data["status"] == "processing"
        assert data["amount"] == "1.5"
        assert data["fee_amount"] == "0.0045"
        assert data["source_tx_hash"] == "5sig"
        assert data["destination_token"] == "tDUST"
        assert data["completed_at"] is None

    def test_status_vocabulary(self):
        assert [status.value for status in IntentStatus] == [
            "pending",
            "processing",
            "completed",
            "failed",
        ]

    def test_direct_construction_validates(self):
        with pytest.raises(ValueError, match="negative"):
            BridgeIntent(
                user_address="addr",
                source_chain="solana",
                destination_chain="midnight",
                source_token="SOL",
                destination_token="tDUST",
                amount=Decimal("1"),
                fee_amount=Decimal("-0.1"),
            )
