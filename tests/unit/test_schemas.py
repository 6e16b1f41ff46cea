"""Tests for upstream payload schemas."""

from __future__ import annotations

from decimal import Decimal

from ringtone_account.api.schemas.account import ProfileUpdate, UserProfile
from ringtone_account.api.schemas.orders import OrderRecord
from ringtone_account.api.schemas.transactions import Transaction


class TestCamelCasePayloads:
    def test_transaction_from_platform_json(self):
        tx = Transaction.model_validate(
            {
                "id": 12,
                "type": "deposit",
                "amount": "10.00",
                "description": "Wallet top-up",
                "createdAt": "2026-01-05T10:00:00Z",
                "userId": "ignored",
            }
        )
        assert tx.id == "12"
        assert tx.amount == Decimal("10.00")
        assert tx.created_at is not None

    def test_order_record_without_progress(self):
        record = OrderRecord.model_validate(
            {"orders": {"id": "o1", "competitionId": "c1", "status": "completed"}}
        )
        assert record.competition is None
        assert record.remaining_plays is None
        assert record.tickets == []

    def test_user_defaults(self):
        user = UserProfile.model_validate({"id": "u1"})
        assert user.balance == Decimal("0")
        assert user.ringtone_points == 0

    def test_profile_update_dumps_only_set_fields(self):
        update = ProfileUpdate(last_name="Lovelace")
        assert update.model_dump(by_alias=True, exclude_none=True) == {"lastName": "Lovelace"}
