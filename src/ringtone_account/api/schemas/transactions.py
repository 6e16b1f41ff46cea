"""Wallet ledger transaction schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from ringtone_account.api.schemas.common import UpstreamModel


class Transaction(UpstreamModel):
    """A ledger entry as returned by the platform. Read only."""

    id: str
    type: str
    amount: Decimal
    description: str | None = None
    created_at: datetime | None = None
