"""Referral programme schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from ringtone_account.api.schemas.common import UpstreamModel


class ReferredUser(UpstreamModel):
    """Summary of a user who registered with the current user's code."""

    id: str
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    created_at: datetime | None = None


class ReferralStats(UpstreamModel):
    total_referrals: int = 0
    total_earned: Decimal = Decimal("0")
    referrals: list[ReferredUser] = Field(default_factory=list)


class ReferralCode(UpstreamModel):
    referral_code: str | None = None
