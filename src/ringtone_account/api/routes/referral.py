"""Referral tab routes: /api/v1/account/referral."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query

from ringtone_account.api.deps import get_account_service, get_bearer_token
from ringtone_account.services.account import AccountService

router = APIRouter(prefix="/api/v1/account/referral", tags=["referral"])


@router.get("")
def get_referral(
    origin: str | None = Query(default=None, description="Origin for the share link"),
    token: str = Depends(get_bearer_token),
    service: AccountService = Depends(get_account_service),
) -> dict[str, Any]:
    """Referral link and referral stats.

    ``origin`` defaults to the configured site origin.
    """
    return service.referral_view(token, origin=origin)
