"""Loyalty points tab routes: /api/v1/account/points."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from ringtone_account.api.deps import get_account_service, get_bearer_token
from ringtone_account.services.account import AccountService

router = APIRouter(prefix="/api/v1/account/points", tags=["points"])


@router.get("")
def get_points(
    token: str = Depends(get_bearer_token),
    service: AccountService = Depends(get_account_service),
) -> dict[str, Any]:
    """Points balance, its cash value and the points history."""
    return service.points_view(token)
