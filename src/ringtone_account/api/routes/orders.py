"""Orders tab routes: /api/v1/account/orders."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query

from ringtone_account.api.deps import get_account_service, get_bearer_token
from ringtone_account.services.account import AccountService

router = APIRouter(prefix="/api/v1/account/orders", tags=["orders"])


@router.get("")
def get_orders(
    page: int = Query(default=1),
    token: str = Depends(get_bearer_token),
    service: AccountService = Depends(get_account_service),
) -> dict[str, Any]:
    """In-progress games plus one page of past orders.

    Out-of-range pages are clamped rather than rejected.
    """
    return service.orders_view(token, page=page)
