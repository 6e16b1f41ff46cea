"""Wallet tab routes: /api/v1/account/wallet."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query

from ringtone_account.api.deps import get_account_service, get_bearer_token
from ringtone_account.api.schemas.account import TopUpRequest
from ringtone_account.core.constants import TRANSACTION_FILTER_ALL
from ringtone_account.services.account import AccountService

router = APIRouter(prefix="/api/v1/account/wallet", tags=["wallet"])


@router.get("")
def get_wallet(
    filter_type: str = Query(default=TRANSACTION_FILTER_ALL, alias="type"),
    token: str = Depends(get_bearer_token),
    service: AccountService = Depends(get_account_service),
) -> dict[str, Any]:
    """Balance and recent transactions, optionally filtered by type."""
    return service.wallet_view(token, filter_type=filter_type)


@router.post("/top-up")
def start_top_up(
    body: TopUpRequest,
    token: str = Depends(get_bearer_token),
    service: AccountService = Depends(get_account_service),
) -> dict[str, Any]:
    """Start a top-up checkout; the client follows ``redirect_url``."""
    return {"redirect_url": service.top_up(token, body.amount)}
