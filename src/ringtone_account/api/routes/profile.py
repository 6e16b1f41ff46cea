"""Account and address tab routes, logout, and tab lookup."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query

from ringtone_account.api.deps import get_account_service, get_bearer_token
from ringtone_account.api.schemas.account import AddressForm, PasswordChange, ProfileUpdate
from ringtone_account.services.account import AccountService
from ringtone_account.services.navigation import active_tab, tab_links

router = APIRouter(prefix="/api/v1/account", tags=["account"])


@router.get("/profile")
def get_profile(
    token: str = Depends(get_bearer_token),
    service: AccountService = Depends(get_account_service),
) -> dict[str, Any]:
    return service.account_view(token)


@router.put("/profile")
def update_profile(
    body: ProfileUpdate,
    token: str = Depends(get_bearer_token),
    service: AccountService = Depends(get_account_service),
) -> dict[str, Any]:
    return service.update_profile(token, body)


@router.put("/profile/password")
def change_password(
    body: PasswordChange,
    token: str = Depends(get_bearer_token),
    service: AccountService = Depends(get_account_service),
) -> dict[str, Any]:
    service.change_password(token, body)
    return {"message": "Password updated"}


@router.post("/logout")
def logout(
    token: str = Depends(get_bearer_token),
    service: AccountService = Depends(get_account_service),
) -> dict[str, Any]:
    service.logout(token)
    return {"message": "Logged out", "redirect_url": "/"}


@router.post("/address")
def save_address(
    body: AddressForm,
    _token: str = Depends(get_bearer_token),
    service: AccountService = Depends(get_account_service),
) -> dict[str, Any]:
    return service.save_address(body)


@router.get("/tabs")
def get_tabs(path: str = Query(default="/account")) -> dict[str, Any]:
    """Tab links and the tab matching the client's current path."""
    return {"active_tab": active_tab(path), "tabs": tab_links()}
