"""Dependency injection for FastAPI routes."""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException, Request

from ringtone_account.clients.platform_api import PlatformAPIClient
from ringtone_account.core.config import Settings
from ringtone_account.services.account import AccountService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_platform_client(request: Request) -> PlatformAPIClient:
    """The shared upstream client created by the app factory."""
    return request.app.state.platform_client


def get_bearer_token(
    authorization: str | None = Header(default=None),
) -> str:
    """Extract the user's bearer token for forwarding to the platform.

    The token is not decoded here; the platform is the authority on whether
    it is still valid.
    """
    if not authorization:
        raise HTTPException(
            status_code=401,
            detail="Missing Authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )

    parts = authorization.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
        raise HTTPException(
            status_code=401,
            detail="Invalid Authorization header format. Expected: Bearer <token>",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return parts[1].strip()


def get_account_service(
    client: PlatformAPIClient = Depends(get_platform_client),
    settings: Settings = Depends(get_app_settings),
) -> AccountService:
    return AccountService(
        client=client,
        site_origin=settings.site_origin,
        orders_per_page=settings.orders_per_page,
    )
