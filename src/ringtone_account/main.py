"""FastAPI application factory."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ringtone_account.api.middleware import setup_middleware
from ringtone_account.clients.platform_api import PlatformAPIClient
from ringtone_account.core.config import Settings
from ringtone_account.core.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    platform_client: PlatformAPIClient | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    ``platform_client`` defaults to one built from settings; tests pass a
    fake.
    """
    if settings is None:
        settings = Settings()

    if not settings.is_testing:
        setup_logging(level=settings.log_level, log_format=settings.log_format)

    client = platform_client or PlatformAPIClient.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Starting account area API (env=%s, platform=%s)",
            settings.app_env,
            settings.platform_api_url,
        )
        yield
        logger.info("Shutting down account area API")
        close = getattr(app.state.platform_client, "close", None)
        if close is not None:
            close()

    application = FastAPI(
        title="Ringtone Account API",
        description="Customer account area: wallet, orders, entries, points and referrals",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.state.settings = settings
    application.state.platform_client = client

    setup_middleware(application)
    _register_routes(application)

    return application


def _register_routes(app: FastAPI) -> None:
    """Register all API route modules."""
    from ringtone_account.api.routes.entries import router as entries_router
    from ringtone_account.api.routes.health import router as health_router
    from ringtone_account.api.routes.orders import router as orders_router
    from ringtone_account.api.routes.points import router as points_router
    from ringtone_account.api.routes.profile import router as profile_router
    from ringtone_account.api.routes.referral import router as referral_router
    from ringtone_account.api.routes.wallet import router as wallet_router

    app.include_router(health_router, tags=["health"])
    app.include_router(wallet_router)
    app.include_router(orders_router)
    app.include_router(entries_router)
    app.include_router(points_router)
    app.include_router(referral_router)
    app.include_router(profile_router)


# Module-level app instance for uvicorn (uvicorn ringtone_account.main:app)
app = create_app()
