"""Health check routes: liveness and general health."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
def health_check(request: Request) -> dict[str, Any]:
    """Application health check endpoint."""
    settings = getattr(request.app.state, "settings", None)
    return {
        "status": "ok",
        "environment": settings.app_env if settings else "unknown",
        "platform_api": settings.platform_api_url if settings else None,
    }


@router.get("/health/live")
def liveness_probe() -> dict[str, Any]:
    """Liveness probe: the process is up and answering requests."""
    return {"status": "alive"}
