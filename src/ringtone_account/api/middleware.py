"""API middleware: CORS, security headers, correlation IDs, request logging,
and the problem-details error handlers."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from ringtone_account.clients.platform_api import PlatformAPIError
from ringtone_account.core.constants import LOGIN_URL
from ringtone_account.core.context import set_correlation_id
from ringtone_account.services.account import AccountError

logger = logging.getLogger(__name__)

SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}

HSTS_HEADER = "max-age=31536000; includeSubDomains"

ERROR_TITLES: dict[int, str] = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    422: "Unprocessable Entity",
    502: "Bad Gateway",
}


def setup_middleware(app: FastAPI) -> None:
    """Attach all middleware and error handlers to the FastAPI app."""
    settings = getattr(app.state, "settings", None)
    is_prod = settings.is_production if settings else False

    app.add_middleware(GZipMiddleware, minimum_size=500)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_get_cors_origins(settings),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def security_and_logging(  # type: ignore[no-untyped-def]
        request: Request, call_next
    ):
        correlation_id = request.headers.get("x-correlation-id", uuid.uuid4().hex[:12])
        set_correlation_id(correlation_id)

        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed = (time.perf_counter() - start) * 1000

        response.headers["X-Request-ID"] = correlation_id
        response.headers["X-Response-Time"] = f"{elapsed:.1f}ms"
        for header, value in SECURITY_HEADERS.items():
            response.headers[header] = value
        if is_prod:
            response.headers["Strict-Transport-Security"] = HSTS_HEADER

        fields: dict[str, Any] = {
            "http_method": request.method,
            "http_path": request.url.path,
            "http_status": response.status_code,
            "duration_ms": round(elapsed, 1),
        }
        if request.url.query:
            fields["http_query"] = "?" + request.url.query
        logger.info(
            "%s %s → %d (%.1fms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed,
            extra=fields,
        )
        return response

    @app.exception_handler(AccountError)
    async def _account_error(request: Request, exc: AccountError) -> JSONResponse:
        return rfc7807_error_response(
            status=exc.status_code,
            title=ERROR_TITLES.get(exc.status_code, "Error"),
            detail=exc.detail,
            instance=request.url.path,
        )

    @app.exception_handler(PlatformAPIError)
    async def _platform_error(request: Request, exc: PlatformAPIError) -> JSONResponse:
        extra = {"login_url": LOGIN_URL} if exc.is_unauthorized else None
        return rfc7807_error_response(
            status=exc.status_code,
            title=ERROR_TITLES.get(exc.status_code, "Error"),
            detail=exc.detail,
            instance=request.url.path,
            extra=extra,
        )


def _get_cors_origins(settings: Any) -> list[str]:
    """Resolve CORS origins from settings."""
    if settings is None:
        return ["*"]
    return list(settings.cors_origin_list)


def rfc7807_error_response(
    status: int,
    title: str,
    detail: str,
    type_uri: str = "about:blank",
    instance: str | None = None,
    extra: dict[str, Any] | None = None,
) -> JSONResponse:
    """Build an RFC 7807 Problem Details JSON response."""
    body: dict[str, Any] = {
        "type": type_uri,
        "title": title,
        "status": status,
        "detail": detail,
    }
    if instance:
        body["instance"] = instance
    if extra:
        body.update(extra)
    return JSONResponse(status_code=status, content=body)
