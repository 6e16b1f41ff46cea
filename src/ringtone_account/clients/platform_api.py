"""HTTP client for the upstream competition platform API.

Every call is made on behalf of the signed-in user: the caller passes the
user's bearer token and the client forwards it unchanged.
"""

from __future__ import annotations

import logging
import time
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from ringtone_account.api.schemas.account import ProfileUpdate, TopUpCheckout, UserProfile
from ringtone_account.api.schemas.competitions import Competition
from ringtone_account.api.schemas.orders import OrderRecord
from ringtone_account.api.schemas.referrals import ReferralCode, ReferralStats
from ringtone_account.api.schemas.tickets import Ticket
from ringtone_account.api.schemas.transactions import Transaction
from ringtone_account.core.config import Settings, get_settings
from ringtone_account.core.context import get_correlation_id

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

_transactions_adapter = TypeAdapter(list[Transaction])
_tickets_adapter = TypeAdapter(list[Ticket])
_competitions_adapter = TypeAdapter(list[Competition])
_orders_adapter = TypeAdapter(list[OrderRecord])


class PlatformAPIError(Exception):
    """Upstream call failed, with the HTTP status to surface to the caller."""

    def __init__(self, detail: str, status_code: int = 502) -> None:
        self.detail = detail
        self.status_code = status_code
        super().__init__(detail)

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401


class PlatformAPIClient:
    """Thin synchronous wrapper over the platform's user and wallet endpoints."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self._base_url,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> PlatformAPIClient:
        settings = settings or get_settings()
        return cls(base_url=settings.platform_api_url, timeout=settings.platform_api_timeout)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> PlatformAPIClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # ── Transport ───────────────────────────────────────────────────

    def _headers(self, token: str) -> dict[str, str]:
        headers = {"Authorization": f"Bearer {token}", "Accept": "application/json"}
        correlation_id = get_correlation_id()
        if correlation_id:
            headers["X-Correlation-ID"] = correlation_id
        return headers

    def _request(
        self,
        method: str,
        path: str,
        token: str,
        json: dict[str, Any] | None = None,
    ) -> Any:
        fields: dict[str, Any] = {"upstream_method": method, "upstream_path": path}
        start = time.perf_counter()
        try:
            response = self._client.request(method, path, headers=self._headers(token), json=json)
        except httpx.HTTPError as exc:
            logger.error("Platform API %s %s failed: %s", method, path, exc, extra=fields)
            raise PlatformAPIError("Platform API unavailable") from exc

        fields["upstream_status"] = response.status_code
        fields["upstream_ms"] = round((time.perf_counter() - start) * 1000, 1)
        if response.status_code == 401:
            logger.info("Platform API rejected session on %s %s", method, path, extra=fields)
            raise PlatformAPIError("Not signed in", status_code=401)
        if response.is_error:
            logger.warning(
                "Platform API %s %s returned %d",
                method,
                path,
                response.status_code,
                extra=fields,
            )
            raise PlatformAPIError(
                _error_message(response),
                status_code=response.status_code if response.status_code < 500 else 502,
            )
        logger.debug("Platform API %s %s → %d", method, path, response.status_code, extra=fields)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise PlatformAPIError(f"Invalid JSON from {path}") from exc

    def _get_list(self, path: str, token: str, adapter: TypeAdapter[list[M]]) -> list[M]:
        data = self._request("GET", path, token)
        try:
            return adapter.validate_python(data or [])
        except ValidationError as exc:
            logger.error("Unexpected payload from %s: %s", path, exc)
            raise PlatformAPIError(f"Unexpected payload from {path}") from exc

    def _get_model(self, path: str, token: str, model: type[M]) -> M:
        return _validate_model(path, self._request("GET", path, token), model)

    # ── Collections ─────────────────────────────────────────────────

    def get_transactions(self, token: str) -> list[Transaction]:
        return self._get_list("/api/user/transactions", token, _transactions_adapter)

    def get_tickets(self, token: str) -> list[Ticket]:
        return self._get_list("/api/user/tickets", token, _tickets_adapter)

    def get_competitions(self, token: str) -> list[Competition]:
        return self._get_list("/api/competitions", token, _competitions_adapter)

    def get_orders(self, token: str) -> list[OrderRecord]:
        return self._get_list("/api/user/orders", token, _orders_adapter)

    # ── Scalars ─────────────────────────────────────────────────────

    def get_referral_code(self, token: str) -> str | None:
        code = self._get_model("/api/user/referral-code", token, ReferralCode).referral_code
        logger.debug("Loaded referral code", extra={"referral_code": code})
        return code

    def get_referral_stats(self, token: str) -> ReferralStats:
        return self._get_model("/api/user/referral-stats", token, ReferralStats)

    def get_user(self, token: str) -> UserProfile:
        return self._get_model("/api/auth/user", token, UserProfile)

    # ── Mutations ───────────────────────────────────────────────────

    def update_user(self, token: str, update: ProfileUpdate) -> UserProfile:
        payload = update.model_dump(by_alias=True, exclude_none=True)
        data = self._request("PUT", "/api/auth/user", token, json=payload)
        return _validate_model("/api/auth/user", data, UserProfile)

    def change_password(self, token: str, password: str) -> None:
        self._request("PUT", "/api/auth/user", token, json={"password": password})

    def logout(self, token: str) -> None:
        self._request("POST", "/api/auth/logout", token)

    def start_top_up_checkout(self, token: str, amount: float) -> TopUpCheckout:
        data = self._request("POST", "/api/wallet/topup-checkout", token, json={"amount": amount})
        return TopUpCheckout.model_validate(data or {})


def _validate_model(path: str, data: Any, model: type[M]) -> M:
    try:
        return model.model_validate(data or {})
    except ValidationError as exc:
        logger.error("Unexpected payload from %s: %s", path, exc)
        raise PlatformAPIError(f"Unexpected payload from {path}") from exc


def _error_message(response: httpx.Response) -> str:
    """Best-effort ``message`` field from an upstream error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"Upstream error {response.status_code}"
    if isinstance(body, dict):
        return str(body.get("message") or body.get("detail") or f"Upstream error {response.status_code}")
    return f"Upstream error {response.status_code}"
