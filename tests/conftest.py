"""Shared pytest fixtures and test configuration."""

from __future__ import annotations

import os
import sys
from typing import Any

import pytest
from fastapi.testclient import TestClient

# Ensure src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from ringtone_account.api.schemas.account import (  # noqa: E402
    ProfileUpdate,
    TopUpCheckout,
    UserProfile,
)
from ringtone_account.api.schemas.competitions import Competition  # noqa: E402
from ringtone_account.api.schemas.orders import OrderRecord  # noqa: E402
from ringtone_account.api.schemas.referrals import ReferralStats  # noqa: E402
from ringtone_account.api.schemas.tickets import Ticket  # noqa: E402
from ringtone_account.api.schemas.transactions import Transaction  # noqa: E402
from ringtone_account.clients.platform_api import PlatformAPIError  # noqa: E402

TEST_TOKEN = "test-access-token"


class FakePlatformClient:
    """In-memory stand-in for PlatformAPIClient.

    Collections are stored as raw camelCase payloads and validated on read,
    the same way the real client validates HTTP responses.
    """

    def __init__(self) -> None:
        self.transactions: list[dict[str, Any]] = []
        self.tickets: list[dict[str, Any]] = []
        self.competitions: list[dict[str, Any]] = []
        self.orders: list[dict[str, Any]] = []
        self.referral_code: str | None = None
        self.referral_stats: dict[str, Any] = {}
        self.user: dict[str, Any] = {"id": "user-1", "email": "user@example.com"}
        self.checkout_url: str | None = "https://pay.example.com/checkout/abc"
        self.calls: list[tuple[str, Any]] = []
        self.fail_with: PlatformAPIError | None = None
        self.closed = False

    def _check(self, token: str) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        if token != TEST_TOKEN:
            raise PlatformAPIError("Not signed in", status_code=401)

    def get_transactions(self, token: str) -> list[Transaction]:
        self._check(token)
        return [Transaction.model_validate(t) for t in self.transactions]

    def get_tickets(self, token: str) -> list[Ticket]:
        self._check(token)
        return [Ticket.model_validate(t) for t in self.tickets]

    def get_competitions(self, token: str) -> list[Competition]:
        self._check(token)
        return [Competition.model_validate(c) for c in self.competitions]

    def get_orders(self, token: str) -> list[OrderRecord]:
        self._check(token)
        return [OrderRecord.model_validate(o) for o in self.orders]

    def get_referral_code(self, token: str) -> str | None:
        self._check(token)
        return self.referral_code

    def get_referral_stats(self, token: str) -> ReferralStats:
        self._check(token)
        return ReferralStats.model_validate(self.referral_stats)

    def get_user(self, token: str) -> UserProfile:
        self._check(token)
        return UserProfile.model_validate(self.user)

    def update_user(self, token: str, update: ProfileUpdate) -> UserProfile:
        self._check(token)
        self.calls.append(("update_user", update.model_dump(by_alias=True, exclude_none=True)))
        self.user = {**self.user, **update.model_dump(by_alias=True, exclude_none=True)}
        return UserProfile.model_validate(self.user)

    def change_password(self, token: str, password: str) -> None:
        self._check(token)
        self.calls.append(("change_password", password))

    def logout(self, token: str) -> None:
        self._check(token)
        self.calls.append(("logout", None))

    def start_top_up_checkout(self, token: str, amount: float) -> TopUpCheckout:
        self._check(token)
        self.calls.append(("top_up", amount))
        return TopUpCheckout(redirect_url=self.checkout_url)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_platform() -> FakePlatformClient:
    """Provide an empty fake platform client."""
    return FakePlatformClient()


@pytest.fixture
def app(fake_platform: FakePlatformClient):  # type: ignore[no-untyped-def]
    """Create a FastAPI test app wired to the fake platform client."""
    from ringtone_account.core.config import Settings
    from ringtone_account.main import create_app

    settings = Settings(_env_file=None, app_env="testing", site_origin="https://ringtone.test")
    return create_app(settings=settings, platform_client=fake_platform)  # type: ignore[arg-type]


@pytest.fixture
def client(app):  # type: ignore[no-untyped-def]
    """Create a test client."""
    return TestClient(app)


@pytest.fixture
def user_headers() -> dict[str, str]:
    """Authorization headers accepted by the fake platform."""
    return {"Authorization": f"Bearer {TEST_TOKEN}"}
