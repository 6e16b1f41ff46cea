"""Tests for the platform API client against a mocked httpx transport."""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from typing import Any

import httpx
import pytest

from ringtone_account.api.schemas.account import ProfileUpdate
from ringtone_account.clients.platform_api import PlatformAPIClient, PlatformAPIError
from ringtone_account.core.config import Settings
from ringtone_account.core.context import set_correlation_id
from ringtone_account.core.logging import REDACTED, record_fields
from tests.factories.data_factories import (
    build_competition,
    build_order_record,
    build_ticket,
    build_transaction,
    build_user,
)


class Recorder:
    """Route table for httpx.MockTransport that remembers each request."""

    def __init__(self, routes: dict[tuple[str, str], httpx.Response]) -> None:
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json={"message": "Not found"})
        return self.routes[key]


def _client(routes: dict[tuple[str, str], httpx.Response]) -> tuple[PlatformAPIClient, Recorder]:
    recorder = Recorder(routes)
    client = PlatformAPIClient(
        base_url="https://platform.test/",
        transport=httpx.MockTransport(recorder),
    )
    return client, recorder


def _ok(payload: Any) -> httpx.Response:
    return httpx.Response(200, json=payload)


class TestCollections:
    def test_transactions_parsed(self):
        client, recorder = _client(
            {("GET", "/api/user/transactions"): _ok([build_transaction(id="t1", amount="9.99")])}
        )
        transactions = client.get_transactions("tok")

        assert transactions[0].id == "t1"
        assert transactions[0].amount == Decimal("9.99")
        assert recorder.requests[0].headers["Authorization"] == "Bearer tok"

    def test_tickets_and_competitions(self):
        client, _ = _client(
            {
                ("GET", "/api/user/tickets"): _ok([build_ticket("c1", id=7, ticketNumber=1234)]),
                ("GET", "/api/competitions"): _ok([build_competition(id="c1")]),
            }
        )
        tickets = client.get_tickets("tok")
        competitions = client.get_competitions("tok")

        assert tickets[0].id == "7"
        assert tickets[0].ticket_number == "1234"
        assert tickets[0].competition_id == "c1"
        assert competitions[0].id == "c1"

    def test_orders_nested_payload(self):
        payload = build_order_record("scratch", "completed", remaining_plays=3, id="o1")
        client, _ = _client({("GET", "/api/user/orders"): _ok([payload])})
        orders = client.get_orders("tok")

        assert orders[0].order.id == "o1"
        assert orders[0].competition is not None
        assert orders[0].competition.type == "scratch"
        assert orders[0].remaining_plays == 3

    def test_null_collection_is_empty(self):
        client, _ = _client({("GET", "/api/user/tickets"): httpx.Response(200, content=b"")})
        assert client.get_tickets("tok") == []

    def test_malformed_payload(self):
        client, _ = _client({("GET", "/api/user/tickets"): _ok([{"unexpected": True}])})
        with pytest.raises(PlatformAPIError, match="Unexpected payload"):
            client.get_tickets("tok")


class TestScalars:
    def test_referral_code(self):
        client, _ = _client({("GET", "/api/user/referral-code"): _ok({"referralCode": "ABC"})})
        assert client.get_referral_code("tok") == "ABC"

    def test_referral_stats(self):
        client, _ = _client(
            {
                ("GET", "/api/user/referral-stats"): _ok(
                    {"totalReferrals": 2, "totalEarned": "10.00", "referrals": []}
                )
            }
        )
        stats = client.get_referral_stats("tok")
        assert stats.total_referrals == 2
        assert stats.total_earned == Decimal("10.00")

    def test_user(self):
        client, _ = _client({("GET", "/api/auth/user"): _ok(build_user(id="u1", ringtonePoints=300))})
        user = client.get_user("tok")
        assert user.id == "u1"
        assert user.ringtone_points == 300


class TestMutations:
    def test_update_user_sends_camel_case(self):
        client, recorder = _client({("PUT", "/api/auth/user"): _ok(build_user(firstName="Ada"))})
        user = client.update_user("tok", ProfileUpdate(first_name="Ada"))

        assert user.first_name == "Ada"
        assert json.loads(recorder.requests[0].content) == {"firstName": "Ada"}

    def test_top_up_checkout(self):
        client, recorder = _client(
            {("POST", "/api/wallet/topup-checkout"): _ok({"redirectUrl": "https://pay.test/x"})}
        )
        checkout = client.start_top_up_checkout("tok", 10.0)

        assert checkout.redirect_url == "https://pay.test/x"
        assert json.loads(recorder.requests[0].content) == {"amount": 10.0}

    def test_logout_without_body(self):
        client, recorder = _client({("POST", "/api/auth/logout"): httpx.Response(204)})
        client.logout("tok")
        assert recorder.requests[0].url.path == "/api/auth/logout"


class TestErrors:
    def test_unauthorized(self):
        client, _ = _client({("GET", "/api/auth/user"): httpx.Response(401)})
        with pytest.raises(PlatformAPIError) as exc_info:
            client.get_user("tok")
        assert exc_info.value.status_code == 401
        assert exc_info.value.is_unauthorized

    def test_client_error_message_passed_through(self):
        client, _ = _client(
            {("PUT", "/api/auth/user"): httpx.Response(400, json={"message": "Email taken"})}
        )
        with pytest.raises(PlatformAPIError, match="Email taken") as exc_info:
            client.update_user("tok", ProfileUpdate(email="a@b.test"))
        assert exc_info.value.status_code == 400

    def test_server_error_becomes_bad_gateway(self):
        client, _ = _client({("GET", "/api/user/orders"): httpx.Response(500, text="boom")})
        with pytest.raises(PlatformAPIError) as exc_info:
            client.get_orders("tok")
        assert exc_info.value.status_code == 502

    def test_transport_failure(self):
        def _raise(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        client = PlatformAPIClient("https://platform.test", transport=httpx.MockTransport(_raise))
        with pytest.raises(PlatformAPIError, match="unavailable") as exc_info:
            client.get_transactions("tok")
        assert exc_info.value.status_code == 502

    @pytest.mark.parametrize(
        "response",
        [httpx.Response(200, content=b""), httpx.Response(200, json={"unexpected": True})],
    )
    def test_update_user_bad_body_is_bad_gateway(self, response: httpx.Response):
        client, _ = _client({("PUT", "/api/auth/user"): response})
        with pytest.raises(PlatformAPIError, match="Unexpected payload") as exc_info:
            client.update_user("tok", ProfileUpdate(first_name="Ada"))
        assert exc_info.value.status_code == 502


class TestClientSetup:
    def test_correlation_id_forwarded(self):
        client, recorder = _client({("GET", "/api/competitions"): _ok([])})
        set_correlation_id("corr-123")
        try:
            client.get_competitions("tok")
        finally:
            set_correlation_id("")
        assert recorder.requests[0].headers["X-Correlation-ID"] == "corr-123"

    def test_from_settings(self):
        settings = Settings(_env_file=None, platform_api_url="https://platform.test")
        with PlatformAPIClient.from_settings(settings) as client:
            assert client._base_url == "https://platform.test"


class TestCallLogging:
    def test_success_fields(self, caplog: pytest.LogCaptureFixture):
        client, _ = _client({("GET", "/api/user/orders"): _ok([])})
        with caplog.at_level(logging.DEBUG, logger="ringtone_account.clients.platform_api"):
            client.get_orders("secret-token")

        record = caplog.records[-1]
        assert record.upstream_method == "GET"
        assert record.upstream_path == "/api/user/orders"
        assert record.upstream_status == 200
        assert record.upstream_ms >= 0
        assert "secret-token" not in caplog.text

    def test_server_error_fields(self, caplog: pytest.LogCaptureFixture):
        client, _ = _client({("GET", "/api/user/tickets"): httpx.Response(503)})
        with caplog.at_level(logging.WARNING, logger="ringtone_account.clients.platform_api"):
            with pytest.raises(PlatformAPIError):
                client.get_tickets("tok")

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.upstream_status == 503

    def test_referral_code_field_is_redacted(self, caplog: pytest.LogCaptureFixture):
        client, _ = _client({("GET", "/api/user/referral-code"): _ok({"referralCode": "RING42"})})
        with caplog.at_level(logging.DEBUG, logger="ringtone_account.clients.platform_api"):
            client.get_referral_code("tok")

        record = next(r for r in caplog.records if hasattr(r, "referral_code"))
        assert record.referral_code == "RING42"
        assert record_fields(record)["referral_code"] == REDACTED
