"""
Tests for the outbound provider adapters: MOMO, exchange rates, Mailgun.

All HTTP traffic goes through httpx.MockTransport handlers.
"""

import base64
import json
from decimal import Decimal

import fakeredis
import httpx
import pytest

from hoardrun.domain.payments.errors import (
    MomoError,
    MomoErrorCode,
    UnsupportedCurrencyError,
)
from hoardrun.infrastructure.identity.email_sender import (
    LoggingEmailSender,
    MailgunEmailSender,
)
from hoardrun.infrastructure.payments.exchange_rates import HttpExchangeRateProvider
from hoardrun.infrastructure.payments.momo_client import MomoClient
from hoardrun.shared.cache import RedisCache

BASE_URL = "https://momo.test"
API_USER = "0d2a3b4c-1111-2222-3333-444455556666"


class FakeMomo:
    """Minimal MOMO sandbox keyed by request path."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.token_calls = 0
        self.routes: dict[tuple[str, str], httpx.Response] = {}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path == "/collection/token/":
            self.token_calls += 1
            return httpx.Response(
                200, json={"access_token": f"token-{self.token_calls}", "expires_in": 3600}
            )
        if path == f"/v1_0/apiuser/{API_USER}/apikey":
            return httpx.Response(201, json={"apiKey": "generated-key"})
        for (method, prefix), response in self.routes.items():
            if request.method == method and path.startswith(prefix):
                return response
        return httpx.Response(404)


def _momo(fake: FakeMomo, api_key="secret-key", clock=None) -> MomoClient:
    kwargs = {"clock": clock} if clock else {}
    return MomoClient(
        base_url=BASE_URL,
        primary_key="primary",
        user_id=API_USER,
        api_key=api_key,
        callback_url="https://hoardrun.test/api/v1/payments/momo/callback",
        client=httpx.Client(transport=httpx.MockTransport(fake)),
        **kwargs,
    )


class TestMomoClient:
    def test_request_to_pay_sends_reference_and_body(self) -> None:
        fake = FakeMomo()
        fake.routes[("POST", "/collection/v1_0/requesttopay")] = httpx.Response(202)

        reference_id = _momo(fake).request_to_pay(
            Decimal("20.00"), "EUR", "233241234567", "Rent", external_id="tx-1"
        )

        request = fake.requests[-1]
        assert request.headers["X-Reference-Id"] == reference_id
        assert request.headers["Authorization"] == "Bearer token-1"
        assert request.headers["X-Target-Environment"] == "sandbox"
        body = json.loads(request.content)
        assert body["amount"] == "20.00"
        assert body["externalId"] == "tx-1"
        assert body["payer"] == {"partyIdType": "MSISDN", "partyId": "233241234567"}
        assert body["callbackUrl"].endswith("/payments/momo/callback")

    def test_token_uses_basic_auth_and_is_cached(self) -> None:
        fake = FakeMomo()
        fake.routes[("GET", "/collection/v1_0/account/balance")] = httpx.Response(
            200, json={"availableBalance": "1500", "currency": "EUR"}
        )
        client = _momo(fake)

        client.get_account_balance()
        balance = client.get_account_balance()

        assert balance.amount == Decimal("1500")
        assert fake.token_calls == 1
        token_request = fake.requests[0]
        expected = base64.b64encode(f"{API_USER}:secret-key".encode()).decode()
        assert token_request.headers["Authorization"] == f"Basic {expected}"

    def test_expired_token_is_refreshed(self) -> None:
        now = [0.0]
        fake = FakeMomo()
        fake.routes[("GET", "/collection/v1_0/account/balance")] = httpx.Response(
            200, json={"availableBalance": "1", "currency": "EUR"}
        )
        client = _momo(fake, clock=lambda: now[0])

        client.get_account_balance()
        now[0] = 3600.0
        client.get_account_balance()

        assert fake.token_calls == 2

    def test_api_key_generated_when_missing(self) -> None:
        fake = FakeMomo()
        fake.routes[("GET", "/collection/v1_0/account/balance")] = httpx.Response(
            200, json={"availableBalance": "1", "currency": "EUR"}
        )

        _momo(fake, api_key="").get_account_balance()

        assert fake.requests[0].url.path == f"/v1_0/apiuser/{API_USER}/apikey"
        expected = base64.b64encode(f"{API_USER}:generated-key".encode()).decode()
        assert fake.requests[1].headers["Authorization"] == f"Basic {expected}"

    def test_provider_error_keeps_status(self) -> None:
        fake = FakeMomo()
        fake.routes[("POST", "/collection/v1_0/requesttopay")] = httpx.Response(409)

        with pytest.raises(MomoError) as info:
            _momo(fake).request_to_pay(Decimal("1"), "EUR", "233241234567", "x")

        assert info.value.code is MomoErrorCode.PAYMENT_REQUEST_FAILED
        assert info.value.status_code == 409

    def test_token_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401)

        client = MomoClient(
            base_url=BASE_URL,
            primary_key="primary",
            user_id=API_USER,
            api_key="bad",
            client=httpx.Client(transport=httpx.MockTransport(handler)),
        )
        with pytest.raises(MomoError) as info:
            client.get_account_balance()
        assert info.value.code is MomoErrorCode.AUTH_TOKEN_FAILED

    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(200, content=b"<html>gateway</html>"),
            httpx.Response(200, json=["token-1"]),
            httpx.Response(200, json={"token_type": "access_token"}),
        ],
    )
    def test_malformed_token_body(self, response) -> None:
        client = MomoClient(
            base_url=BASE_URL,
            primary_key="primary",
            user_id=API_USER,
            api_key="secret-key",
            client=httpx.Client(transport=httpx.MockTransport(lambda request: response)),
        )
        with pytest.raises(MomoError) as info:
            client.get_account_balance()
        assert info.value.code is MomoErrorCode.AUTH_TOKEN_FAILED
        assert info.value.status_code == 502

    @pytest.mark.parametrize(
        "response",
        [httpx.Response(201, content=b"created"), httpx.Response(201, json={})],
    )
    def test_malformed_api_key_body(self, response) -> None:
        client = MomoClient(
            base_url=BASE_URL,
            primary_key="primary",
            user_id=API_USER,
            api_key="",
            client=httpx.Client(transport=httpx.MockTransport(lambda request: response)),
        )
        with pytest.raises(MomoError) as info:
            client.get_account_balance()
        assert info.value.code is MomoErrorCode.API_KEY_GENERATION_FAILED
        assert info.value.status_code == 502

    def test_malformed_status_body(self) -> None:
        fake = FakeMomo()
        fake.routes[("GET", "/collection/v1_0/requesttopay/")] = httpx.Response(
            200, content=b"not json"
        )
        with pytest.raises(MomoError) as info:
            _momo(fake).get_transaction_status("ref-1")
        assert info.value.code is MomoErrorCode.STATUS_CHECK_FAILED
        assert info.value.status_code == 502

    def test_status_with_structured_reason(self) -> None:
        fake = FakeMomo()
        fake.routes[("GET", "/collection/v1_0/requesttopay/")] = httpx.Response(
            200,
            json={
                "status": "FAILED",
                "reason": {"code": "PAYER_NOT_FOUND", "message": "Payer not found"},
            },
        )

        report = _momo(fake).get_transaction_status("ref-1")

        assert report.status == "FAILED"
        assert report.reason == "Payer not found"
        assert not report.is_successful

    @pytest.mark.parametrize("status_code,expected", [(200, True), (404, False)])
    def test_validate_account_holder(self, status_code, expected) -> None:
        fake = FakeMomo()
        fake.routes[("GET", "/collection/v1_0/accountholder/")] = httpx.Response(status_code)
        assert _momo(fake).validate_account_holder("233241234567") is expected

    def test_delivery_notification_body(self) -> None:
        fake = FakeMomo()
        fake.routes[("POST", "/collection/v1_0/requesttopay/")] = httpx.Response(200)

        _momo(fake).send_delivery_notification("ref-1", "Transfer completed successfully")

        request = fake.requests[-1]
        assert request.url.path.endswith("/ref-1/deliverynotification")
        assert json.loads(request.content)["notificationMessage"] == (
            "Transfer completed successfully"
        )


def _rates(handler, **kwargs) -> HttpExchangeRateProvider:
    return HttpExchangeRateProvider(
        api_url="https://rates.test/latest",
        client=httpx.Client(transport=httpx.MockTransport(handler)),
        **kwargs,
    )


class TestHttpExchangeRateProvider:
    def test_same_currency_needs_no_lookup(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        assert _rates(handler).convert(Decimal("10"), "eur", "EUR") == Decimal("10")

    def test_unsupported_currency(self) -> None:
        with pytest.raises(UnsupportedCurrencyError):
            _rates(lambda request: httpx.Response(200)).convert(Decimal("10"), "USD", "EUR")

    def test_conversion_uses_cached_rate(self) -> None:
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            assert request.url.params["base"] == "GHS"
            assert request.url.params["symbols"] == "EUR"
            return httpx.Response(200, json={"rates": {"EUR": 0.0612}})

        server = fakeredis.FakeRedis(server=fakeredis.FakeServer(), decode_responses=True)
        provider = _rates(handler, cache=RedisCache(server), ttl_seconds=600)
        assert provider.convert(Decimal("100"), "GHS", "EUR") == Decimal("6.12")
        assert provider.convert(Decimal("50"), "GHS", "EUR") == Decimal("3.06")
        assert len(calls) == 1
        assert server.get("fx:GHS:EUR") == '"0.0612"'
        assert 0 < server.ttl("fx:GHS:EUR") <= 600

    def test_without_cache_every_conversion_fetches(self) -> None:
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json={"rates": {"GHS": 16.34}})

        provider = _rates(handler)
        provider.convert(Decimal("1"), "EUR", "GHS")
        provider.convert(Decimal("2"), "EUR", "GHS")
        assert len(calls) == 2

    @pytest.mark.parametrize(
        "response",
        [httpx.Response(500), httpx.Response(200, json={"rates": {}})],
    )
    def test_fetch_failure(self, response) -> None:
        with pytest.raises(MomoError) as info:
            _rates(lambda request: response).convert(Decimal("1"), "GHS", "EUR")
        assert info.value.code is MomoErrorCode.EXCHANGE_RATE_FAILED
        assert info.value.status_code == 502


class TestMailgunEmailSender:
    def test_unconfigured_uses_fallback(self) -> None:
        fallback = LoggingEmailSender()
        sender = MailgunEmailSender(api_key="", domain="", sender="x@y", fallback=fallback)

        message_id = sender.send("ama@example.com", "Hi", "<p>Hi</p>")

        assert message_id.startswith("dev-")
        assert fallback.outbox[0]["to"] == "ama@example.com"

    def test_posts_to_messages_endpoint(self) -> None:
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"id": "<msg@mg.test>", "message": "Queued"})

        sender = MailgunEmailSender(
            api_key="key-123",
            domain="mg.test",
            sender="Hoardrun <noreply@mg.test>",
            client=httpx.Client(transport=httpx.MockTransport(handler)),
        )

        assert sender.send("ama@example.com", "Hi", "<p>Hi</p>", "Hi") == "<msg@mg.test>"
        assert seen[0].url.path == "/v3/mg.test/messages"
        assert seen[0].headers["Authorization"].startswith("Basic ")
        assert b"subject=Hi" in seen[0].content

    def test_send_failure_falls_back(self) -> None:
        fallback = LoggingEmailSender()
        sender = MailgunEmailSender(
            api_key="key-123",
            domain="mg.test",
            sender="noreply@mg.test",
            client=httpx.Client(
                transport=httpx.MockTransport(lambda request: httpx.Response(500))
            ),
            fallback=fallback,
        )

        sender.send("ama@example.com", "Hi", "<p>Hi</p>")

        assert len(fallback.outbox) == 1
