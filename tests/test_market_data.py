"""
Tests for the market context: request validation and the Alpha Vantage
adapter. HTTP traffic is served by httpx.MockTransport.
"""

from unittest.mock import MagicMock

import fakeredis
import httpx
import pytest
import redis

from hoardrun.application.market.get_market_data import (
    GetMarketDataUseCase,
    MarketDataQuery,
)
from hoardrun.domain.market.entities import MarketDataType, StockQuote
from hoardrun.domain.market.errors import (
    InvalidIntervalError,
    InvalidSymbolError,
    MarketDataUnavailableError,
    MarketRateLimitError,
    SymbolNotFoundError,
)
from hoardrun.infrastructure.market.alpha_vantage_client import AlphaVantageClient
from hoardrun.shared.cache import RedisCache

QUOTE_PAYLOAD = {
    "Global Quote": {
        "01. symbol": "IBM",
        "05. price": "182.5100",
        "06. volume": "3204512",
        "07. latest trading day": "2024-05-17",
        "09. change": "-1.2300",
        "10. change percent": "-0.6694%",
    }
}

DAILY_PAYLOAD = {
    "Meta Data": {"2. Symbol": "IBM"},
    "Time Series (Daily)": {
        "2024-05-16": {
            "1. open": "168.2", "2. high": "169.6", "3. low": "167.8",
            "4. close": "168.9", "5. volume": "3100000",
        },
        "2024-05-17": {
            "1. open": "169.0", "2. high": "170.1", "3. low": "168.5",
            "4. close": "169.6", "5. volume": "2900000",
        },
    },
}


class Recorder:
    """MockTransport handler replaying canned responses in order."""

    def __init__(self, *responses: httpx.Response) -> None:
        self._responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if len(self._responses) > 1:
            return self._responses.pop(0)
        return self._responses[0]


def _fresh_redis() -> fakeredis.FakeRedis:
    return fakeredis.FakeRedis(server=fakeredis.FakeServer(), decode_responses=True)


def _client(handler, **kwargs) -> AlphaVantageClient:
    return AlphaVantageClient(
        api_key="demo",
        backoff_multiplier=0,
        client=httpx.Client(transport=httpx.MockTransport(handler)),
        **kwargs,
    )


class TestGetMarketDataUseCase:
    def test_symbol_is_normalised(self, market_provider) -> None:
        quote = StockQuote("IBM", 182.51, 100, -1.23, -0.67, "2024-05-17")
        market_provider.get_quote.return_value = quote

        result = GetMarketDataUseCase(market_provider).execute(MarketDataQuery(symbol=" ibm "))

        assert result.symbol == "IBM"
        assert result.data is quote
        market_provider.get_quote.assert_called_once_with("IBM")

    @pytest.mark.parametrize("symbol", ["", "TOO-LONG-SYMBOL", "IB M", "$IBM"])
    def test_invalid_symbol(self, market_provider, symbol) -> None:
        with pytest.raises(InvalidSymbolError):
            GetMarketDataUseCase(market_provider).execute(MarketDataQuery(symbol=symbol))

    def test_invalid_interval(self, market_provider) -> None:
        with pytest.raises(InvalidIntervalError):
            GetMarketDataUseCase(market_provider).execute(
                MarketDataQuery(symbol="IBM", type=MarketDataType.INTRADAY, interval="2min")
            )
        market_provider.get_intraday_prices.assert_not_called()

    def test_dispatch_by_type(self, market_provider) -> None:
        use_case = GetMarketDataUseCase(market_provider)
        use_case.execute(MarketDataQuery(symbol="IBM", type=MarketDataType.DAILY))
        use_case.execute(
            MarketDataQuery(symbol="IBM", type=MarketDataType.INTRADAY, interval="15min")
        )
        use_case.execute(MarketDataQuery(symbol="IBM", type=MarketDataType.OVERVIEW))

        market_provider.get_daily_prices.assert_called_once_with("IBM")
        market_provider.get_intraday_prices.assert_called_once_with("IBM", "15min")
        market_provider.get_company_overview.assert_called_once_with("IBM")


class TestAlphaVantageClient:
    def test_quote_parsed(self) -> None:
        recorder = Recorder(httpx.Response(200, json=QUOTE_PAYLOAD))

        quote = _client(recorder).get_quote("IBM")

        assert quote.price == pytest.approx(182.51)
        assert quote.volume == 3204512
        assert quote.change_percent == pytest.approx(-0.6694)
        params = recorder.requests[0].url.params
        assert params["function"] == "GLOBAL_QUOTE"
        assert params["apikey"] == "demo"

    def test_daily_series_newest_first(self) -> None:
        bars = _client(Recorder(httpx.Response(200, json=DAILY_PAYLOAD))).get_daily_prices("IBM")
        assert [bar.timestamp for bar in bars] == ["2024-05-17", "2024-05-16"]
        assert bars[0].close == pytest.approx(169.6)

    def test_responses_are_cached(self) -> None:
        recorder = Recorder(httpx.Response(200, json=QUOTE_PAYLOAD))
        client = _client(recorder, cache=RedisCache(_fresh_redis()))

        first = client.get_quote("IBM")
        second = client.get_quote("IBM")

        assert len(recorder.requests) == 1
        assert second == first

    def test_cache_entries_carry_ttl(self) -> None:
        server = _fresh_redis()
        recorder = Recorder(
            httpx.Response(200, json=QUOTE_PAYLOAD),
            httpx.Response(200, json=DAILY_PAYLOAD),
        )
        client = _client(recorder, cache=RedisCache(server))

        client.get_quote("IBM")
        client.get_daily_prices("IBM")

        assert 0 < server.ttl("market:quote:IBM") <= 60
        assert 60 < server.ttl("market:daily:IBM") <= 300

    def test_expired_entry_is_refetched(self) -> None:
        server = _fresh_redis()
        recorder = Recorder(httpx.Response(200, json=QUOTE_PAYLOAD))
        client = _client(recorder, cache=RedisCache(server))

        client.get_quote("IBM")
        server.delete("market:quote:IBM")
        client.get_quote("IBM")

        assert len(recorder.requests) == 2

    def test_redis_outage_falls_through_to_provider(self) -> None:
        broken = MagicMock(spec=redis.Redis)
        broken.get.side_effect = redis.ConnectionError("connection refused")
        broken.setex.side_effect = redis.ConnectionError("connection refused")
        recorder = Recorder(httpx.Response(200, json=QUOTE_PAYLOAD))
        client = _client(recorder, cache=RedisCache(broken))

        assert client.get_quote("IBM").symbol == "IBM"
        assert client.get_quote("IBM").symbol == "IBM"
        assert len(recorder.requests) == 2

    def test_server_errors_are_retried(self) -> None:
        recorder = Recorder(
            httpx.Response(503),
            httpx.Response(502),
            httpx.Response(200, json=QUOTE_PAYLOAD),
        )
        quote = _client(recorder).get_quote("IBM")
        assert quote.symbol == "IBM"
        assert len(recorder.requests) == 3

    def test_retries_exhausted(self) -> None:
        recorder = Recorder(httpx.Response(500))
        with pytest.raises(MarketDataUnavailableError):
            _client(recorder).get_quote("IBM")
        assert len(recorder.requests) == 3

    def test_transport_error_retried(self) -> None:
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            if len(calls) == 1:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, json=QUOTE_PAYLOAD)

        assert _client(handler).get_quote("IBM").symbol == "IBM"
        assert len(calls) == 2

    def test_http_429_not_retried(self) -> None:
        recorder = Recorder(httpx.Response(429))
        with pytest.raises(MarketRateLimitError):
            _client(recorder).get_quote("IBM")
        assert len(recorder.requests) == 1

    @pytest.mark.parametrize("key", ["Note", "Information"])
    def test_throttle_message(self, key) -> None:
        payload = {key: "Thank you for using Alpha Vantage! Our standard API rate limit is 25 requests per day."}
        with pytest.raises(MarketRateLimitError):
            _client(Recorder(httpx.Response(200, json=payload))).get_quote("IBM")

    def test_error_message_means_unknown_symbol(self) -> None:
        payload = {"Error Message": "Invalid API call."}
        with pytest.raises(SymbolNotFoundError):
            _client(Recorder(httpx.Response(200, json=payload))).get_daily_prices("NOPE")

    def test_empty_quote_means_unknown_symbol(self) -> None:
        with pytest.raises(SymbolNotFoundError):
            _client(Recorder(httpx.Response(200, json={"Global Quote": {}}))).get_quote("NOPE")

    def test_failures_are_not_cached(self) -> None:
        recorder = Recorder(
            httpx.Response(200, json={"Note": "slow down"}),
            httpx.Response(200, json=QUOTE_PAYLOAD),
        )
        server = _fresh_redis()
        client = _client(recorder, cache=RedisCache(server))
        with pytest.raises(MarketRateLimitError):
            client.get_quote("IBM")
        assert not server.exists("market:quote:IBM")
        assert client.get_quote("IBM").symbol == "IBM"

    def test_overview_parsed(self) -> None:
        payload = {
            "Symbol": "IBM",
            "Name": "International Business Machines",
            "Exchange": "NYSE",
            "Currency": "USD",
            "Sector": "TECHNOLOGY",
            "Industry": "COMPUTER & OFFICE EQUIPMENT",
            "MarketCapitalization": "167000000000",
            "PERatio": "None",
            "DividendYield": "0.0394",
        }
        overview = _client(Recorder(httpx.Response(200, json=payload))).get_company_overview("IBM")
        assert overview.name == "International Business Machines"
        assert overview.pe_ratio is None
        assert overview.market_capitalization == pytest.approx(1.67e11)
