"""
Adapter: Alpha Vantage market data client.

Implements MarketDataProvider port over httpx.

Provider payloads are cached in Redis per symbol and function:
- GLOBAL_QUOTE: 60 s
- TIME_SERIES_DAILY: 300 s
- TIME_SERIES_INTRADAY: 60 s
- OVERVIEW: 3600 s

Transport errors and 5xx responses are retried with exponential backoff
(tenacity). Throttling is reported by Alpha Vantage either as HTTP 429 or
as a 200 carrying a "Note"/"Information" message; both surface as
MarketRateLimitError and are not retried.
"""

import logging
from typing import Any, Callable, Optional

import httpx
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from hoardrun.domain.market.entities import CompanyOverview, PriceBar, StockQuote
from hoardrun.domain.market.errors import (
    MarketDataUnavailableError,
    MarketRateLimitError,
    SymbolNotFoundError,
)
from hoardrun.domain.market.ports import MarketDataProvider
from hoardrun.shared.cache import RedisCache

logger = logging.getLogger(__name__)

QUOTE_TTL = 60
DAILY_TTL = 300
INTRADAY_TTL = 60
OVERVIEW_TTL = 3600

THROTTLE_KEYS = ("Note", "Information")


class _TransientProviderError(Exception):
    """A failure worth retrying: network error or 5xx."""


def _to_float(value: Any) -> Optional[float]:
    if value in (None, "", "None", "-"):
        return None
    try:
        return float(str(value).rstrip("%"))
    except ValueError:
        return None


def _to_int(value: Any) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0


def _parse_series(series: dict) -> list[PriceBar]:
    bars = [
        PriceBar(
            timestamp=timestamp,
            open=_to_float(values.get("1. open")) or 0.0,
            high=_to_float(values.get("2. high")) or 0.0,
            low=_to_float(values.get("3. low")) or 0.0,
            close=_to_float(values.get("4. close")) or 0.0,
            volume=_to_int(values.get("5. volume")),
        )
        for timestamp, values in series.items()
    ]
    bars.sort(key=lambda bar: bar.timestamp, reverse=True)
    return bars


def _parse_quote(quote: dict, symbol: str) -> StockQuote:
    return StockQuote(
        symbol=quote.get("01. symbol", symbol),
        price=_to_float(quote.get("05. price")) or 0.0,
        volume=_to_int(quote.get("06. volume")),
        change=_to_float(quote.get("09. change")) or 0.0,
        change_percent=_to_float(quote.get("10. change percent")) or 0.0,
        latest_trading_day=quote.get("07. latest trading day", ""),
    )


def _parse_overview(data: dict) -> CompanyOverview:
    return CompanyOverview(
        symbol=data["Symbol"],
        name=data.get("Name", ""),
        description=data.get("Description", ""),
        exchange=data.get("Exchange", ""),
        currency=data.get("Currency", ""),
        sector=data.get("Sector", ""),
        industry=data.get("Industry", ""),
        market_capitalization=_to_float(data.get("MarketCapitalization")),
        pe_ratio=_to_float(data.get("PERatio")),
        dividend_yield=_to_float(data.get("DividendYield")),
    )


class AlphaVantageClient(MarketDataProvider):
    """Alpha Vantage REST client.

    Args:
        api_key: Alpha Vantage API key.
        base_url: Query endpoint.
        max_retries: Attempts for transient failures.
        backoff_multiplier: Exponential backoff multiplier in seconds
            (0 disables waiting, for tests).
        client: Optional httpx client (injected in tests).
        cache: Optional Redis cache; responses are not cached without one.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://www.alphavantage.co/query",
        max_retries: int = 3,
        backoff_multiplier: float = 1.0,
        client: Optional[httpx.Client] = None,
        cache: Optional[RedisCache] = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._max_retries = max_retries
        self._backoff_multiplier = backoff_multiplier
        self._client = client or httpx.Client(timeout=10.0)
        self._cache = cache

    # ------------------------------------------------------------------
    # MarketDataProvider
    # ------------------------------------------------------------------

    def get_quote(self, symbol: str) -> StockQuote:
        quote = self._cached(
            f"market:quote:{symbol}",
            QUOTE_TTL,
            lambda: self._fetch_section(
                {"function": "GLOBAL_QUOTE", "symbol": symbol}, symbol, "Global Quote"
            ),
        )
        return _parse_quote(quote, symbol)

    def get_daily_prices(self, symbol: str) -> list[PriceBar]:
        series = self._cached(
            f"market:daily:{symbol}",
            DAILY_TTL,
            lambda: self._fetch_section(
                {"function": "TIME_SERIES_DAILY", "symbol": symbol, "outputsize": "compact"},
                symbol,
                "Time Series (Daily)",
            ),
        )
        return _parse_series(series)

    def get_intraday_prices(self, symbol: str, interval: str = "5min") -> list[PriceBar]:
        series = self._cached(
            f"market:intraday:{symbol}:{interval}",
            INTRADAY_TTL,
            lambda: self._fetch_section(
                {
                    "function": "TIME_SERIES_INTRADAY",
                    "symbol": symbol,
                    "interval": interval,
                    "outputsize": "compact",
                },
                symbol,
                f"Time Series ({interval})",
            ),
        )
        return _parse_series(series)

    def get_company_overview(self, symbol: str) -> CompanyOverview:
        data = self._cached(
            f"market:overview:{symbol}", OVERVIEW_TTL, lambda: self._fetch_overview(symbol)
        )
        return _parse_overview(data)

    # ------------------------------------------------------------------
    # Loaders
    # ------------------------------------------------------------------

    def _cached(self, key: str, ttl: int, loader: Callable[[], dict]) -> dict:
        if self._cache is None:
            return loader()
        return self._cache.get_or_set(key, ttl, loader)

    def _fetch_section(self, params: dict[str, str], symbol: str, section: str) -> dict:
        """Return one named section of the payload; empty means unknown symbol."""
        payload = self._request(params, symbol).get(section)
        if not payload:
            raise SymbolNotFoundError(symbol)
        return payload

    def _fetch_overview(self, symbol: str) -> dict:
        data = self._request({"function": "OVERVIEW", "symbol": symbol}, symbol)
        if not data.get("Symbol"):
            raise SymbolNotFoundError(symbol)
        return data

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _request(self, params: dict[str, str], symbol: str) -> dict:
        """Call the API with retries and classify the payload.

        Raises:
            SymbolNotFoundError: Provider returned an "Error Message".
            MarketRateLimitError: Provider throttled the request.
            MarketDataUnavailableError: Retries exhausted or bad payload.
        """
        retrying = Retrying(
            retry=retry_if_exception_type(_TransientProviderError),
            stop=stop_after_attempt(self._max_retries),
            wait=wait_exponential(multiplier=self._backoff_multiplier, max=8),
            reraise=True,
        )
        try:
            data = retrying(self._fetch_once, {**params, "apikey": self._api_key})
        except _TransientProviderError as exc:
            logger.error(
                "Alpha Vantage unavailable after %d attempts: function=%s symbol=%s",
                self._max_retries,
                params.get("function"),
                symbol,
            )
            raise MarketDataUnavailableError(str(exc)) from exc

        if "Error Message" in data:
            raise SymbolNotFoundError(symbol)
        if any(key in data for key in THROTTLE_KEYS):
            logger.warning("Alpha Vantage throttled request for %s", symbol)
            raise MarketRateLimitError()
        return data

    def _fetch_once(self, params: dict[str, str]) -> dict:
        try:
            response = self._client.get(self._base_url, params=params)
        except httpx.TransportError as exc:
            raise _TransientProviderError(type(exc).__name__) from exc

        if response.status_code == 429:
            raise MarketRateLimitError()
        if response.status_code >= 500:
            raise _TransientProviderError(f"HTTP {response.status_code}")
        if response.is_error:
            raise MarketDataUnavailableError(f"HTTP {response.status_code}")
        try:
            data = response.json()
        except ValueError as exc:
            raise MarketDataUnavailableError("Malformed response") from exc
        if not isinstance(data, dict):
            raise MarketDataUnavailableError("Malformed response")
        return data
