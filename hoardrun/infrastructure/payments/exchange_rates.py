"""
Adapter: Exchange rate provider.

Implements ExchangeRateProvider port. Rates are fetched from an
exchangerate-host compatible API and cached in Redis per currency pair.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

import httpx

from hoardrun.domain.payments.errors import (
    MomoError,
    MomoErrorCode,
    UnsupportedCurrencyError,
)
from hoardrun.domain.payments.ports import ExchangeRateProvider
from hoardrun.shared.cache import RedisCache

logger = logging.getLogger(__name__)

SUPPORTED_CURRENCIES = frozenset({"EUR", "GHS", "UGX", "XAF", "XOF"})


class HttpExchangeRateProvider(ExchangeRateProvider):
    """Converts between MOMO currencies using a rates API.

    Args:
        api_url: Rates endpoint; queried as `?base=X&symbols=Y`.
        api_key: Bearer token for the rates API.
        ttl_seconds: How long a fetched rate is reused.
        client: Optional httpx client (injected in tests).
        cache: Optional Redis cache; rates are fetched every time without one.
    """

    def __init__(
        self,
        api_url: str,
        api_key: str = "",
        ttl_seconds: int = 3600,
        client: Optional[httpx.Client] = None,
        cache: Optional[RedisCache] = None,
    ) -> None:
        self._api_url = api_url
        self._api_key = api_key
        self._ttl = ttl_seconds
        self._client = client or httpx.Client(timeout=10.0)
        self._cache = cache

    def convert(self, amount: Decimal, source: str, target: str) -> Decimal:
        source, target = source.upper(), target.upper()
        for currency in (source, target):
            if currency not in SUPPORTED_CURRENCIES:
                raise UnsupportedCurrencyError(currency)
        if source == target:
            return amount

        rate = self.get_rate(source, target)
        return (amount * rate).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    def get_rate(self, source: str, target: str) -> Decimal:
        if self._cache is None:
            return self._fetch_rate(source, target)
        rate = self._cache.get_or_set(
            f"fx:{source}:{target}",
            self._ttl,
            lambda: str(self._fetch_rate(source, target)),
        )
        return Decimal(rate)

    def _fetch_rate(self, source: str, target: str) -> Decimal:
        headers = {"Authorization": f"Bearer {self._api_key}"} if self._api_key else {}
        try:
            response = self._client.get(
                self._api_url,
                params={"base": source, "symbols": target},
                headers=headers,
            )
            response.raise_for_status()
            rate = response.json()["rates"][target]
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as exc:
            logger.error("Exchange rate fetch failed for %s->%s: %s", source, target, exc)
            raise MomoError(
                MomoErrorCode.EXCHANGE_RATE_FAILED, "Failed to fetch exchange rate", 502
            ) from exc

        logger.info("Fetched exchange rate %s->%s", source, target)
        return Decimal(str(rate))
