"""
Use case: Fetch market data for a stock symbol.

Input: MarketDataQuery (symbol, type, interval)
Output: MarketDataResult
Side effects: None (provider responses are cached by the adapter).
Failure cases: InvalidSymbolError, InvalidIntervalError,
    SymbolNotFoundError, MarketRateLimitError, MarketDataUnavailableError.
"""

import logging
import re
from dataclasses import dataclass
from typing import Union

from hoardrun.domain.market.entities import (
    SUPPORTED_INTERVALS,
    CompanyOverview,
    MarketDataType,
    PriceBar,
    StockQuote,
)
from hoardrun.domain.market.errors import InvalidIntervalError, InvalidSymbolError
from hoardrun.domain.market.ports import MarketDataProvider

logger = logging.getLogger(__name__)

SYMBOL_PATTERN = re.compile(r"^[A-Z0-9.]{1,10}$")


@dataclass(frozen=True)
class MarketDataQuery:
    symbol: str
    type: MarketDataType = MarketDataType.QUOTE
    interval: str = "5min"


@dataclass(frozen=True)
class MarketDataResult:
    symbol: str
    type: MarketDataType
    data: Union[StockQuote, list[PriceBar], CompanyOverview]


class GetMarketDataUseCase:
    """Validates the request and dispatches to the market data provider."""

    def __init__(self, provider: MarketDataProvider) -> None:
        self._provider = provider

    def execute(self, query: MarketDataQuery) -> MarketDataResult:
        symbol = query.symbol.strip().upper()
        if not SYMBOL_PATTERN.match(symbol):
            raise InvalidSymbolError(query.symbol)
        if query.interval not in SUPPORTED_INTERVALS:
            raise InvalidIntervalError(query.interval)

        logger.info("Market data requested: symbol=%s type=%s", symbol, query.type.value)
        if query.type is MarketDataType.QUOTE:
            data = self._provider.get_quote(symbol)
        elif query.type is MarketDataType.DAILY:
            data = self._provider.get_daily_prices(symbol)
        elif query.type is MarketDataType.INTRADAY:
            data = self._provider.get_intraday_prices(symbol, query.interval)
        else:
            data = self._provider.get_company_overview(symbol)
        return MarketDataResult(symbol=symbol, type=query.type, data=data)
