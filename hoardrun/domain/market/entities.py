"""
Domain entities for the market bounded context.

Market data is read-only and owned by the provider; these are value objects.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

SUPPORTED_INTERVALS = ("1min", "5min", "15min", "30min", "60min")


class MarketDataType(Enum):
    """Kind of market data a client can request."""

    QUOTE = "quote"
    DAILY = "daily"
    INTRADAY = "intraday"
    OVERVIEW = "overview"


@dataclass(frozen=True)
class StockQuote:
    symbol: str
    price: float
    volume: int
    change: float
    change_percent: float
    latest_trading_day: str


@dataclass(frozen=True)
class PriceBar:
    """One OHLCV bar of a price series."""

    timestamp: str
    open: float
    high: float
    low: float
    close: float
    volume: int


@dataclass(frozen=True)
class CompanyOverview:
    symbol: str
    name: str
    description: str
    exchange: str
    currency: str
    sector: str
    industry: str
    market_capitalization: Optional[float] = None
    pe_ratio: Optional[float] = None
    dividend_yield: Optional[float] = None
