"""
Pydantic schemas for the market data API.
"""

from pydantic import BaseModel

from hoardrun.domain.market.entities import MarketDataType


class QuoteData(BaseModel):
    symbol: str
    price: float
    volume: int
    change: float
    change_percent: float
    latest_trading_day: str


class PriceBarData(BaseModel):
    timestamp: str
    open: float
    high: float
    low: float
    close: float
    volume: int


class OverviewData(BaseModel):
    symbol: str
    name: str
    description: str
    exchange: str
    currency: str
    sector: str
    industry: str
    market_capitalization: float | None = None
    pe_ratio: float | None = None
    dividend_yield: float | None = None


class MarketDataResponse(BaseModel):
    """Market data for one symbol.

    `data` is a quote, a list of price bars (daily and intraday) or a
    company overview depending on `type`.
    """

    symbol: str
    type: MarketDataType
    data: QuoteData | list[PriceBarData] | OverviewData
