"""
Port interfaces (ABCs) for the market bounded context.
"""

from abc import ABC, abstractmethod

from hoardrun.domain.market.entities import CompanyOverview, PriceBar, StockQuote


class MarketDataProvider(ABC):
    """Port for a stock market data source.

    Implementations raise SymbolNotFoundError, MarketRateLimitError or
    MarketDataUnavailableError.
    """

    @abstractmethod
    def get_quote(self, symbol: str) -> StockQuote:
        raise NotImplementedError

    @abstractmethod
    def get_daily_prices(self, symbol: str) -> list[PriceBar]:
        raise NotImplementedError

    @abstractmethod
    def get_intraday_prices(self, symbol: str, interval: str = "5min") -> list[PriceBar]:
        raise NotImplementedError

    @abstractmethod
    def get_company_overview(self, symbol: str) -> CompanyOverview:
        raise NotImplementedError
