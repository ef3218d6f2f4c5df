"""
Dependency injection for the market bounded context.
"""

from fastapi import Depends

from hoardrun.application.market.get_market_data import GetMarketDataUseCase
from hoardrun.domain.market.ports import MarketDataProvider
from hoardrun.interfaces.dependencies import get_market_data_provider


def get_market_data_use_case(
    provider: MarketDataProvider = Depends(get_market_data_provider),
) -> GetMarketDataUseCase:
    return GetMarketDataUseCase(provider)
