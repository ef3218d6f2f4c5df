"""
FastAPI router for stock market data.

Quotes, daily and intraday price series and company overviews, served
from Alpha Vantage through the market data use case.
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends, Path, Query

from hoardrun.application.market.get_market_data import (
    GetMarketDataUseCase,
    MarketDataQuery,
    MarketDataResult,
)
from hoardrun.domain.market.entities import MarketDataType, StockQuote
from hoardrun.interfaces.dependencies import get_current_user
from hoardrun.interfaces.market.dependencies import get_market_data_use_case
from hoardrun.interfaces.market.schemas import (
    MarketDataResponse,
    OverviewData,
    PriceBarData,
    QuoteData,
)
from hoardrun.interfaces.schemas import ErrorResponse

router = APIRouter(prefix="/market", tags=["market"])


def _to_response(result: MarketDataResult) -> MarketDataResponse:
    if isinstance(result.data, list):
        data = [PriceBarData(**asdict(bar)) for bar in result.data]
    elif isinstance(result.data, StockQuote):
        data = QuoteData(**asdict(result.data))
    else:
        data = OverviewData(**asdict(result.data))
    return MarketDataResponse(symbol=result.symbol, type=result.type, data=data)


@router.get(
    "/{type}/{symbol}",
    response_model=MarketDataResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
    summary="Get market data for a symbol",
    dependencies=[Depends(get_current_user)],
)
def get_market_data(
    type: MarketDataType,
    symbol: str = Path(..., min_length=1, max_length=10),
    interval: str = Query("5min"),
    use_case: GetMarketDataUseCase = Depends(get_market_data_use_case),
) -> MarketDataResponse:
    """Return market data of the requested kind.

    `interval` only applies to intraday series.
    """
    result = use_case.execute(
        MarketDataQuery(symbol=symbol, type=type, interval=interval)
    )
    return _to_response(result)
