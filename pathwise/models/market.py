# pathwise/models/market.py
from typing import List, Optional

from pydantic import Field

from pathwise.models.entities import CamelModel


class StockDataPoint(CamelModel):
    date: str
    open: float
    high: float
    low: float
    close: float
    volume: int


class StockData(CamelModel):
    symbol: str
    name: Optional[str] = None
    currency: str = "USD"
    price: Optional[float] = None
    change: Optional[float] = None
    change_percent: Optional[float] = None
    time_series: List[StockDataPoint] = Field(default_factory=list)
    # true when the figures were generated locally instead of fetched
    is_mock: bool = False


class StockSymbol(CamelModel):
    symbol: str
    name: str
