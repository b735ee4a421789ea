# pathwise/services/mock_stocks.py
"""
Locally generated quote data, served when the market-data provider fails.

Series are seeded from the symbol, so the same symbol on the same day
always yields the same numbers.
"""
import random
from datetime import date, timedelta
from typing import List, Optional

from pathwise.models.market import StockData, StockDataPoint
from pathwise.services.stock_symbols import company_name

# rough anchors so well-known tickers look plausible
BASE_PRICES = {
    "AAPL": 180.0,
    "MSFT": 350.0,
    "GOOGL": 140.0,
    "AMZN": 160.0,
    "META": 480.0,
    "TSLA": 170.0,
    "NVDA": 850.0,
}
VOLATILITY = 0.02


def _seed(symbol: str) -> int:
    return sum(ord(c) for c in symbol)


def generate_time_series(symbol: str, days: int = 30, today: Optional[date] = None) -> List[StockDataPoint]:
    seed = _seed(symbol)
    rng = random.Random(seed)
    price = BASE_PRICES.get(symbol, 50.0 + seed % 200)
    last_digit = seed % 10
    trend = -0.001 if last_digit < 3 else 0.001 if last_digit > 7 else 0.0
    today = today or date.today()

    points = []
    for i in range(days, -1, -1):
        price *= 1 + (rng.random() - 0.5) * VOLATILITY + trend
        close = price
        open_ = close * (1 + (rng.random() - 0.5) * 0.01)
        high = max(open_, close) * (1 + rng.random() * 0.01)
        low = min(open_, close) * (1 - rng.random() * 0.01)
        points.append(StockDataPoint(
            date=(today - timedelta(days=i)).isoformat(),
            open=round(open_, 2),
            high=round(high, 2),
            low=round(low, 2),
            close=round(close, 2),
            volume=int(1_000_000 + rng.random() * 10_000_000),
        ))
    return points


def get_mock_stock_data(symbol: str) -> StockData:
    symbol = symbol.strip().upper()
    series = generate_time_series(symbol)
    last, before = series[-1], series[-2]
    change = last.close - before.close
    return StockData(
        symbol=symbol,
        name=company_name(symbol),
        price=last.close,
        change=round(change, 2),
        change_percent=round(change / before.close * 100, 4),
        time_series=series,
        is_mock=True,
    )
