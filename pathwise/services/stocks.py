# pathwise/services/stocks.py
"""
Alpha Vantage client for quotes and symbol search.

Every provider failure is raised as StockAPIError with a StockAPIErrorType;
callers decide whether to fall back (see api/v1/market_trends.py).
Successful raw payloads go through the optional quote cache.
"""
import logging
from typing import Any, Dict, List

import httpx

from pathwise.core.config import settings
from pathwise.core.errors import StockAPIError, StockAPIErrorType
from pathwise.models.market import StockData, StockDataPoint, StockSymbol
from pathwise.services.quote_cache import cache
from pathwise.services.stock_symbols import filter_default_symbols

logger = logging.getLogger(__name__)

SERIES_DAYS = 30


def _client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=settings.STOCK_TIMEOUT_SEC)


def _classify_status(status_code: int, endpoint_name: str) -> StockAPIError:
    if status_code in (401, 403):
        return StockAPIError("Invalid or unauthorized API key", StockAPIErrorType.API_KEY_INVALID)
    if status_code == 429:
        return StockAPIError("API rate limit exceeded", StockAPIErrorType.RATE_LIMIT_EXCEEDED)
    if status_code >= 500:
        return StockAPIError("Alpha Vantage service is currently unavailable", StockAPIErrorType.SERVICE_UNAVAILABLE)
    return StockAPIError(f"HTTP error {status_code} when fetching {endpoint_name}", StockAPIErrorType.UNKNOWN_ERROR)


def _classify_body(data: Dict[str, Any]) -> None:
    message = data.get("Error Message")
    if message:
        lowered = message.lower()
        if "invalid api call" in lowered or "invalid api key" in lowered:
            raise StockAPIError("Invalid API key or API call format", StockAPIErrorType.API_KEY_INVALID)
        if "invalid symbol" in lowered:
            raise StockAPIError("Invalid stock symbol provided", StockAPIErrorType.INVALID_SYMBOL)
        raise StockAPIError(message, StockAPIErrorType.UNKNOWN_ERROR)
    # the free tier answers throttled calls with 200 and a "Note"
    for key in ("Note", "Information"):
        note = data.get(key)
        if isinstance(note, str) and ("call frequency" in note.lower() or "rate limit" in note.lower()):
            raise StockAPIError("API call frequency exceeded", StockAPIErrorType.RATE_LIMIT_EXCEEDED)


async def fetch_endpoint(params: Dict[str, str], endpoint_name: str) -> Dict[str, Any]:
    if not settings.ALPHA_VANTAGE_API_KEY:
        raise StockAPIError("Alpha Vantage API key is not set", StockAPIErrorType.API_KEY_MISSING)

    cache_key = "av:" + ":".join(f"{k}={v}" for k, v in sorted(params.items()))
    cached = await cache.get(cache_key)
    if cached is not None:
        logger.debug("Using cached %s for %s", endpoint_name, cache_key)
        return cached

    query = {**params, "apikey": settings.ALPHA_VANTAGE_API_KEY}
    try:
        async with _client() as client:
            resp = await client.get(str(settings.ALPHA_VANTAGE_URL), params=query)
    except httpx.HTTPError as exc:
        raise StockAPIError(f"Network error fetching {endpoint_name}: {exc}", StockAPIErrorType.NETWORK_ERROR) from exc

    if resp.status_code >= 400:
        raise _classify_status(resp.status_code, endpoint_name)
    try:
        data = resp.json()
    except ValueError as exc:
        raise StockAPIError(f"Malformed {endpoint_name} response", StockAPIErrorType.UNKNOWN_ERROR) from exc
    if not isinstance(data, dict):
        raise StockAPIError(f"Unexpected {endpoint_name} response", StockAPIErrorType.UNKNOWN_ERROR)
    _classify_body(data)

    await cache.set(cache_key, data)
    return data


def _to_float(value: Any, default: float = 0.0) -> float:
    try:
        return float(str(value).replace("%", ""))
    except (TypeError, ValueError):
        return default


def parse_time_series(data: Dict[str, Any], days: int = SERIES_DAYS) -> List[StockDataPoint]:
    series = data.get("Time Series (Daily)") or {}
    points = [
        StockDataPoint(
            date=day,
            open=_to_float(values.get("1. open")),
            high=_to_float(values.get("2. high")),
            low=_to_float(values.get("3. low")),
            close=_to_float(values.get("4. close")),
            volume=int(_to_float(values.get("5. volume"))),
        )
        for day, values in series.items()
    ]
    # ISO dates sort chronologically
    points.sort(key=lambda p: p.date)
    return points[-days:]


async def get_stock_data(symbol: str) -> StockData:
    symbol = symbol.strip().upper()
    quote_data = await fetch_endpoint({"function": "GLOBAL_QUOTE", "symbol": symbol}, "stock quote")
    quote = quote_data.get("Global Quote") or {}
    if not quote:
        raise StockAPIError(f"No data available for {symbol}", StockAPIErrorType.INVALID_SYMBOL)

    # history and company name are nice-to-have once the quote is in hand
    time_series: List[StockDataPoint] = []
    name = symbol
    try:
        series_data = await fetch_endpoint(
            {"function": "TIME_SERIES_DAILY", "symbol": symbol, "outputsize": "compact"}, "time series"
        )
        time_series = parse_time_series(series_data)
        overview = await fetch_endpoint({"function": "OVERVIEW", "symbol": symbol}, "company overview")
        name = overview.get("Name") or symbol
    except StockAPIError as exc:
        logger.warning("Partial stock data for %s (%s): %s", symbol, exc.error_type.value, exc.message)

    return StockData(
        symbol=symbol,
        name=name,
        price=_to_float(quote.get("05. price")),
        change=_to_float(quote.get("09. change")),
        change_percent=_to_float(quote.get("10. change percent")),
        time_series=time_series,
    )


async def search_symbols(query: str) -> List[StockSymbol]:
    """Provider symbol search; any failure falls back to the default list."""
    try:
        data = await fetch_endpoint({"function": "SYMBOL_SEARCH", "keywords": query}, "symbol search")
    except StockAPIError as exc:
        logger.warning("Symbol search failed (%s), using default list", exc.error_type.value)
        return filter_default_symbols(query)
    matches = data.get("bestMatches")
    if not isinstance(matches, list):
        logger.warning("Unexpected symbol search response, using default list")
        return filter_default_symbols(query)
    return [
        StockSymbol(symbol=m.get("1. symbol", ""), name=m.get("2. name", ""))
        for m in matches
        if isinstance(m, dict) and m.get("1. symbol")
    ]
