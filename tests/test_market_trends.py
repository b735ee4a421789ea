# tests/test_market_trends.py
import httpx
import pytest

from pathwise.core.config import settings
from pathwise.core.errors import StockAPIError, StockAPIErrorType
from pathwise.services import stocks
from pathwise.services.quote_cache import QuoteCache
from pathwise.services.mock_stocks import get_mock_stock_data


def _av_handler(request: httpx.Request) -> httpx.Response:
    fn = request.url.params["function"]
    if fn == "GLOBAL_QUOTE":
        return httpx.Response(200, json={"Global Quote": {
            "01. symbol": "IBM", "05. price": "150.25", "09. change": "1.50", "10. change percent": "1.0085%",
        }})
    if fn == "TIME_SERIES_DAILY":
        return httpx.Response(200, json={"Time Series (Daily)": {
            "2024-01-03": {"1. open": "2", "2. high": "3", "3. low": "1", "4. close": "2.5", "5. volume": "100"},
            "2024-01-02": {"1. open": "1", "2. high": "2", "3. low": "1", "4. close": "1.5", "5. volume": "90"},
        }})
    if fn == "OVERVIEW":
        return httpx.Response(200, json={"Name": "International Business Machines"})
    if fn == "SYMBOL_SEARCH":
        return httpx.Response(200, json={"bestMatches": [{"1. symbol": "IBM", "2. name": "International Business Machines"}]})
    return httpx.Response(404)


def _use_transport(monkeypatch, handler):
    monkeypatch.setattr(settings, "ALPHA_VANTAGE_API_KEY", "test-key")
    monkeypatch.setattr(stocks, "_client", lambda: httpx.AsyncClient(transport=httpx.MockTransport(handler)))


@pytest.mark.asyncio
async def test_symbol_is_required(client):
    r = await client.get("/api/market-trends/stocks")
    assert r.status_code == 400
    assert r.json()["errorType"] == "validation_error"


@pytest.mark.asyncio
async def test_quote_from_provider(client, monkeypatch):
    _use_transport(monkeypatch, _av_handler)
    r = await client.get("/api/market-trends/stocks", params={"symbol": " ibm "})
    assert r.status_code == 200
    data = r.json()
    assert data["symbol"] == "IBM"
    assert data["name"] == "International Business Machines"
    assert data["price"] == 150.25
    assert data["changePercent"] == pytest.approx(1.0085)
    assert [p["date"] for p in data["timeSeries"]] == ["2024-01-02", "2024-01-03"]
    assert data["isMock"] is False


@pytest.mark.asyncio
async def test_missing_key_falls_back_to_mock(client, monkeypatch):
    monkeypatch.setattr(settings, "ALPHA_VANTAGE_API_KEY", None)
    r = await client.get("/api/market-trends/stocks", params={"symbol": "aapl"})
    assert r.status_code == 200
    data = r.json()
    assert data["isMock"] is True
    assert data["name"] == "Apple Inc."
    assert len(data["timeSeries"]) == 31


@pytest.mark.asyncio
async def test_rate_limit_note_falls_back_to_mock(client, monkeypatch):
    _use_transport(monkeypatch, lambda req: httpx.Response(200, json={"Note": "Thank you! Our standard API call frequency is 5 calls per minute."}))
    r = await client.get("/api/market-trends/stocks", params={"symbol": "MSFT"})
    assert r.json()["isMock"] is True


@pytest.mark.asyncio
@pytest.mark.parametrize("response, expected", [
    (httpx.Response(429), StockAPIErrorType.RATE_LIMIT_EXCEEDED),
    (httpx.Response(403), StockAPIErrorType.API_KEY_INVALID),
    (httpx.Response(503), StockAPIErrorType.SERVICE_UNAVAILABLE),
    (httpx.Response(200, json={"Error Message": "Invalid API call. Please retry"}), StockAPIErrorType.API_KEY_INVALID),
    (httpx.Response(200, json={"Global Quote": {}}), StockAPIErrorType.INVALID_SYMBOL),
])
async def test_provider_errors_are_classified(monkeypatch, response, expected):
    _use_transport(monkeypatch, lambda req: response)
    with pytest.raises(StockAPIError) as exc_info:
        await stocks.get_stock_data("XYZ")
    assert exc_info.value.error_type == expected


@pytest.mark.asyncio
async def test_network_error_is_classified(monkeypatch):
    def unreachable(request):
        raise httpx.ConnectError("no route", request=request)

    _use_transport(monkeypatch, unreachable)
    with pytest.raises(StockAPIError) as exc_info:
        await stocks.get_stock_data("XYZ")
    assert exc_info.value.error_type == StockAPIErrorType.NETWORK_ERROR


@pytest.mark.asyncio
async def test_missing_key_is_classified(monkeypatch):
    monkeypatch.setattr(settings, "ALPHA_VANTAGE_API_KEY", None)
    with pytest.raises(StockAPIError) as exc_info:
        await stocks.fetch_endpoint({"function": "GLOBAL_QUOTE", "symbol": "IBM"}, "stock quote")
    assert exc_info.value.error_type == StockAPIErrorType.API_KEY_MISSING


@pytest.mark.asyncio
async def test_search_uses_provider(client, monkeypatch):
    _use_transport(monkeypatch, _av_handler)
    r = await client.get("/api/market-trends/stocks/search", params={"q": "intern"})
    assert r.json() == [{"symbol": "IBM", "name": "International Business Machines"}]


@pytest.mark.asyncio
async def test_search_falls_back_to_default_list(client, monkeypatch):
    monkeypatch.setattr(settings, "ALPHA_VANTAGE_API_KEY", None)
    r = await client.get("/api/market-trends/stocks/search", params={"q": "apple"})
    assert [s["symbol"] for s in r.json()] == ["AAPL"]


def test_mock_data_is_deterministic():
    a, b = get_mock_stock_data("TSLA"), get_mock_stock_data("tsla")
    assert a.price == b.price
    assert a.symbol == "TSLA"
    assert a.change == pytest.approx(a.time_series[-1].close - a.time_series[-2].close, abs=0.01)


class _StubRedis:
    def __init__(self, value):
        self.value = value

    async def get(self, key):
        return self.value


@pytest.mark.asyncio
async def test_corrupt_cache_entry_is_a_miss(monkeypatch):
    qc = QuoteCache(url="redis://localhost:6379/0", ttl=60)
    monkeypatch.setattr(qc, "_get_client", lambda: _StubRedis("{not json"))
    assert await qc.get("GLOBAL_QUOTE:IBM") is None

    monkeypatch.setattr(qc, "_get_client", lambda: _StubRedis('{"price": 1.5}'))
    assert await qc.get("GLOBAL_QUOTE:IBM") == {"price": 1.5}
