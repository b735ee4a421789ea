# pathwise/services/stock_symbols.py
"""Popular symbols used for search suggestions when the provider is unavailable."""
from typing import List

from pathwise.models.market import StockSymbol

DEFAULT_STOCK_SYMBOLS: List[StockSymbol] = [
    StockSymbol(symbol=s, name=n)
    for s, n in [
        ("AAPL", "Apple Inc."),
        ("MSFT", "Microsoft Corporation"),
        ("GOOGL", "Alphabet Inc."),
        ("AMZN", "Amazon.com Inc."),
        ("META", "Meta Platforms Inc."),
        ("TSLA", "Tesla Inc."),
        ("NVDA", "NVIDIA Corporation"),
        ("JPM", "JPMorgan Chase & Co."),
        ("NFLX", "Netflix Inc."),
        ("DIS", "The Walt Disney Company"),
        ("PYPL", "PayPal Holdings Inc."),
        ("INTC", "Intel Corporation"),
        ("CSCO", "Cisco Systems Inc."),
        ("ADBE", "Adobe Inc."),
        ("PEP", "PepsiCo Inc."),
        ("CMCSA", "Comcast Corporation"),
        ("AMD", "Advanced Micro Devices Inc."),
        ("T", "AT&T Inc."),
        ("VZ", "Verizon Communications Inc."),
        ("CRM", "Salesforce Inc."),
    ]
]


def filter_default_symbols(query: str) -> List[StockSymbol]:
    q = (query or "").lower().strip()
    return [s for s in DEFAULT_STOCK_SYMBOLS if q in s.symbol.lower() or q in s.name.lower()]


def company_name(symbol: str) -> str:
    found = next((s for s in DEFAULT_STOCK_SYMBOLS if s.symbol == symbol), None)
    return found.name if found else f"{symbol} Inc."
