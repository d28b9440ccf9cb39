"""
Cache key namespaces and their TTLs (seconds).
"""

from typing import Iterable

from src.domain.entities.period import Period

QUOTE_TTL = 60
SEARCH_TTL = 3600
COMPANY_TTL = 1800
HISTORY_TTL = 1800
TRENDING_TTL = 180
COMPARE_TTL = 900

TRENDING_KEY = "trending"


def quote_key(symbol: str) -> str:
    return f"quote:{symbol}"


def history_key(symbol: str, period: Period) -> str:
    return f"history:{symbol}:{period.value}"


def search_key(query: str) -> str:
    return f"search:{query.lower()}"


def company_key(symbol: str) -> str:
    return f"company:{symbol}"


def compare_key(symbols: Iterable[str], period: Period) -> str:
    """Order-insensitive key: the same set of symbols always maps to one entry."""
    return f"compare:{','.join(sorted(symbols))}:{period.value}"
