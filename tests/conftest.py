"""
Shared fixtures for the market data tests.
"""

import random
from datetime import datetime, timezone
from typing import Optional

import pytest

from src.domain.entities.period import Period
from src.domain.entities.stock_price import HistoricalPoint, HistoricalSeries, PriceSnapshot
from src.domain.ports.stock_data_port import IStockDataProvider
from src.infrastructure.cache.memory_cache import InMemoryTTLCache
from src.infrastructure.config.settings import Settings
from src.infrastructure.entrypoints.container import build_services

# A Monday, 11:00 in New York.
FIXED_NOW = datetime(2026, 10, 19, 15, 0, 0, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return FIXED_NOW


class FakeMonotonic:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeProvider(IStockDataProvider):
    """Scriptable IStockDataProvider recording every call."""

    def __init__(
        self,
        snapshot: Optional[PriceSnapshot] = None,
        series: Optional[HistoricalSeries] = None,
        quote_error: Optional[Exception] = None,
        history_error: Optional[Exception] = None,
    ) -> None:
        self.snapshot = snapshot
        self.series = series
        self.quote_error = quote_error
        self.history_error = history_error
        self.quote_calls: list[str] = []
        self.history_calls: list[tuple[str, Period]] = []

    @property
    def name(self) -> str:
        return "fake"

    def fetch_quote(self, symbol: str) -> PriceSnapshot:
        self.quote_calls.append(symbol)
        if self.quote_error is not None:
            raise self.quote_error
        return self.snapshot

    def fetch_history(self, symbol: str, period: Period) -> HistoricalSeries:
        self.history_calls.append((symbol, period))
        if self.history_error is not None:
            raise self.history_error
        return self.series


def make_snapshot(symbol: str = "AAPL", price: float = 200.0, change: float = 2.5) -> PriceSnapshot:
    return PriceSnapshot(
        symbol=symbol,
        price=price,
        change=change,
        change_percent=round(change / (price - change) * 100, 4),
        open=price - 1,
        high=price + 2,
        low=price - 3,
        volume=12_345_678,
        previous_close=price - change,
        latest_trading_day="2026-10-16",
        source="fake",
    )


def make_point(date: str, close: float, high: Optional[float] = None, low: Optional[float] = None) -> HistoricalPoint:
    return HistoricalPoint(
        date=date,
        open=close,
        high=close if high is None else high,
        low=close if low is None else low,
        close=close,
        volume=1_000_000,
    )


@pytest.fixture
def monotonic() -> FakeMonotonic:
    return FakeMonotonic()


@pytest.fixture
def cache(monotonic: FakeMonotonic) -> InMemoryTTLCache:
    return InMemoryTTLCache(clock=monotonic)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def synthetic_services(cache: InMemoryTTLCache, rng: random.Random):
    """Services with no live provider: everything comes from the generator."""
    return build_services(Settings(), cache=cache, provider=None, rng=rng, clock=fixed_clock)
