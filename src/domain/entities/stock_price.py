"""
Domain entities for quote and price-history data.
Zero external dependencies: pure Python dataclasses only.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PriceSnapshot:
    """Raw point-in-time prices as reported by a source, before derivation."""

    symbol: str
    price: float
    change: float
    change_percent: float
    open: float
    high: float
    low: float
    volume: int
    previous_close: float
    latest_trading_day: str
    source: str


@dataclass(frozen=True)
class TradingHours:
    is_open: bool
    next_open: str
    timezone: str


@dataclass(frozen=True)
class Quote:
    symbol: str
    name: str
    description: str
    sector: str
    industry: str
    price: float
    bid_price: float
    ask_price: float
    spread: float
    change: float
    change_percent: str
    open: float
    high: float
    low: float
    volume: int
    previous_close: float
    market_cap: int
    pe: float
    dividend_yield: float
    week52_high: float
    week52_low: float
    is_positive: bool
    last_updated: str
    trading_hours: TradingHours
    source: str


@dataclass(frozen=True)
class HistoricalPoint:
    date: str
    open: float
    high: float
    low: float
    close: float
    volume: int


@dataclass(frozen=True)
class SeriesMeta:
    first_date: Optional[str]
    last_date: Optional[str]
    total_points: int


@dataclass(frozen=True)
class HistoricalSeries:
    symbol: str
    period: str
    points: tuple[HistoricalPoint, ...]
    meta: SeriesMeta
    source: str

    @classmethod
    def from_points(
        cls,
        symbol: str,
        period: str,
        points: list[HistoricalPoint],
        source: str,
    ) -> "HistoricalSeries":
        """Build a series and its meta block from already-ordered points."""
        return cls(
            symbol=symbol,
            period=period,
            points=tuple(points),
            meta=SeriesMeta(
                first_date=points[0].date if points else None,
                last_date=points[-1].date if points else None,
                total_points=len(points),
            ),
            source=source,
        )
