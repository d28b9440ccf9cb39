"""
Application service: synthetic market data used when no live source answers.

Quotes start from a small reference table of well-known symbols (other
symbols draw a base price in [100, 300)) and histories are random walks with
2% volatility per step. Every value comes from the injected
``random.Random`` and clock, so a seeded generator is fully reproducible.
This service never raises.
"""

import random
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import structlog

from src.application.services.analytics import compute_metrics
from src.application.services.company_directory import lookup_company
from src.application.services.market_clock import Clock, utc_now
from src.application.services.quote_factory import QuoteFactory, format_change_percent
from src.domain.entities.analytics import ComparisonRecord
from src.domain.entities.period import Period
from src.domain.entities.stock_price import (
    HistoricalPoint,
    HistoricalSeries,
    PriceSnapshot,
    Quote,
)

logger = structlog.get_logger(__name__)

SYNTHETIC_SOURCE = "synthetic"


@dataclass(frozen=True)
class ReferenceQuote:
    price: float
    change: float
    open: float
    high: float
    low: float
    volume: int


REFERENCE_QUOTES: dict[str, ReferenceQuote] = {
    "AAPL": ReferenceQuote(195.89, 2.45, 193.44, 196.12, 192.88, 45_234_567),
    "GOOGL": ReferenceQuote(142.56, -0.89, 143.45, 144.20, 141.88, 28_567_432),
    "MSFT": ReferenceQuote(378.85, 4.23, 374.62, 380.15, 373.45, 32_145_678),
    "TSLA": ReferenceQuote(248.42, -3.67, 252.09, 253.88, 247.10, 89_567_234),
    "AMZN": ReferenceQuote(175.28, 1.84, 173.44, 176.92, 172.85, 52_341_678),
    "META": ReferenceQuote(498.37, 7.82, 490.55, 501.24, 489.12, 18_743_299),
    "NVDA": ReferenceQuote(938.73, -12.45, 951.18, 956.84, 935.22, 24_657_891),
    "NFLX": ReferenceQuote(682.44, 4.67, 677.77, 685.92, 675.33, 8_234_567),
}


class SyntheticMarketData:
    STEP_VOLATILITY = 0.02
    MIN_PRICE = 1.0

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Clock = utc_now,
        quote_factory: Optional[QuoteFactory] = None,
    ) -> None:
        self._rng = rng or random.Random()
        self._clock = clock
        self._quote_factory = quote_factory or QuoteFactory(rng=self._rng, clock=clock)

    @property
    def rng(self) -> random.Random:
        return self._rng

    def base_price(self, symbol: str) -> float:
        reference = REFERENCE_QUOTES.get(symbol.upper())
        if reference is not None:
            return reference.price
        return 100 + self._rng.random() * 200

    # ------------------------------------------------------------------
    # Quotes
    # ------------------------------------------------------------------

    def generate_snapshot(self, symbol: str) -> PriceSnapshot:
        symbol = symbol.upper()
        now = self._clock()
        reference = REFERENCE_QUOTES.get(symbol)

        if reference is not None:
            price = round(reference.price + (self._rng.random() - 0.5) * 2, 2)
            change = reference.change
            open_price = reference.open
            high = max(reference.high, price)
            low = min(reference.low, price)
            volume = reference.volume
        else:
            price = round(self.base_price(symbol), 2)
            change = round((self._rng.random() - 0.5) * 2 * self.STEP_VOLATILITY * price, 2)
            open_price = round(price - change * self._rng.random(), 2)
            high = round(max(open_price, price) * (1 + self._rng.random() * 0.01), 2)
            low = round(min(open_price, price) * (1 - self._rng.random() * 0.01), 2)
            volume = self._rng.randrange(1_000_000, 51_000_000)

        previous_close = round(price - change, 2)
        change_percent = change / previous_close * 100 if previous_close else 0.0
        return PriceSnapshot(
            symbol=symbol,
            price=price,
            change=change,
            change_percent=round(change_percent, 2),
            open=open_price,
            high=high,
            low=low,
            volume=volume,
            previous_close=previous_close,
            latest_trading_day=now.isoformat(timespec="seconds"),
            source=SYNTHETIC_SOURCE,
        )

    def generate_quote(self, symbol: str) -> Quote:
        return self._quote_factory.build(self.generate_snapshot(symbol))

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def generate_history(self, symbol: str, period: Period) -> HistoricalSeries:
        """Random walk ending at the current time, one point per period step."""
        symbol = symbol.upper()
        now = self._clock()
        current = self.base_price(symbol)
        points: list[HistoricalPoint] = []

        for steps_back in range(period.point_count, -1, -1):
            moment: datetime = now - period.step * steps_back
            open_price = current
            move = (self._rng.random() - 0.5) * 2 * self.STEP_VOLATILITY * current
            current = max(self.MIN_PRICE, current + move)
            high = max(open_price, current) * (1 + self._rng.random() * 0.02)
            low = min(open_price, current) * (1 - self._rng.random() * 0.02)
            points.append(
                HistoricalPoint(
                    date=moment.isoformat(timespec="seconds"),
                    open=round(open_price, 2),
                    high=round(high, 2),
                    low=round(low, 2),
                    close=round(current, 2),
                    volume=self._rng.randrange(1_000_000, 51_000_000),
                )
            )

        return HistoricalSeries.from_points(symbol, period.value, points, SYNTHETIC_SOURCE)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def generate_comparison_record(self, symbol: str, period: Period) -> ComparisonRecord:
        """Fully synthetic stand-in for a symbol whose live comparison failed."""
        symbol = symbol.upper()
        series = self.generate_history(symbol, period)
        reference = REFERENCE_QUOTES.get(symbol)
        info = lookup_company(symbol)

        price = reference.price if reference else 100.0
        change = reference.change if reference else 0.0
        previous_close = price - change
        change_percent = change / previous_close * 100 if previous_close else 0.0

        logger.debug("synthetic_comparison_record", symbol=symbol, period=period.value)
        return ComparisonRecord(
            symbol=symbol,
            name=info.name,
            current_price=price,
            change=change,
            change_percent=format_change_percent(change_percent),
            is_positive=change >= 0,
            sector=info.sector,
            market_cap=int(price * 1_000_000_000),
            history=series.points,
            performance=compute_metrics(series.points),
            synthetic=True,
        )
