"""
Application service: turns a PriceSnapshot into a fully derived Quote.

Owns the quote derivations shared by live and synthetic data:
  - spread, bid and ask from the last price;
  - heuristic fundamentals (market cap, P/E, dividend yield, 52-week band).
The fundamentals are estimates, not looked up; randomness comes from the
injected ``random.Random`` so tests can pin the output with a seed.
"""

import math
import random
from typing import Optional

from src.application.services.company_directory import lookup_company
from src.application.services.market_clock import Clock, trading_hours, utc_now
from src.domain.entities.stock_price import PriceSnapshot, Quote

MIN_SPREAD = 0.01
SPREAD_RATE = 0.0002


def compute_spread(price: float) -> float:
    return max(MIN_SPREAD, price * SPREAD_RATE)


def format_change_percent(change_percent: float) -> str:
    return f"{change_percent:.2f}%"


class QuoteFactory:
    def __init__(self, rng: Optional[random.Random] = None, clock: Clock = utc_now) -> None:
        self._rng = rng or random.Random()
        self._clock = clock

    def build(self, snapshot: PriceSnapshot) -> Quote:
        price = snapshot.price
        spread = compute_spread(price)
        bid = max(0.0, price - spread / 2)
        ask = price + spread / 2

        info = lookup_company(snapshot.symbol)
        estimated_shares = 1_000_000_000 if price > 100 else 2_000_000_000

        return Quote(
            symbol=snapshot.symbol.upper(),
            name=info.name,
            description=f"{info.name} is a leading company in the {info.sector} sector.",
            sector=info.sector,
            industry=info.industry,
            price=price,
            bid_price=bid,
            ask_price=ask,
            spread=spread,
            change=snapshot.change,
            change_percent=format_change_percent(snapshot.change_percent),
            open=snapshot.open,
            high=snapshot.high,
            low=snapshot.low,
            volume=int(snapshot.volume),
            previous_close=snapshot.previous_close,
            market_cap=math.floor(price * estimated_shares),
            pe=round(15 + self._rng.random() * 25, 2),
            dividend_yield=round(self._rng.random() * 4, 2),
            week52_high=round(snapshot.high * (1.1 + self._rng.random() * 0.3), 2),
            week52_low=round(snapshot.low * (0.7 + self._rng.random() * 0.2), 2),
            is_positive=snapshot.change >= 0,
            last_updated=snapshot.latest_trading_day,
            trading_hours=trading_hours(self._clock()),
            source=snapshot.source,
        )
