"""
Tests for quote derivations and the market clock.
"""

import random
from datetime import datetime, timezone

import pytest

from conftest import fixed_clock, make_snapshot
from src.application.services.market_clock import is_market_open, next_market_open
from src.application.services.quote_factory import QuoteFactory, compute_spread


class TestSpread:
    def test_minimum_spread(self):
        assert compute_spread(10.0) == 0.01

    def test_proportional_spread(self):
        assert compute_spread(195.89) == pytest.approx(195.89 * 0.0002)


class TestQuoteFactory:
    def build(self, **kwargs):
        factory = QuoteFactory(rng=random.Random(11), clock=fixed_clock)
        return factory.build(make_snapshot(**kwargs))

    def test_bid_ask_around_price(self):
        quote = self.build(price=200.0)

        assert quote.spread == pytest.approx(0.04)
        assert quote.bid_price == pytest.approx(199.98)
        assert quote.ask_price == pytest.approx(200.02)
        assert quote.ask_price >= quote.bid_price >= 0

    def test_bid_never_negative(self):
        quote = self.build(price=0.004, change=0.0)

        assert quote.bid_price == 0.0
        assert quote.ask_price > quote.bid_price

    def test_change_fields(self):
        down = self.build(price=142.56, change=-0.89)
        flat = self.build(price=50.0, change=0.0)

        assert down.is_positive is False
        assert down.change_percent == f"{-0.89 / (142.56 + 0.89) * 100:.2f}%"
        assert flat.is_positive is True
        assert flat.change_percent == "0.00%"

    def test_market_cap_estimate(self):
        assert self.build(price=200.0).market_cap == 200_000_000_000
        assert self.build(price=50.0).market_cap == 100_000_000_000

    def test_company_details(self):
        quote = self.build(symbol="aapl")

        assert quote.symbol == "AAPL"
        assert quote.name == "Apple Inc."
        assert quote.industry == "Consumer Electronics"
        assert "Technology sector" in quote.description

    def test_fundamental_ranges(self):
        quote = self.build(price=200.0)

        assert 15 <= quote.pe < 40
        assert 0 <= quote.dividend_yield < 4
        assert quote.week52_high >= quote.high * 1.1 - 0.01
        assert quote.week52_low <= quote.low * 0.9 + 0.01


class TestMarketClock:
    def test_open_on_weekday_morning(self):
        assert is_market_open(datetime(2026, 10, 19, 15, 0, tzinfo=timezone.utc)) is True

    def test_closed_on_weekend(self):
        assert is_market_open(datetime(2026, 10, 18, 15, 0, tzinfo=timezone.utc)) is False

    def test_closed_after_hours(self):
        assert is_market_open(datetime(2026, 10, 19, 21, 0, tzinfo=timezone.utc)) is False

    def test_next_open_is_following_day(self):
        assert next_market_open(datetime(2026, 10, 19, 15, 0, tzinfo=timezone.utc)).startswith(
            "2026-10-20T09:30:00"
        )
