"""
Tests for the analytics engine.
"""

import math
import random

import pytest

from conftest import make_point
from src.application.services.analytics import compute_metrics, correlation_placeholder_matrix
from src.domain.entities.analytics import PerformanceMetrics


class TestComputeMetrics:
    def test_empty_series_is_all_zero(self):
        assert compute_metrics([]) == PerformanceMetrics()

    def test_single_point_is_all_zero(self):
        assert compute_metrics([make_point("2026-10-01", 100.0)]) == PerformanceMetrics()

    def test_constant_close(self):
        points = [make_point(f"2026-10-0{d}", 50.0) for d in range(1, 6)]

        metrics = compute_metrics(points)

        assert metrics.total_return == 0
        assert metrics.volatility == 0
        assert metrics.sharpe_ratio == 0
        assert metrics.price_range == 0

    def test_known_values(self):
        """Returns of 2% then 3%: mean 2.5, population stdev 0.5."""
        points = [
            make_point("2026-10-01", 100.0, high=101.0, low=99.0),
            make_point("2026-10-02", 102.0, high=104.0, low=100.0),
            make_point("2026-10-03", 105.06, high=106.0, low=103.0),
        ]

        metrics = compute_metrics(points)

        assert metrics.total_return == pytest.approx(5.06)
        assert metrics.volatility == pytest.approx(round(0.5 * math.sqrt(252), 2))
        assert metrics.sharpe_ratio == pytest.approx(5.0)
        assert metrics.max_price == 106.0
        assert metrics.min_price == 99.0
        assert metrics.price_range == pytest.approx(round(7 / 99 * 100, 2))

    def test_max_and_min_come_from_high_and_low(self):
        points = [
            make_point("2026-10-01", 10.0, high=30.0, low=5.0),
            make_point("2026-10-02", 11.0),
        ]

        metrics = compute_metrics(points)

        assert metrics.max_price == 30.0
        assert metrics.min_price == 5.0

    def test_symmetric_moves_have_zero_sharpe(self):
        points = [
            make_point("2026-10-01", 100.0),
            make_point("2026-10-02", 110.0),
            make_point("2026-10-03", 99.0),
        ]

        metrics = compute_metrics(points)

        assert metrics.total_return == pytest.approx(-1.0)
        assert metrics.volatility == pytest.approx(round(10 * math.sqrt(252), 2))
        assert metrics.sharpe_ratio == 0

    @pytest.mark.parametrize(
        "closes",
        [[100.0, 0.0, 50.0, 55.0], [0.0, 0.0, 0.0], [0.0, 10.0]],
    )
    def test_zero_close_keeps_metrics_finite(self, closes):
        points = [make_point(f"2026-10-{i + 1:02d}", close) for i, close in enumerate(closes)]

        metrics = compute_metrics(points)

        assert all(math.isfinite(value) for value in vars(metrics).values())

    def test_zero_close_step_is_skipped(self):
        points = [make_point(f"2026-10-{i + 1:02d}", c) for i, c in enumerate([100.0, 0.0, 50.0, 55.0])]

        metrics = compute_metrics(points)

        # Remaining daily returns are -100% and +10%.
        assert metrics.volatility == round(55.0 * math.sqrt(252), 2)
        assert metrics.total_return == -45.0


class TestCorrelationPlaceholderMatrix:
    def test_diagonal_is_one(self):
        matrix = correlation_placeholder_matrix(["AAPL", "MSFT", "TSLA"], random.Random(7))

        for symbol in ("AAPL", "MSFT", "TSLA"):
            assert matrix[symbol][symbol] == 1.0

    def test_off_diagonal_range(self):
        matrix = correlation_placeholder_matrix(["A", "B", "C", "D"], random.Random(7))

        values = [v for row, cols in matrix.items() for col, v in cols.items() if row != col]
        assert len(values) == 12
        assert all(0.3 <= v < 0.7 for v in values)
