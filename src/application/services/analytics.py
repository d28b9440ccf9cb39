"""
Analytics engine: pure functions over historical series.

No I/O and no caching. Inputs are ascending HistoricalPoint sequences as
returned by GetHistoryUseCase.
"""

import random
from typing import Sequence

import numpy as np

from src.domain.entities.analytics import PerformanceMetrics
from src.domain.entities.stock_price import HistoricalPoint

TRADING_DAYS_PER_YEAR = 252


def compute_metrics(points: Sequence[HistoricalPoint]) -> PerformanceMetrics:
    """Compute return, volatility, price range and Sharpe ratio for *points*.

    Fewer than two points yields all-zero metrics. Volatility is the
    population standard deviation of simple percentage returns, annualized
    with sqrt(252). The Sharpe ratio divides the mean daily return by that
    annualized volatility and multiplies by sqrt(252) again; this scaling is
    kept as-is so figures stay comparable with existing consumers.
    """
    if len(points) < 2:
        return PerformanceMetrics()

    closes = np.array([p.close for p in points], dtype=float)
    first_close, last_close = closes[0], closes[-1]
    total_return = (last_close - first_close) / first_close * 100 if first_close else 0.0

    # A zero close yields inf/NaN returns; those steps are left out.
    with np.errstate(divide="ignore", invalid="ignore"):
        daily_returns = np.diff(closes) / closes[:-1] * 100
    daily_returns = daily_returns[np.isfinite(daily_returns)]
    annualizer = np.sqrt(TRADING_DAYS_PER_YEAR)
    volatility = float(np.std(daily_returns)) * annualizer if daily_returns.size else 0.0
    sharpe = float(np.mean(daily_returns)) / volatility * annualizer if volatility > 0 else 0.0

    max_price = max(p.high for p in points)
    min_price = min(p.low for p in points)
    price_range = (max_price - min_price) / min_price * 100 if min_price else 0.0

    return PerformanceMetrics(
        total_return=round(float(total_return), 2),
        volatility=round(volatility, 2),
        max_price=round(max_price, 2),
        min_price=round(min_price, 2),
        price_range=round(price_range, 2),
        sharpe_ratio=round(sharpe, 2),
    )


def correlation_placeholder_matrix(
    symbols: Sequence[str],
    rng: random.Random,
) -> dict[str, dict[str, float]]:
    """Symbol x symbol matrix with 1.0 on the diagonal.

    Off-diagonal cells are independent draws in [0.3, 0.7), not a computed
    correlation, so matrix[a][b] and matrix[b][a] may differ.
    """
    matrix: dict[str, dict[str, float]] = {}
    for row in symbols:
        matrix[row] = {}
        for col in symbols:
            if row == col:
                matrix[row][col] = 1.0
            else:
                matrix[row][col] = round(0.3 + rng.random() * 0.4, 3)
    return matrix
