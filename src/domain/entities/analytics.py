"""
Domain entities for derived analytics and multi-symbol comparisons.
Zero external dependencies: pure Python dataclasses only.
"""

from dataclasses import dataclass

from src.domain.entities.stock_price import HistoricalPoint


@dataclass(frozen=True)
class PerformanceMetrics:
    total_return: float = 0.0
    volatility: float = 0.0
    max_price: float = 0.0
    min_price: float = 0.0
    price_range: float = 0.0
    sharpe_ratio: float = 0.0


@dataclass(frozen=True)
class ComparisonRecord:
    symbol: str
    name: str
    current_price: float
    change: float
    change_percent: str
    is_positive: bool
    sector: str
    market_cap: int
    history: tuple[HistoricalPoint, ...]
    performance: PerformanceMetrics
    synthetic: bool = False


@dataclass(frozen=True)
class ComparisonSummary:
    best_performer: str
    worst_performer: str
    average_return: float
    correlation_matrix: dict[str, dict[str, float]]


@dataclass(frozen=True)
class ComparisonResult:
    period: str
    symbols: tuple[str, ...]
    stocks: tuple[ComparisonRecord, ...]
    summary: ComparisonSummary
    last_updated: str
