"""
HTTP response models.

Domain entities are snake_case dataclasses; the wire format consumed by the
frontend is camelCase (``bidPrice``, ``tradingHours.isOpen``,
``summary.correlationMatrix``). These models read the entities by attribute
and dump them by alias. Dict keys such as the symbols of the correlation
matrix are data, not field names, and are left untouched.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, TypeAdapter
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class TradingHoursView(CamelModel):
    is_open: bool
    next_open: str
    timezone: str


class QuoteView(CamelModel):
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
    trading_hours: TradingHoursView
    source: str


class HistoricalPointView(CamelModel):
    date: str
    open: float
    high: float
    low: float
    close: float
    volume: int


class SeriesMetaView(CamelModel):
    first_date: Optional[str]
    last_date: Optional[str]
    total_points: int


class HistoricalSeriesView(CamelModel):
    symbol: str
    period: str
    points: list[HistoricalPointView]
    meta: SeriesMetaView
    source: str


class PerformanceMetricsView(CamelModel):
    total_return: float
    volatility: float
    max_price: float
    min_price: float
    price_range: float
    sharpe_ratio: float


class ComparisonRecordView(CamelModel):
    symbol: str
    name: str
    current_price: float
    change: float
    change_percent: str
    is_positive: bool
    sector: str
    market_cap: int
    history: list[HistoricalPointView]
    performance: PerformanceMetricsView
    synthetic: bool


class ComparisonSummaryView(CamelModel):
    best_performer: str
    worst_performer: str
    average_return: float
    correlation_matrix: dict[str, dict[str, float]]


class ComparisonResultView(CamelModel):
    period: str
    symbols: list[str]
    stocks: list[ComparisonRecordView]
    summary: ComparisonSummaryView
    last_updated: str


class SymbolMatchView(CamelModel):
    symbol: str
    name: str
    type: str
    region: str
    sector: str
    industry: str


class AnalysisView(CamelModel):
    recommendation: str
    confidence: str
    price_target: float
    analyst_rating: int


class CompanyProfileView(CamelModel):
    quote: QuoteView
    analysis: AnalysisView


QUOTE = TypeAdapter(QuoteView)
QUOTE_LIST = TypeAdapter(list[QuoteView])
HISTORY = TypeAdapter(HistoricalSeriesView)
COMPARISON = TypeAdapter(ComparisonResultView)
SYMBOL_MATCHES = TypeAdapter(list[SymbolMatchView])
COMPANY_PROFILE = TypeAdapter(CompanyProfileView)


def dump_camel(adapter: TypeAdapter, value: Any) -> Any:
    """Validate a domain value by attribute and render it as camelCase JSON data."""
    view = adapter.validate_python(value, from_attributes=True)
    return adapter.dump_python(view, mode="json", by_alias=True)
