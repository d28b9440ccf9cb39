"""
Use-case: retrieve the historical OHLCV series of a symbol for a period.

Cache-aside over ``history:<SYMBOL>:<PERIOD>`` (30 min). Provider series are
clipped to the period's lookback window anchored at "now"; synthetic series
already cover exactly that window. Output points are ascending with unique
dates, and an empty series after clipping is a valid result. Any provider
error is logged and replaced by the synthetic series.
"""

from datetime import datetime
from typing import Optional

import structlog

from src.application.services.cache_keys import HISTORY_TTL, history_key
from src.application.services.market_clock import Clock, parse_point_time, utc_now
from src.application.services.symbols import normalize_symbol
from src.application.services.synthetic_data import SyntheticMarketData
from src.domain.entities.cached_result import CachedResult
from src.domain.entities.period import Period
from src.domain.entities.stock_price import HistoricalPoint, HistoricalSeries
from src.domain.ports.cache_port import ICache
from src.domain.ports.stock_data_port import IStockDataProvider

logger = structlog.get_logger(__name__)


class GetHistoryUseCase:
    def __init__(
        self,
        cache: ICache,
        synthetic: SyntheticMarketData,
        provider: Optional[IStockDataProvider] = None,
        clock: Clock = utc_now,
    ) -> None:
        self._cache = cache
        self._synthetic = synthetic
        self._provider = provider
        self._clock = clock

    def execute(
        self,
        symbol: str,
        period: Optional[str] = None,
    ) -> CachedResult[HistoricalSeries]:
        """Fetch the series for *symbol* over *period* (default 1M).

        Raises:
            InvalidInput: if *symbol* is blank or *period* is not one of
                          1D, 1W, 1M, 3M, 6M, 1Y, 5Y.
        """
        symbol = normalize_symbol(symbol)
        resolved_period = Period.parse(period)
        key = history_key(symbol, resolved_period)

        cached, found = self._cache.get(key)
        if found:
            return CachedResult(data=cached, cached=True)

        series = self._fetch_live(symbol, resolved_period)
        if series is None:
            series = self._synthetic.generate_history(symbol, resolved_period)
        series = self._normalize(series)

        self._cache.set(key, series, HISTORY_TTL)
        return CachedResult(data=series, cached=False)

    def _fetch_live(self, symbol: str, period: Period) -> Optional[HistoricalSeries]:
        if self._provider is None:
            logger.debug("history_provider_not_configured", symbol=symbol)
            return None
        try:
            series = self._provider.fetch_history(symbol, period)
            return self._clip_to_window(series, period, self._clock())
        except Exception as exc:
            logger.warning(
                "history_source_failed",
                symbol=symbol,
                period=period.value,
                provider=getattr(exc, "provider", "") or self._provider.name,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return None

    @staticmethod
    def _clip_to_window(
        series: HistoricalSeries,
        period: Period,
        now: datetime,
    ) -> HistoricalSeries:
        cutoff = now - period.window
        kept = [p for p in series.points if parse_point_time(p.date) >= cutoff]
        return HistoricalSeries.from_points(series.symbol, period.value, kept, series.source)

    @staticmethod
    def _normalize(series: HistoricalSeries) -> HistoricalSeries:
        """Sort ascending and drop repeated dates, keeping the first occurrence."""
        ordered = sorted(series.points, key=lambda p: parse_point_time(p.date))
        unique: list[HistoricalPoint] = []
        last_seen: Optional[datetime] = None
        for point in ordered:
            moment = parse_point_time(point.date)
            if last_seen is not None and moment == last_seen:
                continue
            unique.append(point)
            last_seen = moment
        return HistoricalSeries.from_points(series.symbol, series.period, unique, series.source)
