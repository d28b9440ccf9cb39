"""
Use-case: compare 2 to 5 symbols over one period.

Each symbol runs as an independent task on a thread pool sized to the symbol
count: quote, then history, then metrics. A task that fails for any reason,
or is still running when the overall deadline passes, is replaced by a fully
synthetic record; only invalid input aborts the comparison. The quote and
history use cases write to the cache only after building a complete value, so
abandoned tasks never leave partial entries behind.
"""

import random
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Optional, Sequence

import structlog

from src.application.services.analytics import compute_metrics, correlation_placeholder_matrix
from src.application.services.cache_keys import COMPARE_TTL, compare_key
from src.application.services.market_clock import Clock, utc_now
from src.application.services.symbols import normalize_symbol
from src.application.services.synthetic_data import SyntheticMarketData
from src.application.use_cases.get_history import GetHistoryUseCase
from src.application.use_cases.get_quote import GetQuoteUseCase
from src.domain.entities.analytics import ComparisonRecord, ComparisonResult, ComparisonSummary
from src.domain.entities.cached_result import CachedResult
from src.domain.entities.period import Period
from src.domain.errors import InvalidInput, OperationCancelled
from src.domain.ports.cache_port import ICache

logger = structlog.get_logger(__name__)


class CompareSymbolsUseCase:
    MIN_SYMBOLS = 2
    MAX_SYMBOLS = 5

    def __init__(
        self,
        quotes: GetQuoteUseCase,
        history: GetHistoryUseCase,
        synthetic: SyntheticMarketData,
        cache: ICache,
        timeout_seconds: float = 30.0,
        rng: Optional[random.Random] = None,
        clock: Clock = utc_now,
    ) -> None:
        """
        Args:
            timeout_seconds: Overall deadline for the per-symbol tasks.
            rng:             Source for the correlation placeholders; defaults
                             to the synthetic generator's random source.
        """
        self._quotes = quotes
        self._history = history
        self._synthetic = synthetic
        self._cache = cache
        self._timeout_seconds = timeout_seconds
        self._rng = rng or synthetic.rng
        self._clock = clock

    def execute(
        self,
        symbols: Sequence[str],
        period: Optional[str] = None,
    ) -> CachedResult[ComparisonResult]:
        """Compare *symbols* over *period* (default 1M).

        Raises:
            InvalidInput: on a non-list argument, blank symbols, fewer than 2
                          or more than 5 unique symbols, or a bad period.
        """
        normalized = self._validate_symbols(symbols)
        resolved_period = Period.parse(period)
        key = compare_key(normalized, resolved_period)

        cached, found = self._cache.get(key)
        if found:
            return CachedResult(data=cached, cached=True)

        logger.info("comparison_started", symbols=normalized, period=resolved_period.value)
        records = self._collect(normalized, resolved_period)
        result = ComparisonResult(
            period=resolved_period.value,
            symbols=tuple(normalized),
            stocks=tuple(records),
            summary=self._summarize(records),
            last_updated=self._clock().isoformat(timespec="seconds"),
        )

        self._cache.set(key, result, COMPARE_TTL)
        return CachedResult(data=result, cached=False)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _validate_symbols(self, symbols: Sequence[str]) -> list[str]:
        if isinstance(symbols, str) or not isinstance(symbols, (list, tuple)):
            raise InvalidInput("Please provide an array of stock symbols")
        if not symbols:
            raise InvalidInput("Please provide an array of stock symbols")
        if len(symbols) > self.MAX_SYMBOLS:
            raise InvalidInput(f"Maximum {self.MAX_SYMBOLS} stocks can be compared at once")

        normalized: list[str] = []
        for symbol in symbols:
            value = normalize_symbol(symbol)
            if value not in normalized:
                normalized.append(value)

        if len(normalized) < self.MIN_SYMBOLS:
            raise InvalidInput(f"At least {self.MIN_SYMBOLS} distinct symbols are required")
        return normalized

    # ------------------------------------------------------------------
    # Fan-out
    # ------------------------------------------------------------------

    def _collect(self, symbols: list[str], period: Period) -> list[ComparisonRecord]:
        cancelled = threading.Event()
        executor = ThreadPoolExecutor(max_workers=len(symbols), thread_name_prefix="compare")
        try:
            futures: dict[str, Future] = {
                symbol: executor.submit(self._compare_one, symbol, period, cancelled)
                for symbol in symbols
            }
            _, pending = wait(futures.values(), timeout=self._timeout_seconds)
            if pending:
                cancelled.set()
                for future in pending:
                    future.cancel()
                logger.warning(
                    "comparison_deadline_exceeded",
                    timeout_seconds=self._timeout_seconds,
                    pending=[s for s, f in futures.items() if f in pending],
                )
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        records: list[ComparisonRecord] = []
        for symbol, future in futures.items():
            if future in pending:
                records.append(self._synthetic.generate_comparison_record(symbol, period))
                continue
            try:
                records.append(future.result())
            except Exception as exc:
                logger.warning(
                    "comparison_symbol_failed",
                    symbol=symbol,
                    period=period.value,
                    error_type=type(exc).__name__,
                    error=str(exc),
                )
                records.append(self._synthetic.generate_comparison_record(symbol, period))
        return records

    def _compare_one(
        self,
        symbol: str,
        period: Period,
        cancelled: threading.Event,
    ) -> ComparisonRecord:
        quote = self._quotes.execute(symbol).data
        if cancelled.is_set():
            raise OperationCancelled(f"comparison task for {symbol} cancelled")
        series = self._history.execute(symbol, period.value).data
        if cancelled.is_set():
            raise OperationCancelled(f"comparison task for {symbol} cancelled")

        return ComparisonRecord(
            symbol=symbol,
            name=quote.name,
            current_price=quote.price,
            change=quote.change,
            change_percent=quote.change_percent,
            is_positive=quote.is_positive,
            sector=quote.sector or "Unknown",
            market_cap=quote.market_cap or 0,
            history=series.points,
            performance=compute_metrics(series.points),
        )

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------

    def _summarize(self, records: list[ComparisonRecord]) -> ComparisonSummary:
        best = worst = records[0]
        for record in records[1:]:
            if record.performance.total_return > best.performance.total_return:
                best = record
            if record.performance.total_return < worst.performance.total_return:
                worst = record

        average = sum(r.performance.total_return for r in records) / len(records)
        return ComparisonSummary(
            best_performer=best.symbol,
            worst_performer=worst.symbol,
            average_return=round(average, 2),
            correlation_matrix=correlation_placeholder_matrix(
                [r.symbol for r in records], self._rng
            ),
        )
