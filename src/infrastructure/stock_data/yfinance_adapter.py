"""
Infrastructure adapter: yfinance → IStockDataProvider.
All yfinance-specific details (ticker.info, fast_info, history()) are confined here;
the rest of the codebase depends only on IStockDataProvider.

Keyless alternate source, selected with STOCK_DATA_PROVIDER=yfinance. yfinance
raises a wide variety of library and network errors; they are all reported as
SourceUnavailable so the use cases can fall back to synthetic data. Bars
with missing values are dropped.
"""

import math
from datetime import date as date_type
from typing import Any

import yfinance as yf

from src.domain.entities.period import Period
from src.domain.entities.stock_price import HistoricalPoint, HistoricalSeries, PriceSnapshot
from src.domain.errors import SourceUnavailable
from src.domain.ports.stock_data_port import IStockDataProvider

# Period -> (yfinance period, yfinance interval)
_HISTORY_REQUESTS = {
    Period.ONE_DAY: ("1d", "60m"),
    Period.ONE_WEEK: ("5d", "60m"),
    Period.ONE_MONTH: ("1mo", "1d"),
    Period.THREE_MONTHS: ("3mo", "1d"),
    Period.SIX_MONTHS: ("6mo", "1d"),
    Period.ONE_YEAR: ("1y", "1d"),
    Period.FIVE_YEARS: ("5y", "1d"),
}

_BAR_COLUMNS = ["Open", "High", "Low", "Close", "Volume"]


class YFinanceStockDataProvider(IStockDataProvider):
    """Fetches stock market data from Yahoo Finance via the yfinance library."""

    def __init__(self, timeout: float = 10.0) -> None:
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "yfinance"

    def fetch_quote(self, symbol: str) -> PriceSnapshot:
        try:
            ticker = yf.Ticker(symbol)
            info = ticker.info
            fast_info = ticker.fast_info
            current_price = getattr(fast_info, "last_price", None) or info.get("currentPrice")
            previous_close = (
                getattr(fast_info, "previous_close", None) or info.get("previousClose")
            )
            if current_price is None or math.isnan(float(current_price)):
                raise SourceUnavailable(
                    f"No price data available for symbol: {symbol!r}",
                    provider=self.name,
                    symbol=symbol,
                )

            price = round(float(current_price), 4)
            previous_close = _as_float(previous_close, price) or price
            change = round(price - previous_close, 4)
            return PriceSnapshot(
                symbol=symbol.upper(),
                price=price,
                change=change,
                change_percent=round(change / previous_close * 100, 4),
                open=_as_float(info.get("open"), price),
                high=_as_float(info.get("dayHigh"), price),
                low=_as_float(info.get("dayLow"), price),
                volume=int(_as_float(info.get("volume"), 0.0)),
                previous_close=previous_close,
                latest_trading_day=date_type.today().isoformat(),
                source=self.name,
            )
        except SourceUnavailable:
            raise
        except Exception as exc:
            raise SourceUnavailable(
                f"yfinance quote lookup failed: {exc}", provider=self.name, symbol=symbol
            ) from exc

    def fetch_history(self, symbol: str, period: Period) -> HistoricalSeries:
        yf_period, interval = _HISTORY_REQUESTS[period]
        timestamp_format = "%Y-%m-%dT%H:%M:%S%z" if interval.endswith("m") else "%Y-%m-%d"
        try:
            history = yf.Ticker(symbol).history(
                period=yf_period, interval=interval, timeout=self._timeout
            )
            # Yahoo pads sessions without trades with NaN bars.
            bars = history.dropna(subset=_BAR_COLUMNS)
            points = [
                HistoricalPoint(
                    date=_format_timestamp(moment, timestamp_format),
                    open=round(float(row["Open"]), 4),
                    high=round(float(row["High"]), 4),
                    low=round(float(row["Low"]), 4),
                    close=round(float(row["Close"]), 4),
                    volume=int(row["Volume"]),
                )
                for moment, row in bars.iterrows()
            ]
        except Exception as exc:
            raise SourceUnavailable(
                f"yfinance history lookup failed: {exc}", provider=self.name, symbol=symbol
            ) from exc

        if not points:
            raise SourceUnavailable(
                f"No historical data available for symbol: {symbol!r}",
                provider=self.name,
                symbol=symbol,
            )
        return HistoricalSeries.from_points(symbol.upper(), period.value, points, self.name)


def _as_float(value: Any, default: float) -> float:
    if value is None:
        return default
    number = float(value)
    return default if math.isnan(number) else number


def _format_timestamp(moment: Any, fmt: str) -> str:
    text = moment.strftime(fmt)
    # strftime renders +0000; fromisoformat on older interpreters wants +00:00
    if fmt.endswith("%z") and len(text) > 5 and text[-5] in "+-":
        text = f"{text[:-2]}:{text[-2:]}"
    return text
