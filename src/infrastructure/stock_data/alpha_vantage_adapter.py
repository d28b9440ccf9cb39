"""
Infrastructure adapter: Alpha Vantage REST API → IStockDataProvider.
All Alpha Vantage specifics (query functions, numbered field names, quota
notes) are confined here; the rest of the codebase depends only on
IStockDataProvider.

Every failure is raised as a SourceError subclass:
  - timeouts as SourceTimeout;
  - "Note" / "Information" quota messages as SourceRateLimited;
  - everything else (HTTP errors, "Error Message", empty or malformed
    payloads) as SourceUnavailable.
"""

from typing import Any, Optional

import httpx
import structlog
from pydantic import ValidationError

from src.domain.entities.period import Period
from src.domain.entities.stock_price import HistoricalPoint, HistoricalSeries, PriceSnapshot
from src.domain.errors import SourceRateLimited, SourceTimeout, SourceUnavailable
from src.domain.ports.stock_data_port import IStockDataProvider
from src.infrastructure.stock_data.alpha_vantage_schema import (
    TIME_SERIES_KEYS,
    GlobalQuote,
    time_series_adapter,
)

logger = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://www.alphavantage.co/query"


class AlphaVantageStockDataProvider(IStockDataProvider):
    """Fetches quotes and daily/intraday series from Alpha Vantage."""

    INTRADAY_INTERVAL = "15min"

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        """
        Args:
            client: Pre-configured httpx.Client (tests pass one built on
                    httpx.MockTransport). A new client is created otherwise.
        """
        self._api_key = api_key
        self._base_url = base_url
        self._client = client or httpx.Client(timeout=timeout)

    @property
    def name(self) -> str:
        return "alpha_vantage"

    def close(self) -> None:
        self._client.close()

    # ------------------------------------------------------------------
    # IStockDataProvider interface
    # ------------------------------------------------------------------

    def fetch_quote(self, symbol: str) -> PriceSnapshot:
        payload = self._request({"function": "GLOBAL_QUOTE", "symbol": symbol}, symbol)

        raw_quote = payload.get("Global Quote")
        if not raw_quote:
            raise SourceUnavailable(
                f"No quote data found for symbol {symbol!r}", provider=self.name, symbol=symbol
            )
        try:
            quote = GlobalQuote.model_validate(raw_quote)
        except ValidationError as exc:
            raise SourceUnavailable(
                f"Malformed quote payload for {symbol!r}: {exc.error_count()} invalid field(s)",
                provider=self.name,
                symbol=symbol,
            ) from exc

        return PriceSnapshot(
            symbol=symbol.upper(),
            price=quote.price,
            change=quote.change,
            change_percent=quote.change_percent,
            open=quote.open,
            high=quote.high,
            low=quote.low,
            volume=quote.volume,
            previous_close=quote.previous_close,
            latest_trading_day=quote.latest_trading_day,
            source=self.name,
        )

    def fetch_history(self, symbol: str, period: Period) -> HistoricalSeries:
        payload = self._request(self.history_params(symbol, period), symbol)

        raw_series = next((payload[k] for k in TIME_SERIES_KEYS if payload.get(k)), None)
        if raw_series is None:
            raise SourceUnavailable(
                f"No historical data found for symbol {symbol!r}",
                provider=self.name,
                symbol=symbol,
            )
        try:
            bars = time_series_adapter.validate_python(raw_series)
        except ValidationError as exc:
            raise SourceUnavailable(
                f"Malformed time series for {symbol!r}: {exc.error_count()} invalid field(s)",
                provider=self.name,
                symbol=symbol,
            ) from exc

        points = [
            HistoricalPoint(
                date=date,
                open=bar.open,
                high=bar.high,
                low=bar.low,
                close=bar.close,
                volume=bar.volume,
            )
            for date, bar in sorted(bars.items())
        ]
        return HistoricalSeries.from_points(symbol.upper(), period.value, points, self.name)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def history_params(self, symbol: str, period: Period) -> dict[str, str]:
        """Intraday bars for 1D/1W, daily otherwise; full output for 1D/1W/1Y/5Y."""
        if period.is_intraday:
            return {
                "function": "TIME_SERIES_INTRADAY",
                "symbol": symbol,
                "interval": self.INTRADAY_INTERVAL,
                "outputsize": "full",
            }
        full = period in (Period.ONE_YEAR, Period.FIVE_YEARS)
        return {
            "function": "TIME_SERIES_DAILY",
            "symbol": symbol,
            "outputsize": "full" if full else "compact",
        }

    def _request(self, params: dict[str, str], symbol: str) -> dict[str, Any]:
        try:
            response = self._client.get(
                self._base_url, params={**params, "apikey": self._api_key}
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.TimeoutException as exc:
            raise SourceTimeout(
                f"Alpha Vantage timed out for {symbol!r}", provider=self.name, symbol=symbol
            ) from exc
        except httpx.HTTPError as exc:
            raise SourceUnavailable(
                f"Alpha Vantage request failed: {exc}", provider=self.name, symbol=symbol
            ) from exc
        except ValueError as exc:
            raise SourceUnavailable(
                "Alpha Vantage returned a non-JSON body", provider=self.name, symbol=symbol
            ) from exc

        if not isinstance(payload, dict) or not payload:
            raise SourceUnavailable(
                "Alpha Vantage returned an empty response", provider=self.name, symbol=symbol
            )
        if "Error Message" in payload:
            raise SourceUnavailable(
                str(payload["Error Message"]), provider=self.name, symbol=symbol
            )
        for quota_key in ("Note", "Information"):
            if quota_key in payload:
                raise SourceRateLimited(
                    str(payload[quota_key]), provider=self.name, symbol=symbol
                )

        logger.debug("alpha_vantage_response", function=params.get("function"), symbol=symbol)
        return payload
