"""
Port (interface) for external stock data sources.
Infrastructure adapters (e.g. AlphaVantageStockDataProvider) must implement this interface.

Adapters perform no caching and no fallback. On failure they raise one of
SourceUnavailable, SourceTimeout or SourceRateLimited.
"""

from abc import ABC, abstractmethod

from src.domain.entities.period import Period
from src.domain.entities.stock_price import HistoricalSeries, PriceSnapshot


class IStockDataProvider(ABC):
    @property
    @abstractmethod
    def name(self) -> str:
        """Short provider identifier used in logs and in the ``source`` field."""
        ...

    @abstractmethod
    def fetch_quote(self, symbol: str) -> PriceSnapshot: ...

    @abstractmethod
    def fetch_history(self, symbol: str, period: Period) -> HistoricalSeries:
        """Fetch the provider's raw series for *period*, sorted ascending.

        Filtering to the period's lookback window is the caller's job.
        """
        ...
