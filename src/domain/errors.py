"""
Domain error hierarchy.

InvalidInput is the only error that reaches collaborators. SourceError and its
subclasses are raised by stock data adapters and are always absorbed by the
use cases, which fall back to synthetic data.
"""

from typing import Optional


class MarketDataError(Exception):
    """Base class for every error raised by the market data core."""


class InvalidInput(MarketDataError, ValueError):
    """Bad symbol, period or symbol count supplied by the caller."""


class SourceError(MarketDataError):
    """An upstream data source could not produce a usable result."""

    def __init__(
        self,
        message: str,
        provider: str = "",
        symbol: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.provider = provider
        self.symbol = symbol


class SourceUnavailable(SourceError):
    """Empty, malformed or error response from the provider."""


class SourceTimeout(SourceError):
    """The provider did not answer within the configured timeout."""


class SourceRateLimited(SourceError):
    """The provider signalled quota exhaustion."""


class OperationCancelled(MarketDataError):
    """A unit of work stopped early because its caller gave up on it."""
