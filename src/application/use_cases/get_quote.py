"""
Use-case: retrieve the current quote for a given symbol.

Cache-aside over ``quote:<SYMBOL>`` (60s). On a miss the configured stock data
provider is tried first; any provider error is logged and absorbed by falling
back to synthetic data, so an unknown symbol still yields a complete Quote.
Depends only on Domain ports, entities and application services.
"""

from typing import Optional

import structlog

from src.application.services.cache_keys import QUOTE_TTL, quote_key
from src.application.services.quote_factory import QuoteFactory
from src.application.services.symbols import normalize_symbol
from src.application.services.synthetic_data import SyntheticMarketData
from src.domain.entities.cached_result import CachedResult
from src.domain.entities.stock_price import Quote
from src.domain.ports.cache_port import ICache
from src.domain.ports.stock_data_port import IStockDataProvider

logger = structlog.get_logger(__name__)


class GetQuoteUseCase:
    def __init__(
        self,
        cache: ICache,
        synthetic: SyntheticMarketData,
        quote_factory: QuoteFactory,
        provider: Optional[IStockDataProvider] = None,
    ) -> None:
        """
        Args:
            provider: Live data source. ``None`` means no credential is
                      configured and every quote is synthesized.
        """
        self._cache = cache
        self._synthetic = synthetic
        self._quote_factory = quote_factory
        self._provider = provider

    def execute(self, symbol: str) -> CachedResult[Quote]:
        """Return the quote for *symbol* (uppercased), from cache when fresh.

        Raises:
            InvalidInput: if *symbol* is blank or too long.
        """
        symbol = normalize_symbol(symbol)
        key = quote_key(symbol)

        cached, found = self._cache.get(key)
        if found:
            return CachedResult(data=cached, cached=True)

        quote = self.resolve(symbol)
        self._cache.set(key, quote, QUOTE_TTL)
        return CachedResult(data=quote, cached=False)

    def resolve(self, symbol: str) -> Quote:
        """Live quote if the provider answers, synthetic otherwise. Never cached."""
        quote = self.fetch_live(symbol)
        if quote is None:
            quote = self._synthetic.generate_quote(symbol)
        return quote

    def fetch_live(self, symbol: str) -> Optional[Quote]:
        """Ask the provider only; ``None`` when unconfigured or on any source failure."""
        if self._provider is None:
            logger.debug("quote_provider_not_configured", symbol=symbol)
            return None
        try:
            return self._quote_factory.build(self._provider.fetch_quote(symbol))
        except Exception as exc:
            logger.warning(
                "quote_source_failed",
                symbol=symbol,
                provider=getattr(exc, "provider", "") or self._provider.name,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return None
