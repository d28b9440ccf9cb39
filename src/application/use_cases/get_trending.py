"""
Use-case: quotes for a fixed list of trending symbols.

Live quotes are fetched concurrently; symbols whose source fails are skipped.
With fewer than three live quotes the list is rebuilt from the first four
reference symbols of the synthetic generator. Cached for three minutes.
"""

from concurrent.futures import ThreadPoolExecutor

import structlog

from src.application.services.cache_keys import TRENDING_KEY, TRENDING_TTL
from src.application.services.synthetic_data import REFERENCE_QUOTES, SyntheticMarketData
from src.application.use_cases.get_quote import GetQuoteUseCase
from src.domain.entities.cached_result import CachedResult
from src.domain.entities.stock_price import Quote
from src.domain.ports.cache_port import ICache

logger = structlog.get_logger(__name__)

TRENDING_SYMBOLS = ("AAPL", "GOOGL", "MSFT", "TSLA", "AMZN")


class GetTrendingUseCase:
    MIN_LIVE_QUOTES = 3
    SYNTHETIC_COUNT = 4

    def __init__(
        self,
        quotes: GetQuoteUseCase,
        synthetic: SyntheticMarketData,
        cache: ICache,
    ) -> None:
        self._quotes = quotes
        self._synthetic = synthetic
        self._cache = cache

    def execute(self) -> CachedResult[tuple[Quote, ...]]:
        cached, found = self._cache.get(TRENDING_KEY)
        if found:
            return CachedResult(data=cached, cached=True)

        with ThreadPoolExecutor(max_workers=len(TRENDING_SYMBOLS)) as executor:
            live = [q for q in executor.map(self._quotes.fetch_live, TRENDING_SYMBOLS) if q]

        if len(live) >= self.MIN_LIVE_QUOTES:
            quotes = tuple(live)
        else:
            logger.info("trending_using_synthetic", live_quotes=len(live))
            fallback = list(REFERENCE_QUOTES)[: self.SYNTHETIC_COUNT]
            quotes = tuple(self._synthetic.generate_quote(s) for s in fallback)

        self._cache.set(TRENDING_KEY, quotes, TRENDING_TTL)
        return CachedResult(data=quotes, cached=False)
