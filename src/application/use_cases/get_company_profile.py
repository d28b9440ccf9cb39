"""
Use-case: company detail view, a quote plus a heuristic analyst block.

Cached under ``company:<SYMBOL>`` for 30 minutes, independently of the quote
cache. The analyst figures are estimates, not looked up anywhere.
"""

import random
from typing import Optional

from src.application.services.cache_keys import COMPANY_TTL, company_key
from src.application.services.symbols import normalize_symbol
from src.application.services.synthetic_data import SyntheticMarketData
from src.application.use_cases.get_quote import GetQuoteUseCase
from src.domain.entities.cached_result import CachedResult
from src.domain.entities.company import AnalystView, CompanyProfile
from src.domain.entities.stock_price import Quote
from src.domain.ports.cache_port import ICache


class GetCompanyProfileUseCase:
    def __init__(
        self,
        quotes: GetQuoteUseCase,
        synthetic: SyntheticMarketData,
        cache: ICache,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._quotes = quotes
        self._synthetic = synthetic
        self._cache = cache
        self._rng = rng or synthetic.rng

    def execute(self, symbol: str) -> CachedResult[CompanyProfile]:
        symbol = normalize_symbol(symbol)
        key = company_key(symbol)

        cached, found = self._cache.get(key)
        if found:
            return CachedResult(data=cached, cached=True)

        quote = self._quotes.fetch_live(symbol)
        if quote is not None:
            analysis = self._estimate_live(quote)
        else:
            quote = self._synthetic.generate_quote(symbol)
            analysis = self._estimate_synthetic(quote)

        profile = CompanyProfile(quote=quote, analysis=analysis)
        self._cache.set(key, profile, COMPANY_TTL)
        return CachedResult(data=profile, cached=False)

    def _estimate_live(self, quote: Quote) -> AnalystView:
        return AnalystView(
            recommendation="BUY" if quote.change >= 0 else "HOLD",
            confidence="MEDIUM",
            price_target=round(quote.price * (1 + (self._rng.random() * 0.2 - 0.1)), 2),
            analyst_rating=self._rng.randint(1, 5),
        )

    @staticmethod
    def _estimate_synthetic(quote: Quote) -> AnalystView:
        return AnalystView(
            recommendation="BUY",
            confidence="HIGH",
            price_target=round(quote.price * 1.15, 2),
            analyst_rating=4,
        )
