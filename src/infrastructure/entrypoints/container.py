"""
Composition Root: wires infrastructure adapters into the market data use cases.

One cache instance is created here and handed to every use case that needs
it; nothing in the application layer reaches for a process-wide global.
"""

import random
from dataclasses import dataclass
from typing import Any, Optional

import structlog

from src.application.services.market_clock import Clock, utc_now
from src.application.services.quote_factory import QuoteFactory
from src.application.services.synthetic_data import SyntheticMarketData
from src.application.use_cases.compare_symbols import CompareSymbolsUseCase
from src.application.use_cases.get_company_profile import GetCompanyProfileUseCase
from src.application.use_cases.get_history import GetHistoryUseCase
from src.application.use_cases.get_quote import GetQuoteUseCase
from src.application.use_cases.get_trending import GetTrendingUseCase
from src.application.use_cases.search_symbols import SearchSymbolsUseCase
from src.domain.ports.cache_port import ICache
from src.domain.ports.stock_data_port import IStockDataProvider
from src.infrastructure.cache.memory_cache import InMemoryTTLCache
from src.infrastructure.config.settings import Settings
from src.infrastructure.stock_data.alpha_vantage_adapter import AlphaVantageStockDataProvider
from src.infrastructure.stock_data.yfinance_adapter import YFinanceStockDataProvider

logger = structlog.get_logger(__name__)

_FROM_SETTINGS: Any = object()


@dataclass(frozen=True)
class MarketDataServices:
    cache: ICache
    provider: Optional[IStockDataProvider]
    synthetic: SyntheticMarketData
    quotes: GetQuoteUseCase
    history: GetHistoryUseCase
    compare: CompareSymbolsUseCase
    search: SearchSymbolsUseCase
    company: GetCompanyProfileUseCase
    trending: GetTrendingUseCase


def build_provider(settings: Settings) -> Optional[IStockDataProvider]:
    """Select the live data source; ``None`` means full-synthetic mode."""
    if settings.stock_data_provider == "yfinance":
        return YFinanceStockDataProvider(timeout=settings.upstream_timeout_seconds)
    if settings.stock_data_provider == "alpha_vantage" and settings.alpha_vantage_api_key:
        return AlphaVantageStockDataProvider(
            api_key=settings.alpha_vantage_api_key,
            base_url=settings.alpha_vantage_base_url,
            timeout=settings.upstream_timeout_seconds,
        )
    if settings.stock_data_provider == "alpha_vantage":
        logger.warning("alpha_vantage_key_missing", mode="synthetic")
    return None


def build_services(
    settings: Settings,
    cache: Optional[ICache] = None,
    provider: Optional[IStockDataProvider] = _FROM_SETTINGS,
    rng: Optional[random.Random] = None,
    clock: Clock = utc_now,
) -> MarketDataServices:
    """Build every use case around one shared cache.

    Args:
        settings: Runtime configuration.
        cache:    Cache to share; a fresh InMemoryTTLCache when omitted.
        provider: Live source override. Pass ``None`` to force synthetic mode;
                  omit to select one from *settings*.
        rng:      Random source for synthetic data and heuristic estimates.
                  Seed it for reproducible output.
        clock:    Wall clock returning timezone-aware datetimes.
    """
    cache = cache or InMemoryTTLCache()
    if provider is _FROM_SETTINGS:
        provider = build_provider(settings)
    rng = rng or random.Random()

    quote_factory = QuoteFactory(rng=rng, clock=clock)
    synthetic = SyntheticMarketData(rng=rng, clock=clock, quote_factory=quote_factory)
    quotes = GetQuoteUseCase(cache, synthetic, quote_factory, provider=provider)
    history = GetHistoryUseCase(cache, synthetic, provider=provider, clock=clock)

    return MarketDataServices(
        cache=cache,
        provider=provider,
        synthetic=synthetic,
        quotes=quotes,
        history=history,
        compare=CompareSymbolsUseCase(
            quotes,
            history,
            synthetic,
            cache,
            timeout_seconds=settings.compare_timeout_seconds,
            clock=clock,
        ),
        search=SearchSymbolsUseCase(cache),
        company=GetCompanyProfileUseCase(quotes, synthetic, cache),
        trending=GetTrendingUseCase(quotes, synthetic, cache),
    )
