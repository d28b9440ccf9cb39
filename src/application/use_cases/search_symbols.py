"""
Use-case: search the static company table by symbol or name.
Results are cached under ``search:<lowercased query>`` for an hour.
"""

from src.application.services.cache_keys import SEARCH_TTL, search_key
from src.application.services.company_directory import search_companies
from src.domain.entities.cached_result import CachedResult
from src.domain.entities.company import SymbolMatch
from src.domain.errors import InvalidInput
from src.domain.ports.cache_port import ICache


class SearchSymbolsUseCase:
    def __init__(self, cache: ICache) -> None:
        self._cache = cache

    def execute(self, query: str) -> CachedResult[tuple[SymbolMatch, ...]]:
        if not isinstance(query, str) or not query.strip():
            raise InvalidInput("query must be a non-empty string")
        key = search_key(query.strip())

        cached, found = self._cache.get(key)
        if found:
            return CachedResult(data=cached, cached=True)

        matches = tuple(search_companies(query))
        self._cache.set(key, matches, SEARCH_TTL)
        return CachedResult(data=matches, cached=False)
