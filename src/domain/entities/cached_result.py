"""
Envelope returned by every market data use case.
``cached`` tells collaborators whether the payload was served from the cache.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CachedResult(Generic[T]):
    data: T
    cached: bool
