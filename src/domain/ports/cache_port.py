"""
Port (interface) for the key/value cache shared by the market data use cases.
Infrastructure adapters (e.g. InMemoryTTLCache) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Any


class ICache(ABC):
    @abstractmethod
    def get(self, key: str) -> tuple[Any, bool]:
        """Return ``(value, True)`` for a live entry, ``(None, False)`` otherwise."""
        ...

    @abstractmethod
    def set(self, key: str, value: Any, ttl_seconds: float) -> None: ...

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove *key*. Returns True if an entry existed."""
        ...

    @abstractmethod
    def clear(self) -> None: ...
