"""
Infrastructure adapter: in-process TTL cache → ICache.

Keys are hashed onto a fixed number of shards, each guarded by its own lock,
so lookups on different keys do not contend on one global lock. Expired
entries are dropped lazily on lookup. There is no size-based eviction.
"""

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict

import structlog

from src.domain.ports.cache_port import ICache

logger = structlog.get_logger(__name__)


@dataclass
class CacheEntry:
    """A single cache entry; its timestamps are only ever read by the cache."""

    key: str
    value: Any
    inserted_at: float
    ttl_seconds: float

    def is_live(self, now: float) -> bool:
        return now - self.inserted_at < self.ttl_seconds


class _Shard:
    def __init__(self) -> None:
        self.entries: Dict[str, CacheEntry] = {}
        self.lock = threading.Lock()


class InMemoryTTLCache(ICache):
    def __init__(
        self,
        shard_count: int = 16,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if shard_count < 1:
            raise ValueError("shard_count must be at least 1")
        self._shards = [_Shard() for _ in range(shard_count)]
        self._clock = clock
        self._stats_lock = threading.Lock()
        self._stats = {"hits": 0, "misses": 0, "expired": 0}

    def _shard_for(self, key: str) -> _Shard:
        return self._shards[hash(key) % len(self._shards)]

    def _count(self, name: str) -> None:
        with self._stats_lock:
            self._stats[name] += 1

    # ------------------------------------------------------------------
    # ICache interface
    # ------------------------------------------------------------------

    def get(self, key: str) -> tuple[Any, bool]:
        shard = self._shard_for(key)
        now = self._clock()
        with shard.lock:
            entry = shard.entries.get(key)
            if entry is not None and not entry.is_live(now):
                del shard.entries[key]
                expired = True
            else:
                expired = False

        if expired:
            self._count("expired")
            self._count("misses")
            return None, False
        if entry is None:
            self._count("misses")
            return None, False

        self._count("hits")
        logger.debug("cache_hit", key=key, age_seconds=round(now - entry.inserted_at, 1))
        return entry.value, True

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        entry = CacheEntry(key=key, value=value, inserted_at=self._clock(), ttl_seconds=ttl_seconds)
        shard = self._shard_for(key)
        with shard.lock:
            shard.entries[key] = entry
        logger.debug("cache_set", key=key, ttl_seconds=ttl_seconds)

    def delete(self, key: str) -> bool:
        shard = self._shard_for(key)
        with shard.lock:
            return shard.entries.pop(key, None) is not None

    def clear(self) -> None:
        for shard in self._shards:
            with shard.lock:
                shard.entries.clear()

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    def cleanup_expired(self) -> int:
        """Remove all expired entries. Returns the number removed."""
        now = self._clock()
        removed = 0
        for shard in self._shards:
            with shard.lock:
                stale = [k for k, e in shard.entries.items() if not e.is_live(now)]
                for key in stale:
                    del shard.entries[key]
                removed += len(stale)
        return removed

    @property
    def stats(self) -> Dict[str, int]:
        size = 0
        for shard in self._shards:
            with shard.lock:
                size += len(shard.entries)
        with self._stats_lock:
            return {**self._stats, "size": size}
