"""
core/data/subnets/cache.py - TTL-based subnet cache

In-memory cache keyed by cluster name. Every entry carries its own expiry,
checked on each read, and a background thread sweeps expired entries at a
fixed interval independent of the TTL.
"""

from __future__ import annotations

import fnmatch
import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from core.config import settings

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """Single cache entry with its expiry"""

    value: Any
    created_at: float
    ttl_seconds: float
    key: str = ""

    @property
    def expires_at(self) -> float:
        return self.created_at + self.ttl_seconds

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class SubnetCache:
    """Thread-safe TTL cache with periodic background eviction

    Example:
        cache = SubnetCache(ttl_seconds=60, cleanup_interval=600)

        cache.set("my-cluster", subnets)
        subnets, found = cache.get("my-cluster")

        cache.close()  # stop the sweeper thread
    """

    def __init__(
        self,
        ttl_seconds: float | None = None,
        cleanup_interval: float | None = None,
        clock: Callable[[], float] = time.monotonic,
        start_sweeper: bool = True,
    ):
        """Initialize cache

        Args:
            ttl_seconds: Default TTL (settings.CACHE_TTL_SECONDS if not given)
            cleanup_interval: Seconds between sweeps (settings.CACHE_CLEANUP_INTERVAL_SECONDS)
            clock: Monotonic time source, injectable for tests
            start_sweeper: Start the background sweep thread immediately
        """
        self._ttl = ttl_seconds if ttl_seconds is not None else settings.CACHE_TTL_SECONDS
        self._cleanup_interval = (
            cleanup_interval if cleanup_interval is not None else settings.CACHE_CLEANUP_INTERVAL_SECONDS
        )
        if self._ttl <= 0:
            raise ValueError("ttl_seconds must be positive")
        if self._cleanup_interval <= 0:
            raise ValueError("cleanup_interval must be positive")

        self._clock = clock
        self._cache: dict[str, CacheEntry] = {}
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0

        self._stop_event = threading.Event()
        self._sweeper: threading.Thread | None = None
        if start_sweeper:
            self.start()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    @property
    def cleanup_interval(self) -> float:
        return self._cleanup_interval

    def get(self, key: str) -> tuple[Any, bool]:
        """Get cached value if present and not expired

        Returns:
            (value, True) on hit, (None, False) when absent or expired
        """
        with self._lock:
            entry = self._cache.get(key)

            if entry is None:
                self._misses += 1
                return None, False

            if entry.is_expired(self._clock()):
                del self._cache[key]
                self._misses += 1
                return None, False

            self._hits += 1
            return entry.value, True

    def set(self, key: str, value: Any, ttl_seconds: float | None = None) -> None:
        """Store value, replacing any existing entry and resetting its expiry"""
        with self._lock:
            self._cache[key] = CacheEntry(
                key=key,
                value=value,
                created_at=self._clock(),
                ttl_seconds=ttl_seconds or self._ttl,
            )

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._cache.pop(key, None) is not None

    def invalidate(self, pattern: str = "*") -> int:
        """Invalidate entries whose key matches a glob pattern

        Returns:
            Number of entries invalidated
        """
        with self._lock:
            if pattern == "*":
                count = len(self._cache)
                self._cache.clear()
                return count

            keys_to_delete = [key for key in self._cache if fnmatch.fnmatch(key, pattern)]
            for key in keys_to_delete:
                del self._cache[key]
            return len(keys_to_delete)

    def keys(self) -> list[str]:
        """Keys currently stored, including expired entries not yet swept"""
        with self._lock:
            return list(self._cache)

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def clear_expired(self) -> int:
        """Remove expired entries

        Returns:
            Number of entries removed
        """
        with self._lock:
            now = self._clock()
            expired_keys = [key for key, entry in self._cache.items() if entry.is_expired(now)]
            for key in expired_keys:
                del self._cache[key]
            return len(expired_keys)

    @property
    def stats(self) -> dict[str, Any]:
        """Get cache statistics"""
        with self._lock:
            total_requests = self._hits + self._misses
            return {
                "entries": len(self._cache),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": self._hits / total_requests if total_requests > 0 else 0.0,
                "ttl_seconds": self._ttl,
            }

    # =========================================================================
    # Background sweep
    # =========================================================================

    @property
    def sweeper_running(self) -> bool:
        return self._sweeper is not None and self._sweeper.is_alive()

    def start(self) -> None:
        """Start the background sweep thread (no-op if already running)"""
        if self.sweeper_running:
            return
        self._stop_event.clear()
        self._sweeper = threading.Thread(target=self._sweep_loop, name="subnet-cache-sweeper", daemon=True)
        self._sweeper.start()

    def close(self) -> None:
        """Stop the background sweep thread"""
        self._stop_event.set()
        if self._sweeper:
            self._sweeper.join(timeout=2)
            self._sweeper = None

    def _sweep_loop(self) -> None:
        while not self._stop_event.wait(self._cleanup_interval):
            removed = self.clear_expired()
            if removed:
                logger.debug("Evicted %d expired subnet cache entries", removed)

    def __enter__(self) -> SubnetCache:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def __repr__(self) -> str:
        stats = self.stats
        return (
            f"SubnetCache(entries={stats['entries']}, "
            f"hit_rate={stats['hit_rate']:.1%}, "
            f"ttl={stats['ttl_seconds']}s)"
        )
