"""In-memory caching layer with TTL support."""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional
import threading

from .core.config import get_settings

TTL_CATALOG = 3600  # 1h -- years and combinations change once a season


class TTLCache:
    """Thread-safe in-memory cache keyed by query name and arguments."""

    def __init__(self, default_ttl: int = TTL_CATALOG, enabled: bool = True):
        """
        Initialize cache with default TTL.

        Args:
            default_ttl: Default time-to-live in seconds (default: 1 hour)
            enabled: When False, ``get`` always misses and ``set`` is a no-op
        """
        self._cache: dict[tuple, tuple[Any, datetime]] = {}
        self._lock = threading.RLock()
        self.default_ttl = default_ttl
        self.enabled = enabled
        self._hits = 0
        self._misses = 0

    @staticmethod
    def _make_key(*args) -> tuple:
        return tuple(str(arg) for arg in args)

    @staticmethod
    def _now() -> datetime:
        return datetime.now(tz=timezone.utc)

    def get(self, *args) -> Optional[Any]:
        """
        Get cached value if not expired.

        Args:
            *args: Query name followed by its arguments

        Returns:
            Cached value if exists and not expired, None otherwise
        """
        if not self.enabled:
            return None

        key = self._make_key(*args)

        with self._lock:
            if key in self._cache:
                value, expiry = self._cache[key]
                if self._now() < expiry:
                    self._hits += 1
                    return value
                del self._cache[key]
            self._misses += 1

        return None

    def set(self, value: Any, *args, ttl: Optional[int] = None) -> None:
        """
        Set cached value with TTL.

        Args:
            value: Value to cache
            *args: Query name followed by its arguments
            ttl: Time-to-live in seconds (uses default_ttl if None)
        """
        if not self.enabled:
            return

        key = self._make_key(*args)
        ttl = ttl or self.default_ttl
        expiry = self._now() + timedelta(seconds=ttl)

        with self._lock:
            self._cache[key] = (value, expiry)

    def delete(self, *args) -> None:
        with self._lock:
            self._cache.pop(self._make_key(*args), None)

    def clear(self) -> None:
        """Clear all cached values."""
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0

    def size(self) -> int:
        """Get number of cached entries."""
        with self._lock:
            return len(self._cache)

    def cleanup_expired(self) -> int:
        """Remove all expired entries. Returns count of removed entries."""
        now = self._now()
        with self._lock:
            expired_keys = [
                key for key, (_, expiry) in self._cache.items()
                if now >= expiry
            ]
            for key in expired_keys:
                del self._cache[key]
        return len(expired_keys)

    def get_stats(self) -> dict[str, Any]:
        with self._lock:
            return {
                "enabled": self.enabled,
                "entries": len(self._cache),
                "hits": self._hits,
                "misses": self._misses,
                "default_ttl": self.default_ttl,
            }


# Global cache instance
_cache: Optional[TTLCache] = None


def get_cache() -> TTLCache:
    """
    Get the global cache instance.

    Returns:
        Global TTLCache instance configured from settings
    """
    global _cache
    if _cache is None:
        settings = get_settings()
        _cache = TTLCache(
            default_ttl=settings.cache_ttl_catalog,
            enabled=settings.cache_enabled,
        )
    return _cache
