"""
Unified caching layer using diskcache.

Provides a consistent interface for caching any data with optional TTL.
Uses namespaced keys to separate different types of cached data.

The cache is constructed once by the caller and handed to the adapters that
need it; entries are immutable once written, so concurrent readers are safe.
"""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import diskcache

logger = logging.getLogger(__name__)

DEFAULT_CACHE_DIR = Path("data/cache")

# 1GB is plenty for registrant metadata and other small JSON-sized records
DEFAULT_CACHE_SIZE_LIMIT = 1024 * 1024 * 1024  # 1 GB


class AppCache:
    """Unified cache using diskcache (SQLite-backed)."""

    def __init__(
        self,
        cache_dir: Path = DEFAULT_CACHE_DIR,
        timeout: float = 30.0,
        size_limit: int = DEFAULT_CACHE_SIZE_LIMIT,
    ):
        """
        Initialize cache.

        Args:
            cache_dir: Directory for cache files
            timeout: Timeout in seconds for acquiring database lock (default: 30.0)
            size_limit: Maximum cache size in bytes (default: 1GB)
                        Set to 0 for unlimited. When limit is reached, oldest entries
                        are evicted using least-recently-stored policy.
        """
        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self._cache = diskcache.Cache(
            str(self.cache_dir),
            timeout=timeout,
            size_limit=size_limit,
        )

    def _make_key(self, namespace: str, key: str) -> str:
        return f"{namespace}:{key}"

    def get(self, namespace: str, key: str) -> Any | None:
        """Get a value from cache (expired entries read as None)."""
        full_key = self._make_key(namespace, key)
        return self._cache.get(full_key)

    def set(
        self,
        namespace: str,
        key: str,
        value: Any,
        ttl_seconds: float | None = None,
    ) -> None:
        """Set a value in cache with optional TTL."""
        full_key = self._make_key(namespace, key)
        expire = ttl_seconds if ttl_seconds else None
        self._cache.set(full_key, value, expire=expire)

    def get_or_load(
        self,
        namespace: str,
        key: str,
        loader: Callable[[], Any | None],
        ttl_seconds: float | None = None,
    ) -> Any | None:
        """
        Read-through lookup.

        Returns the cached value when present, otherwise calls ``loader`` and
        stores its result. ``None`` results (not found) are not cached, and
        loader exceptions propagate without touching the cache.
        """
        cached = self.get(namespace, key)
        if cached is not None:
            logger.debug(f"Cache hit {namespace}:{key}")
            return cached

        value = loader()
        if value is not None:
            self.set(namespace, key, value, ttl_seconds=ttl_seconds)
        return value

    def delete(self, namespace: str, key: str) -> bool:
        """Delete a value from cache."""
        full_key = self._make_key(namespace, key)
        return bool(self._cache.delete(full_key))

    def clear_namespace(self, namespace: str) -> int:
        """Clear all keys in a namespace."""
        prefix = f"{namespace}:"
        keys_to_delete = [key for key in self._cache if key.startswith(prefix)]
        count = len(keys_to_delete)
        for key in keys_to_delete:
            self._cache.delete(key)
        return count

    def count(self, namespace: str | None = None) -> int:
        """Count entries, optionally filtered by namespace."""
        if namespace is None:
            return len(self._cache)
        prefix = f"{namespace}:"
        return sum(1 for key in self._cache if key.startswith(prefix))

    def stats(self) -> dict:
        """Get cache statistics."""
        namespaces: dict[str, int] = {}
        for key in self._cache:
            ns = key.split(":")[0] if ":" in key else "unknown"
            namespaces[ns] = namespaces.get(ns, 0) + 1

        volume_bytes = self._cache.volume()
        size_limit = self._cache.size_limit

        return {
            "total": len(self._cache),
            "by_namespace": namespaces,
            "size_mb": round(volume_bytes / (1024 * 1024), 2),
            "size_limit_mb": round(size_limit / (1024 * 1024), 2) if size_limit else None,
            "cache_dir": str(self.cache_dir),
        }

    def keys(self, namespace: str | None = None, limit: int = 100) -> list[str]:
        """Get keys, optionally filtered by namespace."""
        prefix = f"{namespace}:" if namespace else ""
        keys = []
        for key in self._cache:
            if key.startswith(prefix):
                keys.append(key[len(prefix) :] if prefix else key)
                if len(keys) >= limit:
                    break
        return keys

    def close(self):
        """Close the cache."""
        self._cache.close()
