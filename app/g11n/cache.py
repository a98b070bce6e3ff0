"""Catalog cache interface and in-memory implementation.

The cache is the only structure shared across requests. Two lookups racing to
populate the same key both compute the same value from the same immutable
source file, so last-writer-wins is acceptable.
"""

import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from g11n.logging import get_module_logger

logger = get_module_logger()


class Cache(ABC):
    """Abstract base class for catalog cache implementations."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Get a cached value.

        Args:
            key: Cache key (e.g., "g11n.core.default.en_US").

        Returns:
            Cached value or None if not found.
        """
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Cache a value for the given key.

        Args:
            key: Cache key.
            value: Value to cache.
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Clear all cached entries."""
        pass

    @abstractmethod
    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dict with cache statistics (implementation-specific).
        """
        pass


class MemoryCache(Cache):
    """Thread-safe in-process cache.

    Attributes:
        _entries: Cached values by key.
        _lock: Threading lock guarding every read and write.
    """

    def __init__(self):
        self._entries: Dict[str, Any] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            if key in self._entries:
                self._hits += 1
                return self._entries[key]
            self._misses += 1
            return None

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._entries[key] = value
            logger.debug("cache_stored", key=key, cache_size=len(self._entries))

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0
            logger.debug("cache_cleared")

    def get_stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "total_entries": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
            }
