"""
Cache abstraction (port) and its Django cache adapter.

Cache failures are logged and treated as misses so that a Redis outage
degrades to direct database reads.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from asgiref.sync import sync_to_async
from django.core.cache import cache

from core.metrics import cache_hits_total, cache_misses_total

logger = logging.getLogger(__name__)


class CachePort(ABC):
    """
    Abstract cache port.

    This defines the interface for caching operations.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """
        Get a value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found
        """

    @abstractmethod
    async def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        """
        Set a value in cache.

        Args:
            key: Cache key
            value: Value to cache
            timeout: Timeout in seconds (None for no expiration)
        """

    @abstractmethod
    async def delete(self, key: str) -> None:
        """
        Delete a value from cache.

        Args:
            key: Cache key
        """


class DjangoCacheAdapter(CachePort):
    """
    Django cache adapter implementing CachePort.

    Uses Django's cache framework (Redis in production, locmem in tests).
    """

    async def get(self, key: str) -> Optional[Any]:
        try:
            value = await sync_to_async(cache.get)(key)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error getting from cache: %s", e, exc_info=True)
            return None
        if value is None:
            cache_misses_total.labels(cache_key=key).inc()
            logger.debug("Cache miss: %s", key)
        else:
            cache_hits_total.labels(cache_key=key).inc()
            logger.debug("Cache hit: %s", key)
        return value

    async def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        try:
            await sync_to_async(cache.set)(key, value, timeout=timeout)
            logger.debug("Cache set: %s (timeout=%s)", key, timeout)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error setting cache: %s", e, exc_info=True)

    async def delete(self, key: str) -> None:
        try:
            await sync_to_async(cache.delete)(key)
            logger.debug("Cache delete: %s", key)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error deleting from cache: %s", e, exc_info=True)


# Global cache instance
cache_adapter = DjangoCacheAdapter()
