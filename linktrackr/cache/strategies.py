"""
Cache strategies using Strategy Pattern.
Allows switching between different cache backends (In-Memory, Redis, Null)
for the shortId -> destination URL mapping.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict

import structlog

logger = structlog.get_logger(__name__)


def link_cache_key(short_id: str) -> str:
    """Cache key for a short link's destination URL"""
    return f"link:{short_id}"


class CacheStrategy(ABC):
    """
    Abstract base class for cache strategies.

    The resolver and the registry only ever talk to this interface, so a
    multi-instance deployment can move from the process-local dict to a
    shared Redis without code changes.

    All methods are async because cache operations may involve I/O.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Get value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> bool:
        """
        Set value in cache, overwriting any existing entry.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time to live in seconds, None to keep until deleted

        Returns:
            True if successful, False otherwise
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Delete key from cache.

        Returns:
            True if deleted, False if key didn't exist
        """
        pass

    @abstractmethod
    async def clear(self) -> bool:
        """Clear all cache entries"""
        pass


class RedisCache(CacheStrategy):
    """
    Redis cache implementation.

    Shared between app instances. Errors are logged and reported as cache
    misses so the store stays the source of truth.
    """

    def __init__(self, redis_client):
        """
        Initialize Redis cache.

        Args:
            redis_client: Redis client instance (redis.Redis)
        """
        self.redis = redis_client

    async def get(self, key: str) -> Optional[str]:
        try:
            value = self.redis.get(key)
            return value.decode('utf-8') if value else None
        except Exception as e:
            logger.warning("Redis get failed", key=key, error=str(e))
            return None

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> bool:
        try:
            return bool(self.redis.set(key, value, ex=ttl))
        except Exception as e:
            logger.warning("Redis set failed", key=key, error=str(e))
            return False

    async def delete(self, key: str) -> bool:
        try:
            return bool(self.redis.delete(key))
        except Exception as e:
            logger.warning("Redis delete failed", key=key, error=str(e))
            return False

    async def clear(self) -> bool:
        """Clear all Redis keys (use with caution!)"""
        try:
            self.redis.flushdb()
            return True
        except Exception as e:
            logger.warning("Redis clear failed", error=str(e))
            return False


class InMemoryCache(CacheStrategy):
    """
    In-memory cache implementation using Python dict.

    Process-local and lost on restart. Entries never expire: TTL is
    ignored, entries only go away on delete.

    Safe without locks because requests are served on a single event loop
    and no method awaits in the middle of a dict operation.
    """

    def __init__(self):
        self._cache: Dict[str, str] = {}

    async def get(self, key: str) -> Optional[str]:
        return self._cache.get(key)

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> bool:
        self._cache[key] = value
        return True

    async def delete(self, key: str) -> bool:
        if key in self._cache:
            del self._cache[key]
            return True
        return False

    async def clear(self) -> bool:
        self._cache.clear()
        return True


class NullCache(CacheStrategy):
    """
    Null Object Pattern - cache that does nothing.

    Every lookup goes to the store. Useful for disabling the cache or
    testing the store path on its own.
    """

    async def get(self, key: str) -> Optional[str]:
        """Always returns None (cache miss)"""
        return None

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> bool:
        return True

    async def delete(self, key: str) -> bool:
        return True

    async def clear(self) -> bool:
        return True
