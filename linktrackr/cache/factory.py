"""
Factory for creating cache instances.
"""

from enum import Enum

import structlog

from .strategies import CacheStrategy, RedisCache, InMemoryCache, NullCache
from linktrackr.config import settings

logger = structlog.get_logger(__name__)


class CacheBackend(Enum):
    """Available cache backends"""
    MEMORY = "memory"
    REDIS = "redis"
    NULL = "null"


class CacheFactory:
    """
    Factory for creating cache instances.

    Creates the instance once and reuses it. Configuration comes from
    settings, not from parameters.
    """

    _instance: CacheStrategy = None

    @classmethod
    def create(cls, backend: CacheBackend) -> CacheStrategy:
        """
        Create or return the cached cache instance.

        A Redis backend that can't be reached falls back to the in-memory
        cache so the app still starts.
        """
        if cls._instance is not None:
            return cls._instance

        if backend == CacheBackend.REDIS:
            import redis

            try:
                redis_client = redis.from_url(
                    settings.redis_url,
                    decode_responses=False,
                    socket_connect_timeout=2,
                    socket_timeout=2,
                )
                redis_client.ping()

                cls._instance = RedisCache(redis_client)
                logger.info("Cache initialized", backend="redis")

            except Exception as e:
                logger.warning("Redis connection failed, falling back to in-memory cache", error=str(e))
                cls._instance = InMemoryCache()

        elif backend == CacheBackend.MEMORY:
            cls._instance = InMemoryCache()
            logger.info("Cache initialized", backend="memory")

        elif backend == CacheBackend.NULL:
            cls._instance = NullCache()
            logger.info("Cache initialized", backend="null")

        else:
            raise ValueError(f"Unknown cache backend: {backend}")

        return cls._instance

    @classmethod
    def clear_instance(cls):
        """Clear cached instance (for testing)"""
        cls._instance = None
