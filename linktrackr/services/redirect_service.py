from dataclasses import dataclass
from typing import Optional

import structlog
from sqlalchemy.orm import Session

from linktrackr.cache.strategies import CacheStrategy, NullCache, link_cache_key
from linktrackr.config import settings
from linktrackr.models.link import Link

logger = structlog.get_logger(__name__)


@dataclass
class Resolution:
    """Where a short id points, and which link row records the click"""
    original_url: str
    link_id: Optional[int]


class RedirectService:
    """Resolves short ids using the cache-aside pattern."""

    def __init__(self, db: Session, cache: Optional[CacheStrategy] = None):
        self.db = db
        self.cache = cache or NullCache()

    async def resolve(self, short_id: str) -> Optional[Resolution]:
        """
        Resolve a short id to its destination URL.

        Flow:
        1. Check the cache
        2. Fetch the link row either way; the click is attached to it
        3. On a cache miss, fail if there is no row, else populate the cache

        A cache hit without a row (entry left behind by an external delete)
        still resolves, with no link to record the click against.
        """
        cache_key = link_cache_key(short_id)
        cached_url = await self.cache.get(cache_key)

        row = self.db.query(Link.id, Link.original_url).filter(Link.short_id == short_id).first()

        if cached_url:
            if row is None:
                logger.warning("Cache entry without stored link", short_id=short_id)
            return Resolution(original_url=cached_url, link_id=row.id if row else None)

        if row is None:
            return None

        logger.debug("Cache miss", short_id=short_id)
        await self.cache.set(cache_key, row.original_url, ttl=settings.cache_ttl)
        return Resolution(original_url=row.original_url, link_id=row.id)
