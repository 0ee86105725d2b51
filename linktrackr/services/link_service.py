import math
from typing import List, Optional, Tuple

import structlog
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from linktrackr.cache.strategies import CacheStrategy, NullCache, link_cache_key
from linktrackr.config import settings
from linktrackr.exceptions import AliasTakenError, IdentifierAllocationError
from linktrackr.models.link import Click, Link
from linktrackr.schemas.link import LinkAnalytics, LinkSummary, Pagination
from linktrackr.services.analytics import build_link_analytics
from linktrackr.services.short_id import ShortIdStrategy, default_short_id_strategy
from linktrackr.validators import normalize_alias, normalize_original_url

logger = structlog.get_logger(__name__)


def build_short_url(base_url: str, short_id: str) -> str:
    return f"{base_url.rstrip('/')}/{short_id}"


class LinkService:
    """
    Link registry: create, list, analyse and delete an owner's links.

    Cache and identifier strategy are injected; the database session is
    the source of truth and the cache only mirrors shortId -> URL.
    """

    def __init__(
        self,
        db: Session,
        cache: Optional[CacheStrategy] = None,
        short_id_strategy: Optional[ShortIdStrategy] = None
    ):
        self.db = db
        self.cache = cache or NullCache()
        self.short_id_strategy = short_id_strategy or default_short_id_strategy()

    def short_id_exists(self, short_id: str) -> bool:
        return self.db.query(Link.id).filter(Link.short_id == short_id).first() is not None

    async def create_link(
        self,
        owner_id: str,
        original_url: Optional[str],
        custom_alias: Optional[str] = None
    ) -> Link:
        """
        Create a new short link.

        Process:
        1. Validate and normalize the destination URL
        2. Use the custom alias if free, otherwise draw a random id
        3. Persist, then seed the cache

        Raises:
            InvalidURLError, InvalidAliasError: Bad input
            AliasTakenError: The custom alias already exists
            IdentifierAllocationError: No free random id was found
        """
        formatted_url = normalize_original_url(original_url)
        alias = normalize_alias(custom_alias)

        if alias is not None:
            if self.short_id_exists(alias):
                raise AliasTakenError()
            short_id = alias
        else:
            short_id = self.short_id_strategy.generate(self.short_id_exists)

        link = Link(short_id=short_id, original_url=formatted_url, owner_id=owner_id)
        self.db.add(link)

        try:
            self.db.commit()
        except IntegrityError:
            # Someone took the id between the check and the insert
            self.db.rollback()
            if alias is not None:
                raise AliasTakenError()
            raise IdentifierAllocationError()

        self.db.refresh(link)

        await self.cache.set(link_cache_key(link.short_id), link.original_url, ttl=settings.cache_ttl)

        logger.info("Link created", short_id=link.short_id, owner_id=owner_id, custom=alias is not None)
        return link

    def list_links(
        self,
        owner_id: str,
        base_url: str,
        page: int = 1,
        limit: int = 10
    ) -> Tuple[List[LinkSummary], Pagination]:
        """
        One page of the owner's links, newest first.

        Click histories are not loaded; only their count is computed.
        """
        skip = (page - 1) * limit

        click_count = func.count(Click.id).label("total_clicks")
        rows = (
            self.db.query(Link, click_count)
            .outerjoin(Click, Click.link_id == Link.id)
            .filter(Link.owner_id == owner_id)
            .group_by(Link.id)
            .order_by(Link.created_at.desc(), Link.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
        total = self.db.query(func.count(Link.id)).filter(Link.owner_id == owner_id).scalar()

        links = [
            LinkSummary(
                short_id=link.short_id,
                original_url=link.original_url,
                short_url=build_short_url(base_url, link.short_id),
                total_clicks=total_clicks,
                created_at=link.created_at,
            )
            for link, total_clicks in rows
        ]
        pagination = Pagination(
            current_page=page,
            total_pages=math.ceil(total / limit),
            total_links=total,
            has_more=skip + len(links) < total,
        )
        return links, pagination

    def get_owned_link(self, owner_id: str, short_id: str) -> Optional[Link]:
        return self.db.query(Link).filter(
            Link.short_id == short_id,
            Link.owner_id == owner_id
        ).first()

    def get_analytics(self, link: Link) -> LinkAnalytics:
        """Aggregate the full click history of a link"""
        clicks = (
            self.db.query(Click)
            .filter(Click.link_id == link.id)
            .order_by(Click.id)
            .all()
        )
        return build_link_analytics(clicks)

    async def delete_link(self, owner_id: str, short_id: str) -> bool:
        """
        Delete an owned link with its clicks and evict it from the cache.

        Returns False when the link doesn't exist or belongs to someone else.
        """
        link = self.get_owned_link(owner_id, short_id)
        if not link:
            return False

        self.db.delete(link)
        self.db.commit()

        await self.cache.delete(link_cache_key(short_id))

        logger.info("Link deleted", short_id=short_id, owner_id=owner_id)
        return True
