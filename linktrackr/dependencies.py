"""
FastAPI dependencies for dependency injection.

Provides the cache singleton, the click recorder and the two services
(registry and resolver) to the routes. Tests override these to inject
their own database, cache and recorder.
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from linktrackr.cache.factory import CacheFactory, CacheBackend
from linktrackr.cache.strategies import CacheStrategy
from linktrackr.click_processor.recorder import ClickRecorder
from linktrackr.config import settings
from linktrackr.database.connection import get_db
from linktrackr.services.link_service import LinkService
from linktrackr.services.redirect_service import RedirectService


@lru_cache()
def get_cache() -> CacheStrategy:
    """
    Get cache instance (singleton).

    Factory gets config from settings internally.
    """
    backend = CacheBackend(settings.cache_backend)
    return CacheFactory.create(backend)


@lru_cache()
def get_click_recorder() -> ClickRecorder:
    return ClickRecorder()


def get_link_service(
    db: Session = Depends(get_db),
    cache: CacheStrategy = Depends(get_cache)
) -> LinkService:
    """LinkService with its database session and cache injected"""
    return LinkService(db=db, cache=cache)


def get_redirect_service(
    db: Session = Depends(get_db),
    cache: CacheStrategy = Depends(get_cache)
) -> RedirectService:
    return RedirectService(db=db, cache=cache)
