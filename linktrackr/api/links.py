from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from linktrackr.auth import Account, get_current_account
from linktrackr.config import settings
from linktrackr.dependencies import get_link_service
from linktrackr.exceptions import store_errors
from linktrackr.schemas.link import (
    AnalyticsResponse,
    LinkAnalyticsDetail,
    LinkCreated,
    LinkListResponse,
    MessageResponse,
    ShortenRequest,
    ShortenResponse,
)
from linktrackr.services.link_service import LinkService, build_short_url

router = APIRouter(tags=["links"])


def get_base_url(request: Request) -> str:
    """Configured public base URL, else the one the request came in on"""
    return settings.base_url or str(request.base_url)


@router.post("/shorten", response_model=ShortenResponse, status_code=status.HTTP_201_CREATED)
async def shorten_url(
    payload: ShortenRequest,
    request: Request,
    account: Account = Depends(get_current_account),
    link_service: LinkService = Depends(get_link_service)
):
    """Create a short URL, random or with a custom alias"""
    with store_errors("Server error while creating short URL"):
        link = await link_service.create_link(
            owner_id=account.id,
            original_url=payload.original_url,
            custom_alias=payload.custom_alias,
        )

    return ShortenResponse(
        data=LinkCreated(
            short_id=link.short_id,
            short_url=build_short_url(get_base_url(request), link.short_id),
            original_url=link.original_url,
            created_at=link.created_at,
        )
    )


@router.get("/links", response_model=LinkListResponse)
async def list_links(
    request: Request,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    account: Account = Depends(get_current_account),
    link_service: LinkService = Depends(get_link_service)
):
    """List the caller's links, newest first"""
    with store_errors("Server error while fetching links"):
        links, pagination = link_service.list_links(
            owner_id=account.id,
            base_url=get_base_url(request),
            page=page,
            limit=limit,
        )

    return LinkListResponse(data=links, pagination=pagination)


@router.get("/analytics/{short_id}", response_model=AnalyticsResponse)
async def get_analytics(
    short_id: str,
    request: Request,
    account: Account = Depends(get_current_account),
    link_service: LinkService = Depends(get_link_service)
):
    """Click analytics for one of the caller's links"""
    with store_errors("Server error while fetching analytics"):
        link = link_service.get_owned_link(account.id, short_id)
        if not link:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Link not found or unauthorized"
            )
        analytics = link_service.get_analytics(link)

    return AnalyticsResponse(
        data=LinkAnalyticsDetail(
            short_id=link.short_id,
            original_url=link.original_url,
            short_url=build_short_url(get_base_url(request), link.short_id),
            created_at=link.created_at,
            analytics=analytics,
        )
    )


@router.delete("/links/{short_id}", response_model=MessageResponse)
async def delete_link(
    short_id: str,
    account: Account = Depends(get_current_account),
    link_service: LinkService = Depends(get_link_service)
):
    """Delete one of the caller's links"""
    with store_errors("Server error while deleting link"):
        deleted = await link_service.delete_link(account.id, short_id)

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Link not found or unauthorized"
        )
    return MessageResponse(message="Link deleted successfully")
