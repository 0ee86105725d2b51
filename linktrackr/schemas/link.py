from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from linktrackr.schemas.click import ClickEvent, UTCDateTime


class CamelModel(BaseModel):
    """Accepts snake_case or camelCase input, renders camelCase"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ShortenRequest(CamelModel):
    # Presence and shape are checked by the service so that every
    # validation failure gets the same 400 message format
    original_url: Optional[str] = Field(None, description="The URL to be shortened")
    custom_alias: Optional[str] = Field(None, description="Optional caller-chosen short id")


class LinkCreated(CamelModel):
    short_id: str
    short_url: str
    original_url: str
    created_at: UTCDateTime


class ShortenResponse(CamelModel):
    success: bool = True
    message: str = "Short URL created successfully"
    data: LinkCreated


class LinkSummary(CamelModel):
    """A link as shown in the owner's list (no click history)"""
    short_id: str
    original_url: str
    short_url: str
    total_clicks: int
    created_at: UTCDateTime


class Pagination(CamelModel):
    current_page: int
    total_pages: int
    total_links: int
    has_more: bool


class LinkListResponse(CamelModel):
    success: bool = True
    data: List[LinkSummary]
    pagination: Pagination


class LinkAnalytics(CamelModel):
    total_clicks: int
    clicks_by_date: Dict[str, int]
    device_breakdown: Dict[str, int]
    recent_clicks: List[ClickEvent]


class LinkAnalyticsDetail(CamelModel):
    short_id: str
    original_url: str
    short_url: str
    created_at: UTCDateTime
    analytics: LinkAnalytics


class AnalyticsResponse(CamelModel):
    success: bool = True
    data: LinkAnalyticsDetail


class MessageResponse(CamelModel):
    success: bool = True
    message: str
