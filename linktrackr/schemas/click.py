from datetime import datetime, timezone
from typing import Annotated, Optional

from fastapi import Request
from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from linktrackr.config import settings


def as_utc(value: datetime) -> datetime:
    """Mark naive datetimes as UTC; SQLite returns stored timestamps without an offset"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UTCDateTime = Annotated[datetime, AfterValidator(as_utc)]


def get_client_ip(request: Request) -> Optional[str]:
    """
    Extract the client IP address from a request.

    X-Forwarded-For is only honoured when the app runs behind a trusted
    proxy (``trust_proxy_headers``); its first hop is the original client.
    """
    if settings.trust_proxy_headers:
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

    if request.client:
        return request.client.host

    return None


class ClickEvent(BaseModel):
    """
    A single visit to a short link.

    Built from request metadata on the redirect path and serialized as one
    of the ``recentClicks`` entries in analytics.
    """

    ip: str = Field("unknown", description="Client IP address")
    user_agent: str = Field("unknown", description="User agent string")
    referrer: str = Field("direct", description="HTTP referrer, 'direct' when absent")
    timestamp: UTCDateTime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the click occurred",
    )

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        json_schema_extra={
            "example": {
                "ip": "192.168.1.1",
                "userAgent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) Chrome/120.0",
                "referrer": "https://twitter.com",
                "timestamp": "2025-10-29T10:30:00Z",
            }
        },
    )

    @classmethod
    def from_request(cls, request: Request) -> "ClickEvent":
        """Capture requester metadata at the moment of the redirect"""
        referrer = request.headers.get("referer") or request.headers.get("referrer")
        return cls(
            ip=get_client_ip(request) or "unknown",
            user_agent=request.headers.get("user-agent") or "unknown",
            referrer=referrer or "direct",
            timestamp=datetime.now(timezone.utc),
        )
