"""
Click analytics computed from a link's full click history.

Device classification is a keyword heuristic, not a user-agent parser:
the first rule whose keyword appears in the lower-cased user agent wins.
"""

from collections import Counter
from typing import Dict, Iterable, Optional, Sequence, Tuple

from linktrackr.models.link import Click
from linktrackr.schemas.click import ClickEvent, as_utc
from linktrackr.schemas.link import LinkAnalytics

RECENT_CLICKS_LIMIT = 10

DEVICE_OTHER = "Other"
DEVICE_RULES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("mobile",), "Mobile"),
    (("tablet",), "Tablet"),
    (("windows", "mac", "linux"), "Desktop"),
)


def classify_device(user_agent: Optional[str]) -> str:
    """Map a user agent to Mobile, Tablet, Desktop or Other"""
    ua = (user_agent or "").lower()
    for keywords, device in DEVICE_RULES:
        if any(keyword in ua for keyword in keywords):
            return device
    return DEVICE_OTHER


def count_by_date(clicks: Iterable[Click]) -> Dict[str, int]:
    """Histogram keyed by calendar date (YYYY-MM-DD)"""
    counts: Dict[str, int] = {}
    for click in clicks:
        day = as_utc(click.timestamp).date().isoformat()
        counts[day] = counts.get(day, 0) + 1
    return counts


def build_link_analytics(
    clicks: Sequence[Click],
    recent_limit: int = RECENT_CLICKS_LIMIT,
) -> LinkAnalytics:
    """
    Aggregate a click history.

    Args:
        clicks: Clicks in append order (oldest first)
        recent_limit: How many of the latest clicks to return

    Returns:
        LinkAnalytics with the latest clicks newest first
    """
    devices = Counter(classify_device(click.user_agent) for click in clicks)
    recent = list(clicks[-recent_limit:])[::-1] if recent_limit > 0 else []

    return LinkAnalytics(
        total_clicks=len(clicks),
        clicks_by_date=count_by_date(clicks),
        device_breakdown=dict(devices),
        recent_clicks=[
            ClickEvent(
                ip=click.ip,
                user_agent=click.user_agent,
                referrer=click.referrer,
                timestamp=click.timestamp,
            )
            for click in recent
        ],
    )
