"""
URL and alias validation shared by the request path and the ORM model.
"""

import re
from typing import Optional

from linktrackr.exceptions import InvalidAliasError, InvalidURLError

# Permissive host + path shape; scheme is optional
URL_PATTERN = re.compile(
    r"^(https?://)?([\da-z.-]+)\.([a-z.]{2,6})([/\w .-]*)$",
    re.ASCII,
)
SCHEME_PATTERN = re.compile(r"^https?://")
ALIAS_PATTERN = re.compile(r"^[\w-]{1,64}$", re.ASCII)
# Route names served by the app itself
RESERVED_ALIASES = frozenset({"api", "docs", "health", "redoc"})


def validate_original_url(value: Optional[str]) -> str:
    """
    Check that a destination URL is present and URL-shaped.

    Returns the stripped value. Raises InvalidURLError otherwise.
    """
    if value is None or not value.strip():
        raise InvalidURLError("Original URL is required")

    value = value.strip()
    if not URL_PATTERN.match(value):
        raise InvalidURLError("Invalid URL format")

    return value


def normalize_original_url(value: Optional[str]) -> str:
    """Validate and prefix ``https://`` when the URL has no scheme."""
    value = validate_original_url(value)
    if SCHEME_PATTERN.match(value):
        return value
    return f"https://{value}"


def normalize_alias(value: Optional[str]) -> Optional[str]:
    """Return the trimmed alias, or None when no alias was requested."""
    if value is None or not value.strip():
        return None

    value = value.strip()
    if not ALIAS_PATTERN.match(value):
        raise InvalidAliasError()
    if value in RESERVED_ALIASES:
        raise InvalidAliasError("Custom alias is reserved")

    return value
