"""
Domain errors for the link registry and redirect resolver.

Every error carries the HTTP status and the single human-readable
message returned to the client as ``{"success": false, "error": ...}``.
"""

from contextlib import contextmanager
from typing import Iterator

import structlog
from fastapi import status
from sqlalchemy.exc import SQLAlchemyError

logger = structlog.get_logger(__name__)


class LinkTrackrError(Exception):
    """Base class for errors that map directly to an HTTP response"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.message
        super().__init__(self.message)


class InvalidURLError(LinkTrackrError, ValueError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid URL format"


class InvalidAliasError(LinkTrackrError, ValueError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Custom alias may only contain letters, numbers, underscores and hyphens"


class AliasTakenError(LinkTrackrError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Custom alias already taken"


class IdentifierAllocationError(LinkTrackrError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Could not allocate a unique short identifier"


class StoreUnavailableError(LinkTrackrError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Server error"


@contextmanager
def store_errors(message: str) -> Iterator[None]:
    """
    Translate database failures into a generic server error.

    The original exception is logged with its traceback; the client only
    sees ``message``.
    """
    try:
        yield
    except SQLAlchemyError as e:
        logger.exception("Store operation failed", error=str(e))
        raise StoreUnavailableError(message) from e
