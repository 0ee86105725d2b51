"""
Click recorder.

Appends click events to a link's history outside the request/response
cycle. The redirect schedules ``ClickRecorder.record`` as a background
task, so the response never waits on this write and never sees it fail.

Failures are logged and dropped; there is no retry.
"""

import structlog
from sqlalchemy.exc import SQLAlchemyError

from linktrackr.database.connection import SessionLocal
from linktrackr.models.link import Click, Link
from linktrackr.schemas.click import ClickEvent

logger = structlog.get_logger(__name__)


class ClickRecorder:
    """
    Writes click events with its own database session.

    The session factory is injected so tests can point it at their own
    database.
    """

    def __init__(self, db_session_factory=SessionLocal):
        self.db_session_factory = db_session_factory

    def record(self, link_id: int, event: ClickEvent) -> bool:
        """
        Append one click to a link.

        Returns:
            True if stored, False if the link is gone or the write failed
        """
        db = self.db_session_factory()

        try:
            if db.get(Link, link_id) is None:
                logger.warning("Click dropped, link no longer exists", link_id=link_id)
                return False

            db.add(Click(
                link_id=link_id,
                ip=event.ip,
                user_agent=event.user_agent,
                referrer=event.referrer,
                timestamp=event.timestamp,
            ))
            db.commit()
            logger.debug("Click recorded", link_id=link_id)
            return True

        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Error logging click", link_id=link_id, error=str(e), exc_info=True)
            return False
        finally:
            db.close()
