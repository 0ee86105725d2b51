from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship, validates

from linktrackr.database.connection import Base
from linktrackr.validators import validate_original_url


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Link(Base):
    """
    A short link owned by one account.

    short_id is either generated or a custom alias; both share the same
    unique index.
    """
    __tablename__ = "links"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    short_id = Column(String(64), unique=True, nullable=False, index=True)
    original_url = Column(String, nullable=False)
    owner_id = Column(String, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=True)  # Stored, not enforced

    clicks = relationship(
        "Click",
        back_populates="link",
        order_by="Click.id",
        cascade="all, delete-orphan",
    )

    @validates("original_url")
    def _validate_original_url(self, key, value):
        return validate_original_url(value)


class Click(Base):
    """One recorded visit to a short link"""
    __tablename__ = "clicks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    link_id = Column(Integer, ForeignKey("links.id", ondelete="CASCADE"), nullable=False, index=True)
    ip = Column(String, nullable=False, default="unknown")
    user_agent = Column(String, nullable=False, default="unknown")
    referrer = Column(String, nullable=False, default="direct")
    timestamp = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    link = relationship("Link", back_populates="clicks")
