from enum import Enum

from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func

from skillswap.db.base import Base


class SessionStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    DECLINED = "declined"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class SkillSession(Base):
    """A scheduled meeting between a learner and a helper for one skill card."""

    __tablename__ = "sessions"

    id = Column(Integer, primary_key=True, index=True)

    skill_card_id = Column(Integer, nullable=False, index=True)
    learner_id = Column(Integer, nullable=False, index=True)
    # Card owner at request time; never re-derived from the card
    helper_id = Column(Integer, nullable=False, index=True)

    session_time = Column(DateTime(timezone=True), nullable=False)

    # Generated once at creation, never changed
    meeting_link = Column(String(512), nullable=False, unique=True)
    notes = Column(Text, nullable=True)

    # pending | confirmed | declined | cancelled | completed
    status = Column(String(16), nullable=False, default=SessionStatus.PENDING.value, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
