from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func

from skillswap.db.base import Base


class Announcement(Base):
    """Broadcast posted by a moderator. Display only."""

    __tablename__ = "announcements"

    id = Column(Integer, primary_key=True, index=True)

    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    created_by = Column(Integer, nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
