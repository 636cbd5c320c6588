from sqlalchemy import Column, Integer, Text, DateTime, CheckConstraint
from sqlalchemy.sql import func

from skillswap.db.base import Base


class Feedback(Base):
    """Append-only rating left by one session participant for the other."""

    __tablename__ = "feedback"

    id = Column(Integer, primary_key=True, index=True)

    session_id = Column(Integer, nullable=False, index=True)
    from_user_id = Column(Integer, nullable=False, index=True)
    to_user_id = Column(Integer, nullable=False, index=True)

    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_feedback_rating_range"),
    )
