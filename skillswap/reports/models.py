from enum import Enum

from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func

from skillswap.db.base import Base


class ReportReason(str, Enum):
    NO_SHOW = "no-show"
    FAKE_USER = "fake-user"
    PAYMENT_SCAM = "payment-scam"
    INAPPROPRIATE_BEHAVIOR = "inappropriate-behavior"


class Report(Base):
    __tablename__ = "reports"

    id = Column(Integer, primary_key=True, index=True)

    session_id = Column(Integer, nullable=False, index=True)
    from_user_id = Column(Integer, nullable=False, index=True)

    reason = Column(String(32), nullable=False)
    description = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
