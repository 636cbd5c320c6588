from enum import Enum

from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.sql import func

from skillswap.db.base import Base


class CardStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


# Vocabulary written by older self-service code
LEGACY_CARD_STATUSES = {"active": CardStatus.APPROVED}


def normalize_card_status(value: str) -> CardStatus:
    """Map any stored status (including legacy ``active``) onto ``CardStatus``."""
    if value in LEGACY_CARD_STATUSES:
        return LEGACY_CARD_STATUSES[value]
    return CardStatus(value)


class SkillCard(Base):
    __tablename__ = "skill_cards"

    id = Column(Integer, primary_key=True, index=True)

    # Owner. Plain column: deleting the owner leaves the card orphaned.
    user_id = Column(Integer, nullable=False, index=True)

    skill_offered = Column(String(255), nullable=False)
    # Barter only: what the owner wants in exchange (NULL for paid cards)
    skill_needed = Column(String(255), nullable=True)

    # is_paid == True  <=>  price IS NOT NULL
    is_paid = Column(Boolean, nullable=False, default=False, index=True)
    price = Column(Integer, nullable=True)

    language = Column(String(64), nullable=False)
    availability = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)

    # pending | approved | rejected
    status = Column(String(16), nullable=False, default=CardStatus.APPROVED.value, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
