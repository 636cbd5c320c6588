from enum import Enum

from sqlalchemy import Column, Integer, String, Text, DateTime, JSON
from sqlalchemy.sql import func

from skillswap.db.base import Base


class UserRole(str, Enum):
    LEARNER = "learner"
    HELPER = "helper"
    BOTH = "both"
    # The only role that grants privileges (moderation)
    ADMIN = "admin"


# Roles a user may pick for themselves
SELF_SERVICE_ROLES = (UserRole.LEARNER, UserRole.HELPER, UserRole.BOTH)


class UserStatus(str, Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"
    BANNED = "banned"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    # Identity issued by the external auth provider (token "sub")
    auth_user_id = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, index=True, nullable=False, default="")

    name = Column(String, nullable=False)

    # learner | helper | both | admin
    role = Column(String, nullable=False, default=UserRole.LEARNER.value)

    # active | suspended | banned -- only moderation changes it
    status = Column(String, nullable=False, default=UserStatus.ACTIVE.value, index=True)

    # Reputation: karma only grows through feedback, trust is recomputed on each feedback
    karma_points = Column(Integer, nullable=False, default=0, index=True)
    trust_score = Column(Integer, nullable=False, default=0, index=True)

    location = Column(String, nullable=False, default="Not specified")
    bio = Column(Text, nullable=True)
    timezone = Column(String, nullable=True)
    skills = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE.value
