"""
Profile helpers: auto-provisioning on first authenticated access, self-service
edits, and the admin bootstrap used by scripts/promote_admin.py.
"""
import logging
from typing import Optional

from skillswap.core.errors import AccountRestrictedError, NotFoundError, ValidationError
from skillswap.db.store import Store
from skillswap.users.models import SELF_SERVICE_ROLES, User, UserRole, UserStatus

logger = logging.getLogger(__name__)

# Fields a user may change on their own profile
EDITABLE_FIELDS = ("name", "role", "skills", "location", "bio", "timezone")


def get_user(store: Store, user_id: int) -> User:
    rows = store.select(User, id=user_id).unwrap()
    if not rows:
        raise NotFoundError(f"User {user_id} not found")
    return rows[0]


def get_or_create_profile(store: Store, auth_user_id: str, email: Optional[str]) -> User:
    """Profile linked to ``auth_user_id``, created with defaults on first access."""
    rows = store.select(User, auth_user_id=auth_user_id).unwrap()
    if rows:
        return rows[0]

    email = email or ""
    user = store.insert(User, {
        "auth_user_id": auth_user_id,
        "email": email,
        "name": email.split("@")[0] or "New User",
        "role": UserRole.LEARNER.value,
        "status": UserStatus.ACTIVE.value,
        "skills": [],
        "location": "Not specified",
        "karma_points": 0,
        "trust_score": 0,
    }).unwrap()
    logger.info("[PROFILE] provisioned user=%s for auth_user_id=%s", user.id, auth_user_id)
    return user


def update_profile(store: Store, user_id: int, **fields) -> User:
    unknown = set(fields) - set(EDITABLE_FIELDS)
    if unknown:
        raise ValidationError(f"Cannot update field(s): {', '.join(sorted(unknown))}")

    patch = {}
    for name, value in fields.items():
        if value is None and name in ("name", "role", "skills", "location"):
            continue
        patch[name] = value

    if "name" in patch:
        patch["name"] = patch["name"].strip()
        if not patch["name"]:
            raise ValidationError("Name is required.")
    if "role" in patch:
        if patch["role"] not in [r.value for r in SELF_SERVICE_ROLES]:
            raise ValidationError("Role must be one of: learner, helper, both.")
    if "skills" in patch:
        patch["skills"] = [s.strip() for s in patch["skills"] if s and s.strip()]
    if "location" in patch and not patch["location"].strip():
        raise ValidationError("Location is required.")

    get_user(store, user_id)
    if patch:
        store.update(User, {"id": user_id}, patch).unwrap()
    return get_user(store, user_id)


def ensure_active(user: User) -> None:
    """Suspended and banned accounts may not create cards or act on sessions."""
    if user.status != UserStatus.ACTIVE.value:
        raise AccountRestrictedError(f"Your account is {user.status}.")


def promote_to_admin(store: Store, email: str) -> User:
    rows = store.select(User, email=email).unwrap()
    if not rows:
        raise NotFoundError(f"No profile with e-mail {email}")
    user = rows[0]
    if not user.is_admin:
        store.update(User, {"id": user.id}, {"role": UserRole.ADMIN.value}).unwrap()
        logger.info("[PROFILE] user=%s promoted to admin", user.id)
    return get_user(store, user.id)
