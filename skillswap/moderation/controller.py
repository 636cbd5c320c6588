"""
Moderation: privileged overrides of users, skill cards and sessions.

Every operation first checks that the caller's own profile has the ``admin``
role. Nothing else grants moderation rights.

Deletes are hard deletes and do not cascade. Sessions, cards, feedback and
reports pointing at a deleted row are left as they are.
"""
import logging

from skillswap.cards.models import CardStatus, SkillCard
from skillswap.core.errors import AuthorizationError, NotFoundError, ValidationError
from skillswap.db.store import Store
from skillswap.moderation.models import Announcement
from skillswap.reports.registry import list_reports
from skillswap.sessions.models import SkillSession
from skillswap.users.models import User, UserStatus

logger = logging.getLogger(__name__)

MODERATED_CARD_STATUSES = (CardStatus.APPROVED, CardStatus.REJECTED, CardStatus.PENDING)


def require_admin(store: Store, caller_id: int) -> User:
    rows = store.select(User, id=caller_id).unwrap()
    if not rows or not rows[0].is_admin:
        logger.warning("[MODERATION] access denied for user=%s", caller_id)
        raise AuthorizationError("Administrative privileges required")
    return rows[0]


def _exists(store: Store, model, row_id: int, label: str):
    rows = store.select(model, id=row_id).unwrap()
    if not rows:
        raise NotFoundError(f"{label} {row_id} not found")
    return rows[0]


# ----------------------------------------------------------------------
# users
# ----------------------------------------------------------------------

def set_user_status(store: Store, caller_id: int, user_id: int, status: str) -> User:
    """Overwrite a user's status. Any status can follow any other."""
    require_admin(store, caller_id)
    try:
        status = UserStatus(status)
    except ValueError:
        raise ValidationError("Status must be one of: active, suspended, banned.")

    target = _exists(store, User, user_id, "User")
    if target.status != status.value:
        store.update(User, {"id": user_id}, {"status": status.value}).unwrap()
        logger.info("[MODERATION] admin=%s set user=%s status %s -> %s", caller_id, user_id, target.status, status.value)
    return _exists(store, User, user_id, "User")


def delete_user_profile(store: Store, caller_id: int, user_id: int) -> None:
    require_admin(store, caller_id)
    _exists(store, User, user_id, "User")
    store.delete(User, id=user_id).unwrap()
    logger.info("[MODERATION] admin=%s deleted user=%s", caller_id, user_id)


# ----------------------------------------------------------------------
# skill cards
# ----------------------------------------------------------------------

def set_skill_card_status(store: Store, caller_id: int, card_id: int, status: str) -> SkillCard:
    require_admin(store, caller_id)
    try:
        status = CardStatus(status)
    except ValueError:
        status = None
    if status not in MODERATED_CARD_STATUSES:
        raise ValidationError("Status must be one of: approved, rejected, pending.")

    card = _exists(store, SkillCard, card_id, "Skill card")
    if card.status != status.value:
        store.update(SkillCard, {"id": card_id}, {"status": status.value}).unwrap()
        logger.info("[MODERATION] admin=%s set card=%s status %s -> %s", caller_id, card_id, card.status, status.value)
    return _exists(store, SkillCard, card_id, "Skill card")


def delete_skill_card(store: Store, caller_id: int, card_id: int) -> None:
    require_admin(store, caller_id)
    _exists(store, SkillCard, card_id, "Skill card")
    store.delete(SkillCard, id=card_id).unwrap()
    logger.info("[MODERATION] admin=%s deleted card=%s", caller_id, card_id)


# ----------------------------------------------------------------------
# sessions
# ----------------------------------------------------------------------

def delete_session(store: Store, caller_id: int, session_id: int) -> None:
    """Hard delete regardless of status; the state machine is not consulted."""
    require_admin(store, caller_id)
    _exists(store, SkillSession, session_id, "Session")
    store.delete(SkillSession, id=session_id).unwrap()
    logger.info("[MODERATION] admin=%s deleted session=%s", caller_id, session_id)


# ----------------------------------------------------------------------
# announcements
# ----------------------------------------------------------------------

def create_announcement(store: Store, caller_id: int, title: str, message: str) -> Announcement:
    require_admin(store, caller_id)
    title = (title or "").strip()
    message = (message or "").strip()
    if not title or not message:
        raise ValidationError("Announcement title and message are required.")

    announcement = store.insert(Announcement, {
        "title": title,
        "message": message,
        "created_by": caller_id,
    }).unwrap()
    logger.info("[MODERATION] admin=%s posted announcement=%s", caller_id, announcement.id)
    return announcement


def delete_announcement(store: Store, caller_id: int, announcement_id: int) -> None:
    require_admin(store, caller_id)
    _exists(store, Announcement, announcement_id, "Announcement")
    store.delete(Announcement, id=announcement_id).unwrap()
    logger.info("[MODERATION] admin=%s deleted announcement=%s", caller_id, announcement_id)


def list_announcements(store: Store):
    return store.select(Announcement, order_by=("-created_at", "-id")).unwrap()


def moderation_overview(store: Store, caller_id: int) -> dict:
    """Everything the admin dashboard shows, newest first."""
    require_admin(store, caller_id)
    newest = ("-created_at", "-id")
    return {
        "users": store.select(User, order_by=newest).unwrap(),
        "sessions": store.select(SkillSession, order_by=newest).unwrap(),
        "reports": list_reports(store),
        "skill_cards": store.select(SkillCard, order_by=newest).unwrap(),
        "announcements": list_announcements(store),
    }
