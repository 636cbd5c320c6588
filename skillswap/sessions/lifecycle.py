"""
Session lifecycle operations: request, act, delete, clear history.

Every status write is a compare-and-swap on the status that was read, so two
parties acting on the same session at once cannot both succeed.
"""
import logging
from datetime import datetime
from typing import Callable, List, Optional

from skillswap.cards.catalog import get_skill_card, is_approved
from skillswap.core.errors import (
    AuthorizationError,
    NotFoundError,
    StaleSessionError,
    TransitionRejected,
    ValidationError,
)
from skillswap.core.timeutils import as_utc, utcnow
from skillswap.db.store import Store
from skillswap.sessions.machine import (
    ActorRole,
    SessionAction,
    actor_role,
    evaluate_transition,
)
from skillswap.sessions.meeting import generate_meeting_link
from skillswap.sessions.models import SkillSession, SessionStatus
from skillswap.users.profiles import ensure_active, get_user

logger = logging.getLogger(__name__)


def get_session(store: Store, session_id: int) -> SkillSession:
    rows = store.select(SkillSession, id=session_id).unwrap()
    if not rows:
        raise NotFoundError(f"Session {session_id} not found")
    return rows[0]


def request_session(
    store: Store,
    learner_id: int,
    skill_card_id: int,
    session_time: datetime,
    notes: Optional[str] = None,
    now: Optional[datetime] = None,
    link_factory: Callable[[], str] = generate_meeting_link,
) -> SkillSession:
    if session_time is None:
        raise ValidationError("Please select a date and time for your session")
    now = now or utcnow()
    session_time = as_utc(session_time)
    if session_time <= as_utc(now):
        raise ValidationError("Please select a date and time in the future.")

    learner = get_user(store, learner_id)
    ensure_active(learner)

    card = get_skill_card(store, skill_card_id)
    if not is_approved(card):
        raise ValidationError("This skill card is not open for session requests.")
    if card.user_id == learner_id:
        raise ValidationError("You cannot request a session on your own skill card.")

    # The owner must be able to confirm or decline later
    try:
        helper = get_user(store, card.user_id)
    except NotFoundError:
        raise ValidationError("This skill card is no longer available.")
    if not helper.is_active:
        raise ValidationError("This skill card is no longer available.")

    session = store.insert(SkillSession, {
        "skill_card_id": card.id,
        "learner_id": learner_id,
        "helper_id": card.user_id,
        "session_time": session_time,
        "meeting_link": link_factory(),
        "notes": notes or None,
        "status": SessionStatus.PENDING.value,
    }).unwrap()
    logger.info(
        "[SESSION] session=%s requested learner=%s helper=%s card=%s at=%s",
        session.id, learner_id, card.user_id, card.id, session_time.isoformat(),
    )
    return session


def perform_action(
    store: Store,
    session_id: int,
    actor_id: int,
    action,
    now: Optional[datetime] = None,
) -> SkillSession:
    """Apply ``action`` on behalf of ``actor_id``.

    Non-participants get ``AuthorizationError``; a disallowed move gets ``TransitionRejected``.
    """
    session = get_session(store, session_id)
    role = actor_role(session, actor_id)
    if role == ActorRole.OUTSIDER:
        raise AuthorizationError("Only the session's learner or helper can change it.")
    ensure_active(get_user(store, actor_id))

    decision = evaluate_transition(session.status, action, role, session.session_time, now or utcnow())
    if not decision.allowed:
        logger.info("[SESSION] session=%s %s by user=%s rejected: %s", session_id, action, actor_id, decision.reason)
        raise TransitionRejected(decision.reason)

    previous = session.status
    matched = store.update(
        SkillSession,
        {"id": session_id, "status": previous},
        {"status": decision.new_status.value},
    ).unwrap()
    if matched == 0:
        raise StaleSessionError("This session was changed by someone else. Reload and try again.")

    logger.info(
        "[SESSION] session=%s %s -> %s by user=%s",
        session_id, previous, decision.new_status.value, actor_id,
    )
    return get_session(store, session_id)


def confirm_session(store: Store, session_id: int, helper_id: int, now: Optional[datetime] = None) -> SkillSession:
    return perform_action(store, session_id, helper_id, SessionAction.CONFIRM, now)


def decline_session(store: Store, session_id: int, helper_id: int, now: Optional[datetime] = None) -> SkillSession:
    return perform_action(store, session_id, helper_id, SessionAction.DECLINE, now)


def cancel_session(store: Store, session_id: int, learner_id: int, now: Optional[datetime] = None) -> SkillSession:
    return perform_action(store, session_id, learner_id, SessionAction.CANCEL, now)


def complete_session(store: Store, session_id: int, learner_id: int, now: Optional[datetime] = None) -> SkillSession:
    return perform_action(store, session_id, learner_id, SessionAction.COMPLETE, now)


def delete_session(store: Store, session_id: int, actor_id: int) -> None:
    """Hard delete by a participant, whatever the status. Feedback and reports stay."""
    session = get_session(store, session_id)
    if actor_role(session, actor_id) == ActorRole.OUTSIDER:
        raise AuthorizationError("Only the session's learner or helper can delete it.")
    store.delete(SkillSession, id=session_id).unwrap()
    logger.info("[SESSION] session=%s deleted by user=%s", session_id, actor_id)


def clear_history(store: Store, user_id: int) -> int:
    """Delete every session the user takes part in, as one all-or-nothing step."""
    with store.atomic():
        as_learner = store.delete(SkillSession, learner_id=user_id).unwrap()
        as_helper = store.delete(SkillSession, helper_id=user_id).unwrap()
    logger.info("[SESSION] user=%s cleared history (%s sessions)", user_id, as_learner + as_helper)
    return as_learner + as_helper


def list_sessions_for_user(store: Store, user_id: int) -> List[SkillSession]:
    rows = store.select(SkillSession, learner_id=user_id).unwrap()
    rows += store.select(SkillSession, helper_id=user_id).unwrap()
    unique = {s.id: s for s in rows}
    return sorted(unique.values(), key=lambda s: (as_utc(s.session_time), s.id))
