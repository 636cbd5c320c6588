"""
Session state machine.

    pending --confirm (helper, before start)--> confirmed
    pending --decline (helper, before start)--> declined
    pending --cancel (learner, before start)--> cancelled
    confirmed --complete (learner, after start)--> completed

declined / cancelled / completed are terminal. Deleting a session is not a
transition (see lifecycle.delete_session).

``evaluate_transition`` is pure: same inputs, same decision, no storage.
"""
from datetime import datetime
from enum import Enum
from typing import NamedTuple, Optional

from skillswap.core.timeutils import as_utc
from skillswap.sessions.models import SessionStatus


class SessionAction(str, Enum):
    CONFIRM = "confirm"
    DECLINE = "decline"
    CANCEL = "cancel"
    COMPLETE = "complete"


class ActorRole(str, Enum):
    LEARNER = "learner"
    HELPER = "helper"
    OUTSIDER = "outsider"


class _Rule(NamedTuple):
    actor: ActorRole
    # True: session_time must still be ahead; False: it must have passed
    before_start: bool
    target: SessionStatus


TRANSITIONS = {
    (SessionStatus.PENDING, SessionAction.CONFIRM): _Rule(ActorRole.HELPER, True, SessionStatus.CONFIRMED),
    (SessionStatus.PENDING, SessionAction.DECLINE): _Rule(ActorRole.HELPER, True, SessionStatus.DECLINED),
    (SessionStatus.PENDING, SessionAction.CANCEL): _Rule(ActorRole.LEARNER, True, SessionStatus.CANCELLED),
    (SessionStatus.CONFIRMED, SessionAction.COMPLETE): _Rule(ActorRole.LEARNER, False, SessionStatus.COMPLETED),
}

TERMINAL_STATES = frozenset({
    SessionStatus.DECLINED,
    SessionStatus.CANCELLED,
    SessionStatus.COMPLETED,
})


class TransitionDecision(NamedTuple):
    allowed: bool
    new_status: Optional[SessionStatus] = None
    reason: Optional[str] = None


def _reject(reason: str) -> TransitionDecision:
    return TransitionDecision(allowed=False, reason=reason)


def actor_role(session, user_id: int) -> ActorRole:
    if user_id == session.helper_id:
        return ActorRole.HELPER
    if user_id == session.learner_id:
        return ActorRole.LEARNER
    return ActorRole.OUTSIDER


def evaluate_transition(
    status,
    action,
    role: ActorRole,
    session_time: datetime,
    now: datetime,
) -> TransitionDecision:
    try:
        status = SessionStatus(status)
        action = SessionAction(action)
    except ValueError as exc:
        return _reject(str(exc))

    if role == ActorRole.OUTSIDER:
        return _reject("Only the session's learner or helper can change it.")

    if status in TERMINAL_STATES:
        return _reject(f"Session is already {status.value}.")

    rule = TRANSITIONS.get((status, action))
    if rule is None:
        return _reject(f"Cannot {action.value} a {status.value} session.")

    if role != rule.actor:
        return _reject(f"Only the {rule.actor.value} can {action.value} this session.")

    upcoming = as_utc(session_time) > as_utc(now)
    if rule.before_start and not upcoming:
        return _reject(f"The session time has passed; it can no longer be {rule.target.value}.")
    if not rule.before_start and upcoming:
        return _reject("The session has not taken place yet.")

    return TransitionDecision(allowed=True, new_status=rule.target)
