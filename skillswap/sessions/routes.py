from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from skillswap.core.deps import get_current_user, get_store
from skillswap.core.errors import AuthorizationError, TransitionRejected
from skillswap.db.store import Store
from skillswap.reports.registry import file_report
from skillswap.reputation.feedback import submit_feedback
from skillswap.sessions.lifecycle import (
    clear_history,
    delete_session,
    get_session,
    list_sessions_for_user,
    perform_action,
    request_session,
)
from skillswap.sessions.machine import ActorRole, SessionAction, actor_role
from skillswap.sessions.models import SkillSession, SessionStatus
from skillswap.users.models import User

router = APIRouter(prefix="/sessions", tags=["sessions"])


class SessionRequest(BaseModel):
    skill_card_id: int
    session_time: datetime
    notes: Optional[str] = None


class FeedbackRequest(BaseModel):
    rating: int
    comment: Optional[str] = None


class ReportRequest(BaseModel):
    reason: str
    description: Optional[str] = None


def session_to_dict(session: SkillSession, viewer_id: Optional[int] = None) -> dict:
    data = {
        "id": session.id,
        "skill_card_id": session.skill_card_id,
        "learner_id": session.learner_id,
        "helper_id": session.helper_id,
        "session_time": session.session_time.isoformat() if session.session_time else None,
        "meeting_link": session.meeting_link,
        "notes": session.notes,
        "status": session.status,
        "created_at": str(session.created_at) if session.created_at else None,
    }
    if viewer_id is not None:
        data["my_role"] = actor_role(session, viewer_id).value
    return data


def _participant_session(store: Store, session_id: int, user: User) -> SkillSession:
    session = get_session(store, session_id)
    if actor_role(session, user.id) == ActorRole.OUTSIDER:
        raise AuthorizationError("You are not part of this session.")
    return session


@router.post("", status_code=201)
def create_session(
    body: SessionRequest,
    store: Store = Depends(get_store),
    user: User = Depends(get_current_user),
):
    session = request_session(
        store,
        learner_id=user.id,
        skill_card_id=body.skill_card_id,
        session_time=body.session_time,
        notes=body.notes,
    )
    return session_to_dict(session, user.id)


@router.get("")
def my_sessions(
    store: Store = Depends(get_store),
    user: User = Depends(get_current_user),
):
    sessions = list_sessions_for_user(store, user.id)
    return {"sessions": [session_to_dict(s, user.id) for s in sessions]}


@router.delete("")
def clear_my_history(
    store: Store = Depends(get_store),
    user: User = Depends(get_current_user),
):
    deleted = clear_history(store, user.id)
    return {"message": "Your session history has been cleared.", "deleted": deleted}


@router.delete("/{session_id}")
def remove_session(
    session_id: int,
    store: Store = Depends(get_store),
    user: User = Depends(get_current_user),
):
    delete_session(store, session_id, user.id)
    return {"message": "The session has been deleted."}


@router.post("/{session_id}/feedback", status_code=201)
def leave_feedback(
    session_id: int,
    body: FeedbackRequest,
    store: Store = Depends(get_store),
    user: User = Depends(get_current_user),
):
    """Rate the other participant of a completed session."""
    session = _participant_session(store, session_id, user)
    if session.status != SessionStatus.COMPLETED.value:
        raise TransitionRejected("Feedback can only be left on completed sessions.")

    to_user_id = session.helper_id if user.id == session.learner_id else session.learner_id
    outcome = submit_feedback(store, session.id, user.id, to_user_id, body.rating, body.comment)
    return {
        "feedback_id": outcome.feedback.id,
        "status": outcome.status,
        "stats_updated": outcome.stats_updated,
        "message": outcome.message,
        "karma_points": outcome.karma_points,
        "trust_score": outcome.trust_score,
    }


@router.post("/{session_id}/reports", status_code=201)
def report_session(
    session_id: int,
    body: ReportRequest,
    store: Store = Depends(get_store),
    user: User = Depends(get_current_user),
):
    session = _participant_session(store, session_id, user)
    report = file_report(store, session.id, user.id, body.reason, body.description)
    return {
        "report_id": report.id,
        "message": "Thank you for reporting this issue. We'll review it shortly.",
    }


# Registered last: the catch-all path would otherwise shadow /feedback and /reports
@router.post("/{session_id}/{action}")
def act_on_session(
    session_id: int,
    action: SessionAction,
    store: Store = Depends(get_store),
    user: User = Depends(get_current_user),
):
    session = perform_action(store, session_id, user.id, action)
    return session_to_dict(session, user.id)
