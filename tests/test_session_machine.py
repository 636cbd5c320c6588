from datetime import datetime, timedelta, timezone

import pytest

from skillswap.sessions.machine import (
    ActorRole,
    SessionAction,
    TERMINAL_STATES,
    evaluate_transition,
)
from skillswap.sessions.models import SessionStatus

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
LATER = NOW + timedelta(hours=3)
EARLIER = NOW - timedelta(hours=3)


@pytest.mark.parametrize(
    "status, action, role, session_time, expected",
    [
        ("pending", "confirm", ActorRole.HELPER, LATER, SessionStatus.CONFIRMED),
        ("pending", "decline", ActorRole.HELPER, LATER, SessionStatus.DECLINED),
        ("pending", "cancel", ActorRole.LEARNER, LATER, SessionStatus.CANCELLED),
        ("confirmed", "complete", ActorRole.LEARNER, EARLIER, SessionStatus.COMPLETED),
    ],
)
def test_allowed_transitions(status, action, role, session_time, expected):
    decision = evaluate_transition(status, action, role, session_time, NOW)
    assert decision.allowed
    assert decision.new_status == expected
    assert decision.reason is None


@pytest.mark.parametrize("action", list(SessionAction))
@pytest.mark.parametrize("status", sorted(TERMINAL_STATES))
@pytest.mark.parametrize("role", [ActorRole.LEARNER, ActorRole.HELPER])
def test_terminal_states_reject_everything(status, action, role):
    for session_time in (LATER, EARLIER):
        decision = evaluate_transition(status, action, role, session_time, NOW)
        assert not decision.allowed
        assert decision.reason == f"Session is already {status.value}."


def test_helper_cannot_cancel():
    decision = evaluate_transition("pending", "cancel", ActorRole.HELPER, LATER, NOW)
    assert not decision.allowed
    assert decision.reason == "Only the learner can cancel this session."


def test_learner_cannot_confirm_or_decline():
    for action in ("confirm", "decline"):
        decision = evaluate_transition("pending", action, ActorRole.LEARNER, LATER, NOW)
        assert not decision.allowed
        assert decision.reason == f"Only the helper can {action} this session."


def test_helper_cannot_complete():
    decision = evaluate_transition("confirmed", "complete", ActorRole.HELPER, EARLIER, NOW)
    assert not decision.allowed


def test_outsider_is_rejected():
    decision = evaluate_transition("pending", "confirm", ActorRole.OUTSIDER, LATER, NOW)
    assert not decision.allowed


def test_cannot_complete_before_session_time():
    decision = evaluate_transition("confirmed", "complete", ActorRole.LEARNER, LATER, NOW)
    assert not decision.allowed
    assert decision.reason == "The session has not taken place yet."


@pytest.mark.parametrize("action, role", [("confirm", ActorRole.HELPER), ("cancel", ActorRole.LEARNER)])
def test_pending_actions_expire_at_session_time(action, role):
    assert not evaluate_transition("pending", action, role, EARLIER, NOW).allowed
    # exactly at session time is no longer "before"
    assert not evaluate_transition("pending", action, role, NOW, NOW).allowed


def test_pending_cannot_be_completed():
    decision = evaluate_transition("pending", "complete", ActorRole.LEARNER, EARLIER, NOW)
    assert decision.reason == "Cannot complete a pending session."


def test_confirmed_cannot_be_cancelled():
    decision = evaluate_transition("confirmed", "cancel", ActorRole.LEARNER, LATER, NOW)
    assert not decision.allowed
    assert decision.reason == "Cannot cancel a confirmed session."


def test_naive_session_time_is_treated_as_utc():
    naive_later = LATER.replace(tzinfo=None)
    assert evaluate_transition("pending", "confirm", ActorRole.HELPER, naive_later, NOW).allowed


def test_unknown_action_or_status():
    assert not evaluate_transition("pending", "approve", ActorRole.HELPER, LATER, NOW).allowed
    assert not evaluate_transition("archived", "confirm", ActorRole.HELPER, LATER, NOW).allowed


def test_decision_is_pure():
    first = evaluate_transition("pending", "confirm", ActorRole.HELPER, LATER, NOW)
    second = evaluate_transition("pending", "confirm", ActorRole.HELPER, LATER, NOW)
    assert first == second
