"""
Feedback processor.

Submitting feedback is two separate outcomes:

1. the Feedback row is inserted (failure here aborts everything), then
2. the ratee's reputation is updated: +KARMA_PER_FEEDBACK karma, and the trust
   score recomputed from their full rating history.

Step 2 never undoes step 1. A missing ratee or a failing reputation write
downgrades the result instead of failing the call, and the caller gets a
message saying which of the two happened.

Step 2 runs in one transaction that first locks the ratee row, so two
submissions for the same user serialize instead of losing an update.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from skillswap.core.config import KARMA_PER_FEEDBACK
from skillswap.core.errors import StorageError, ValidationError
from skillswap.db.store import Store
from skillswap.reports.registry import count_reports_for_session
from skillswap.reputation import accessor
from skillswap.reputation.models import Feedback
from skillswap.reputation.trust import compute_trust_score

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5

STATUS_OK = "ok"
# feedback stored, ratee row missing
STATUS_DEGRADED = "degraded"
# feedback stored, reputation write failed
STATUS_PARTIAL = "partial"


@dataclass
class FeedbackOutcome:
    feedback: Feedback
    status: str
    message: str
    karma_points: Optional[int] = None
    trust_score: Optional[int] = None

    @property
    def stats_updated(self) -> bool:
        return self.status == STATUS_OK


def validate_rating(rating) -> int:
    if rating is None or rating == 0:
        raise ValidationError("Please select a rating before submitting.")
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationError("Rating must be a whole number.")
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError(f"Rating must be between {MIN_RATING} and {MAX_RATING}.")
    return rating


def submit_feedback(
    store: Store,
    session_id: int,
    from_user_id: int,
    to_user_id: int,
    rating: int,
    comment: Optional[str] = None,
) -> FeedbackOutcome:
    rating = validate_rating(rating)

    feedback = store.insert(Feedback, {
        "session_id": session_id,
        "from_user_id": from_user_id,
        "to_user_id": to_user_id,
        "rating": rating,
        "comment": comment or None,
    }).unwrap()
    logger.info(
        "[FEEDBACK] session=%s from=%s to=%s rating=%s recorded",
        session_id, from_user_id, to_user_id, rating,
    )

    try:
        return _update_reputation(store, feedback)
    except StorageError as exc:
        logger.error(
            "[FEEDBACK] feedback=%s recorded but reputation update for user=%s failed: %s",
            feedback.id, to_user_id, exc.message,
        )
        return FeedbackOutcome(
            feedback=feedback,
            status=STATUS_PARTIAL,
            message=f"Feedback recorded, but the reputation update failed: {exc.message}",
        )


def _update_reputation(store: Store, feedback: Feedback) -> FeedbackOutcome:
    to_user_id = feedback.to_user_id
    session_id = feedback.session_id

    with store.atomic():
        current = accessor.get_karma_and_trust(store, to_user_id, lock=True)
        if current is None:
            logger.warning(
                "[FEEDBACK] feedback=%s recorded, user=%s not found; skipping karma/trust update",
                feedback.id, to_user_id,
            )
            return FeedbackOutcome(
                feedback=feedback,
                status=STATUS_DEGRADED,
                message="Feedback recorded, but the user's stats could not be updated.",
            )

        accessor.add_karma(store, to_user_id, KARMA_PER_FEEDBACK)

        history = store.select(Feedback, to_user_id=to_user_id).unwrap()
        reports = count_reports_for_session(store, session_id)
        trust = compute_trust_score((f.rating for f in history), reports)
        accessor.set_trust(store, to_user_id, trust)

        updated = accessor.get_karma_and_trust(store, to_user_id)

    logger.info(
        "[FEEDBACK] user=%s karma %s -> %s trust %s -> %s (ratings=%s reports_for_session=%s)",
        to_user_id, current.karma, updated.karma, current.trust, updated.trust,
        len(history), reports,
    )
    return FeedbackOutcome(
        feedback=feedback,
        status=STATUS_OK,
        message=f"Feedback submitted. They earned +{KARMA_PER_FEEDBACK} karma points!",
        karma_points=updated.karma,
        trust_score=updated.trust,
    )
