"""
Trust score arithmetic, badges and the leaderboard.

Trust is fully recomputed from the ratee's whole feedback history:

    trust = max(0, round(avg_rating * feedback_count - reports_for_session))

``avg_rating * feedback_count`` is just the rating sum; the formula is kept
as-is because stored scores already follow it. Only the reports filed against
the session being rated count, not every report about the user.
"""
import math
from typing import Iterable, List, Optional

from skillswap.core.config import LEADERBOARD_SIZE
from skillswap.db.store import Store
from skillswap.sessions.models import SkillSession, SessionStatus
from skillswap.users.models import User

GOLD_MENTOR_THRESHOLD = 90
TRUSTED_THRESHOLD = 75


def _round_half_up(value: float) -> int:
    # round() is banker's rounding; scores have always rounded .5 up
    return int(math.floor(value + 0.5))


def compute_trust_score(ratings: Iterable[int], reports_for_session: int) -> int:
    ratings = list(ratings)
    if not ratings:
        return 0
    count = len(ratings)
    avg_rating = sum(ratings) / count
    return max(0, _round_half_up(avg_rating * count - reports_for_session))


def trust_badge(trust_score: int) -> Optional[str]:
    if trust_score >= GOLD_MENTOR_THRESHOLD:
        return "Gold Mentor"
    if trust_score >= TRUSTED_THRESHOLD:
        return "Trusted"
    return None


def get_leaderboard(store: Store, limit: int = LEADERBOARD_SIZE) -> List[dict]:
    """Top users by karma, ties broken by trust, with completed sessions taught."""
    users = store.select(
        User, order_by=("-karma_points", "-trust_score", "id"), limit=limit
    ).unwrap()

    board = []
    for rank, user in enumerate(users, start=1):
        taught = store.select(
            SkillSession, helper_id=user.id, status=SessionStatus.COMPLETED.value
        ).unwrap()
        board.append({
            "rank": rank,
            "id": user.id,
            "name": user.name,
            "karma_points": user.karma_points,
            "trust_score": user.trust_score,
            "skills": list(user.skills or []),
            "sessions_taught": len(taught),
            "badge": trust_badge(user.trust_score),
        })
    return board
