"""
Reads and writes a user's karma_points / trust_score.

No caching: every read goes to the store. Storage failures surface as
``StorageError``; nothing here retries.
"""
from typing import NamedTuple, Optional

from skillswap.db.store import Store
from skillswap.users.models import User


class KarmaTrust(NamedTuple):
    karma: int
    trust: int


def get_karma_and_trust(store: Store, user_id: int, lock: bool = False) -> Optional[KarmaTrust]:
    """Current reputation of ``user_id``, or None when the user row is missing.

    ``lock=True`` reads the row FOR UPDATE; only meaningful inside ``store.atomic()``.
    """
    rows = store.select(User, id=user_id, for_update=lock).unwrap()
    if not rows:
        return None
    user = rows[0]
    return KarmaTrust(karma=user.karma_points or 0, trust=user.trust_score or 0)


def set_karma(store: Store, user_id: int, value: int) -> bool:
    return store.update(User, {"id": user_id}, {"karma_points": max(0, value)}).unwrap() > 0


def set_trust(store: Store, user_id: int, value: int) -> bool:
    return store.update(User, {"id": user_id}, {"trust_score": max(0, value)}).unwrap() > 0


def add_karma(store: Store, user_id: int, amount: int) -> bool:
    """Increment karma in place (single UPDATE), so concurrent bonuses never overwrite each other."""
    patch = {"karma_points": User.karma_points + amount}
    return store.update(User, {"id": user_id}, patch).unwrap() > 0
