"""
Skill card catalog: creation, lookup, discovery and owner deletion.

Only ``approved`` cards are discoverable or requestable. Self-created cards
start approved unless CARDS_REQUIRE_APPROVAL is set, in which case they wait
in ``pending`` for a moderator.
"""
import logging
from typing import List, Optional, Tuple

from skillswap.cards.models import CardStatus, LEGACY_CARD_STATUSES, SkillCard, normalize_card_status
from skillswap.core.config import CARDS_REQUIRE_APPROVAL
from skillswap.core.errors import AuthorizationError, NotFoundError, ValidationError
from skillswap.db.store import Store
from skillswap.users.models import User
from skillswap.users.profiles import ensure_active

logger = logging.getLogger(__name__)

SORT_NEWEST = "newest"
SORT_KARMA = "karma"
SORT_FREE = "free"
SORT_OPTIONS = (SORT_NEWEST, SORT_KARMA, SORT_FREE)


def _required(value: Optional[str]) -> str:
    return (value or "").strip()


def create_skill_card(
    store: Store,
    owner: User,
    *,
    skill_offered: str,
    language: str,
    availability: str,
    location: str,
    is_paid: bool = False,
    price: Optional[int] = None,
    skill_needed: Optional[str] = None,
) -> SkillCard:
    ensure_active(owner)

    values = {
        "skill_offered": _required(skill_offered),
        "language": _required(language),
        "availability": _required(availability),
        "location": _required(location),
    }
    if not all(values.values()):
        raise ValidationError("Please fill in all required fields.")

    if is_paid:
        if isinstance(price, bool) or not isinstance(price, int) or price <= 0:
            raise ValidationError("Please enter a valid price for paid services.")
        values["price"] = price
        values["skill_needed"] = None
    else:
        values["price"] = None
        values["skill_needed"] = _required(skill_needed) or None

    status = CardStatus.PENDING if CARDS_REQUIRE_APPROVAL else CardStatus.APPROVED
    values.update({"user_id": owner.id, "is_paid": bool(is_paid), "status": status.value})

    card = store.insert(SkillCard, values).unwrap()
    logger.info("[CARD] user=%s created card=%s status=%s", owner.id, card.id, status.value)
    return card


def get_skill_card(store: Store, card_id: int) -> SkillCard:
    rows = store.select(SkillCard, id=card_id).unwrap()
    if not rows:
        raise NotFoundError(f"Skill card {card_id} not found")
    return rows[0]


def is_approved(card: SkillCard) -> bool:
    return normalize_card_status(card.status) == CardStatus.APPROVED


def list_my_skill_cards(store: Store, owner_id: int) -> List[SkillCard]:
    return store.select(SkillCard, user_id=owner_id, order_by=("-created_at", "-id")).unwrap()


def discover_skill_cards(
    store: Store,
    viewer_id: int,
    sort_by: str = SORT_NEWEST,
    search: Optional[str] = None,
) -> List[Tuple[SkillCard, Optional[User]]]:
    """Approved cards owned by someone else, with their owner (None if orphaned)."""
    if sort_by not in SORT_OPTIONS:
        raise ValidationError(f"sort_by must be one of: {', '.join(SORT_OPTIONS)}")

    cards = store.select(SkillCard, status=CardStatus.APPROVED.value).unwrap()
    for legacy in LEGACY_CARD_STATUSES:
        cards += store.select(SkillCard, status=legacy).unwrap()
    cards = [c for c in cards if c.user_id != viewer_id]

    if sort_by == SORT_FREE:
        cards = [c for c in cards if not c.is_paid]

    owners = {}
    for user_id in {c.user_id for c in cards}:
        rows = store.select(User, id=user_id).unwrap()
        owners[user_id] = rows[0] if rows else None

    if search:
        term = search.strip().lower()
        cards = [
            c for c in cards
            if term in c.skill_offered.lower()
            or term in c.location.lower()
            or term in c.language.lower()
        ]

    cards.sort(key=lambda c: (c.created_at is not None, c.created_at, c.id), reverse=True)
    if sort_by == SORT_KARMA:
        # stable sort keeps newest-first among equal karma
        cards.sort(
            key=lambda c: owners[c.user_id].karma_points if owners[c.user_id] else -1,
            reverse=True,
        )

    return [(c, owners[c.user_id]) for c in cards]


def delete_own_skill_card(store: Store, owner_id: int, card_id: int) -> None:
    card = get_skill_card(store, card_id)
    if card.user_id != owner_id:
        raise AuthorizationError("Only the card owner can delete this skill card.")
    store.delete(SkillCard, id=card_id).unwrap()
    logger.info("[CARD] user=%s deleted card=%s", owner_id, card_id)
