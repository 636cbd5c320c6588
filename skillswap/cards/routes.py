from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from skillswap.cards.catalog import (
    SORT_NEWEST,
    create_skill_card,
    delete_own_skill_card,
    discover_skill_cards,
    get_skill_card,
    list_my_skill_cards,
)
from skillswap.cards.models import SkillCard
from skillswap.core.deps import get_current_user, get_store
from skillswap.db.store import Store
from skillswap.users.models import User

router = APIRouter(prefix="/cards", tags=["cards"])


class SkillCardCreate(BaseModel):
    skill_offered: str
    language: str
    availability: str
    location: str
    is_paid: bool = False
    price: Optional[int] = None
    skill_needed: Optional[str] = None


def card_to_dict(card: SkillCard, owner: Optional[User] = None) -> dict:
    data = {
        "id": card.id,
        "user_id": card.user_id,
        "skill_offered": card.skill_offered,
        "skill_needed": card.skill_needed,
        "is_paid": card.is_paid,
        "price": card.price,
        "language": card.language,
        "availability": card.availability,
        "location": card.location,
        "status": card.status,
        "created_at": str(card.created_at) if card.created_at else None,
    }
    if owner is not None:
        data["owner"] = {"id": owner.id, "name": owner.name, "karma_points": owner.karma_points}
    return data


@router.post("", status_code=201)
def create_card(
    body: SkillCardCreate,
    store: Store = Depends(get_store),
    user: User = Depends(get_current_user),
):
    card = create_skill_card(store, user, **body.model_dump())
    return card_to_dict(card)


@router.get("")
def discover_cards(
    sort_by: str = Query(SORT_NEWEST),
    search: Optional[str] = Query(None),
    store: Store = Depends(get_store),
    user: User = Depends(get_current_user),
):
    listings = discover_skill_cards(store, user.id, sort_by=sort_by, search=search)
    return {"cards": [card_to_dict(card, owner) for card, owner in listings]}


@router.get("/mine")
def my_cards(
    store: Store = Depends(get_store),
    user: User = Depends(get_current_user),
):
    return {"cards": [card_to_dict(card) for card in list_my_skill_cards(store, user.id)]}


@router.get("/{card_id}")
def read_card(
    card_id: int,
    store: Store = Depends(get_store),
    user: User = Depends(get_current_user),
):
    return card_to_dict(get_skill_card(store, card_id))


@router.delete("/{card_id}")
def delete_card(
    card_id: int,
    store: Store = Depends(get_store),
    user: User = Depends(get_current_user),
):
    delete_own_skill_card(store, user.id, card_id)
    return {"message": "Skill card deleted"}
