from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from skillswap.core.deps import get_current_user, get_store
from skillswap.db.store import Store
from skillswap.reputation.trust import get_leaderboard, trust_badge
from skillswap.users.models import User
from skillswap.users.profiles import get_user, update_profile

router = APIRouter(tags=["users"])


class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    role: Optional[str] = None
    skills: Optional[List[str]] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    timezone: Optional[str] = None


def user_to_dict(user: User, private: bool = False) -> dict:
    data = {
        "id": user.id,
        "name": user.name,
        "role": user.role,
        "status": user.status,
        "karma_points": user.karma_points,
        "trust_score": user.trust_score,
        "badge": trust_badge(user.trust_score),
        "location": user.location,
        "bio": user.bio,
        "timezone": user.timezone,
        "skills": list(user.skills or []),
        "created_at": str(user.created_at) if user.created_at else None,
    }
    if private:
        data["email"] = user.email
    return data


@router.get("/me")
def read_me(user: User = Depends(get_current_user)):
    return user_to_dict(user, private=True)


@router.patch("/me")
def update_me(
    body: ProfileUpdate,
    store: Store = Depends(get_store),
    user: User = Depends(get_current_user),
):
    fields = body.model_dump(exclude_unset=True)
    return user_to_dict(update_profile(store, user.id, **fields), private=True)


@router.get("/users/{user_id}")
def read_user(
    user_id: int,
    store: Store = Depends(get_store),
    user: User = Depends(get_current_user),
):
    return user_to_dict(get_user(store, user_id))


@router.get("/leaderboard")
def leaderboard(store: Store = Depends(get_store)):
    return {"leaders": get_leaderboard(store)}
