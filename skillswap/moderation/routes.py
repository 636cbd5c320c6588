from fastapi import APIRouter, Depends
from pydantic import BaseModel

from skillswap.cards.routes import card_to_dict
from skillswap.core.deps import get_current_user, get_store
from skillswap.db.store import Store
from skillswap.moderation import controller
from skillswap.moderation.models import Announcement
from skillswap.sessions.routes import session_to_dict
from skillswap.users.models import User
from skillswap.users.routes import user_to_dict

router = APIRouter(tags=["moderation"])


class StatusChange(BaseModel):
    status: str


class AnnouncementCreate(BaseModel):
    title: str
    message: str


def announcement_to_dict(a: Announcement) -> dict:
    return {
        "id": a.id,
        "title": a.title,
        "message": a.message,
        "created_by": a.created_by,
        "created_at": str(a.created_at) if a.created_at else None,
    }


@router.get("/announcements")
def announcements(store: Store = Depends(get_store)):
    return {"announcements": [announcement_to_dict(a) for a in controller.list_announcements(store)]}


# ======================================================
# ADMIN
# ======================================================
@router.get("/admin/overview")
def admin_overview(
    store: Store = Depends(get_store),
    user: User = Depends(get_current_user),
):
    data = controller.moderation_overview(store, user.id)
    return {
        "users": [user_to_dict(u, private=True) for u in data["users"]],
        "sessions": [session_to_dict(s) for s in data["sessions"]],
        "reports": [
            {
                "id": r.id,
                "session_id": r.session_id,
                "from_user_id": r.from_user_id,
                "reason": r.reason,
                "description": r.description,
                "created_at": str(r.created_at) if r.created_at else None,
            }
            for r in data["reports"]
        ],
        "skill_cards": [card_to_dict(c) for c in data["skill_cards"]],
        "announcements": [announcement_to_dict(a) for a in data["announcements"]],
    }


@router.post("/admin/users/{user_id}/status")
def admin_set_user_status(
    user_id: int,
    body: StatusChange,
    store: Store = Depends(get_store),
    user: User = Depends(get_current_user),
):
    target = controller.set_user_status(store, user.id, user_id, body.status)
    return user_to_dict(target, private=True)


@router.delete("/admin/users/{user_id}")
def admin_delete_user(
    user_id: int,
    store: Store = Depends(get_store),
    user: User = Depends(get_current_user),
):
    controller.delete_user_profile(store, user.id, user_id)
    return {"message": "User profile deleted"}


@router.post("/admin/cards/{card_id}/status")
def admin_set_card_status(
    card_id: int,
    body: StatusChange,
    store: Store = Depends(get_store),
    user: User = Depends(get_current_user),
):
    card = controller.set_skill_card_status(store, user.id, card_id, body.status)
    return card_to_dict(card)


@router.delete("/admin/cards/{card_id}")
def admin_delete_card(
    card_id: int,
    store: Store = Depends(get_store),
    user: User = Depends(get_current_user),
):
    controller.delete_skill_card(store, user.id, card_id)
    return {"message": "Skill card deleted"}


@router.delete("/admin/sessions/{session_id}")
def admin_delete_session(
    session_id: int,
    store: Store = Depends(get_store),
    user: User = Depends(get_current_user),
):
    controller.delete_session(store, user.id, session_id)
    return {"message": "Session deleted"}


@router.post("/admin/announcements", status_code=201)
def admin_create_announcement(
    body: AnnouncementCreate,
    store: Store = Depends(get_store),
    user: User = Depends(get_current_user),
):
    announcement = controller.create_announcement(store, user.id, body.title, body.message)
    return announcement_to_dict(announcement)


@router.delete("/admin/announcements/{announcement_id}")
def admin_delete_announcement(
    announcement_id: int,
    store: Store = Depends(get_store),
    user: User = Depends(get_current_user),
):
    controller.delete_announcement(store, user.id, announcement_id)
    return {"message": "Announcement has been removed."}
