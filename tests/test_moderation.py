import pytest

from skillswap.cards.catalog import discover_skill_cards, get_skill_card
from skillswap.core.errors import AuthorizationError, NotFoundError, ValidationError
from skillswap.moderation import controller
from skillswap.sessions.lifecycle import confirm_session, get_session
from skillswap.sessions.models import SkillSession
from skillswap.users.models import User


@pytest.fixture
def admin(make_user):
    return make_user("admin", role="admin")


def test_non_admin_is_rejected_everywhere(store, make_user, make_card):
    helper = make_user("helper", role="both")
    card = make_card(helper)
    target = make_user("target")

    calls = [
        lambda: controller.set_user_status(store, helper.id, target.id, "banned"),
        lambda: controller.delete_user_profile(store, helper.id, target.id),
        lambda: controller.set_skill_card_status(store, helper.id, card.id, "rejected"),
        lambda: controller.delete_skill_card(store, helper.id, card.id),
        lambda: controller.delete_session(store, helper.id, 1),
        lambda: controller.create_announcement(store, helper.id, "Hi", "There"),
        lambda: controller.delete_announcement(store, helper.id, 1),
        lambda: controller.moderation_overview(store, helper.id),
    ]
    for call in calls:
        with pytest.raises(AuthorizationError) as exc:
            call()
        assert exc.value.message == "Administrative privileges required"

    assert store.select(User, id=target.id).unwrap()[0].status == "active"
    assert get_skill_card(store, card.id).status == "approved"


def test_unknown_caller_is_rejected(store):
    with pytest.raises(AuthorizationError):
        controller.require_admin(store, 999)


def test_set_user_status_is_idempotent(store, admin, make_user):
    target = make_user("target")

    assert controller.set_user_status(store, admin.id, target.id, "suspended").status == "suspended"
    assert controller.set_user_status(store, admin.id, target.id, "suspended").status == "suspended"
    assert controller.set_user_status(store, admin.id, target.id, "active").status == "active"


def test_set_user_status_validates(store, admin, make_user):
    with pytest.raises(ValidationError):
        controller.set_user_status(store, admin.id, make_user().id, "deleted")
    with pytest.raises(NotFoundError):
        controller.set_user_status(store, admin.id, 4040, "banned")


def test_card_moderation(store, admin, make_user, make_card):
    owner = make_user("owner")
    viewer = make_user("viewer")
    card = make_card(owner)

    controller.set_skill_card_status(store, admin.id, card.id, "rejected")
    assert discover_skill_cards(store, viewer.id) == []

    controller.set_skill_card_status(store, admin.id, card.id, "approved")
    assert len(discover_skill_cards(store, viewer.id)) == 1

    with pytest.raises(ValidationError):
        controller.set_skill_card_status(store, admin.id, card.id, "active")


def test_delete_card_leaves_other_cards(store, admin, make_user, make_card):
    owner = make_user("owner")
    doomed = make_card(owner)
    survivor = make_card(owner, skill_offered="Painting")

    doomed_id = doomed.id
    controller.delete_skill_card(store, admin.id, doomed_id)

    with pytest.raises(NotFoundError):
        get_skill_card(store, doomed_id)
    assert get_skill_card(store, survivor.id).skill_offered == "Painting"
    with pytest.raises(NotFoundError):
        controller.delete_skill_card(store, admin.id, doomed_id)


def test_delete_session_ignores_state_machine(store, admin, make_user, make_card, make_session):
    helper = make_user("helper")
    learner = make_user("learner")
    session = make_session(learner, make_card(helper))
    session_id = session.id
    confirm_session(store, session_id, helper.id)

    controller.delete_session(store, admin.id, session_id)
    with pytest.raises(NotFoundError):
        get_session(store, session_id)


def test_deleting_user_orphans_their_rows(store, admin, make_user, make_card, make_session):
    helper = make_user("helper")
    learner = make_user("learner")
    card = make_card(helper)
    session = make_session(learner, card)
    helper_id = helper.id

    controller.delete_user_profile(store, admin.id, helper_id)

    assert store.select(User, id=helper_id).unwrap() == []
    assert get_skill_card(store, card.id).user_id == helper_id
    assert get_session(store, session.id).helper_id == helper_id
    with pytest.raises(NotFoundError):
        controller.delete_user_profile(store, admin.id, helper_id)


def test_announcements(store, admin):
    first = controller.create_announcement(store, admin.id, " Maintenance ", "Down at 2am")
    second = controller.create_announcement(store, admin.id, "New feature", "Leaderboards!")

    assert first.title == "Maintenance"
    assert first.created_by == admin.id
    assert [a.id for a in controller.list_announcements(store)] == [second.id, first.id]

    with pytest.raises(ValidationError):
        controller.create_announcement(store, admin.id, "", "body")

    first_id = first.id
    controller.delete_announcement(store, admin.id, first_id)
    assert [a.id for a in controller.list_announcements(store)] == [second.id]
    with pytest.raises(NotFoundError):
        controller.delete_announcement(store, admin.id, first_id)


def test_overview(store, admin, make_user, make_card, make_session):
    learner = make_user("learner")
    make_session(learner, make_card(make_user("helper")))

    overview = controller.moderation_overview(store, admin.id)
    assert len(overview["users"]) == 3
    assert len(overview["sessions"]) == 1
    assert len(overview["skill_cards"]) == 1
    assert overview["reports"] == []
    assert store.select(SkillSession).unwrap()[0].learner_id == learner.id
