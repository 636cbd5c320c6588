import pytest

from skillswap.core.errors import StorageError
from skillswap.users.models import User


def test_failures_are_returned_not_raised(store, make_user):
    existing = make_user("dup")

    # auth_user_id is unique
    result = store.insert(User, {"auth_user_id": existing.auth_user_id, "email": "x@example.com", "name": "x"})
    assert not result.ok
    assert result.data is None
    assert result.error

    with pytest.raises(StorageError):
        result.unwrap()

    # the store is still usable after a failed write
    assert [u.id for u in store.select(User).unwrap()] == [existing.id]


def test_select_filters_and_orders(store, make_user):
    a = make_user("a", karma=3)
    b = make_user("b", karma=9)
    c = make_user("c", karma=3, status="banned")

    assert [u.id for u in store.select(User, order_by="-karma_points").unwrap()][0] == b.id
    assert [u.id for u in store.select(User, order_by=("karma_points", "-id")).unwrap()] == [c.id, a.id, b.id]
    assert [u.id for u in store.select(User, karma_points=3, status="active").unwrap()] == [a.id]
    assert len(store.select(User, order_by="id", limit=2).unwrap()) == 2


def test_update_and_delete_report_row_counts(store, make_user):
    a = make_user(karma=1)
    make_user(karma=1)

    assert store.update(User, {"karma_points": 1}, {"karma_points": 2}).unwrap() == 2
    assert store.update(User, {"id": 999}, {"karma_points": 5}).unwrap() == 0
    a_id = a.id
    assert store.delete(User, id=a_id).unwrap() == 1
    assert store.delete(User, id=a_id).unwrap() == 0


def test_update_accepts_sql_expressions(store, make_user):
    user = make_user(karma=4)
    store.update(User, {"id": user.id}, {"karma_points": User.karma_points + 5}).unwrap()
    assert store.select(User, id=user.id).unwrap()[0].karma_points == 9


def test_atomic_rolls_back_everything(store, make_user):
    user = make_user(karma=1)

    with pytest.raises(RuntimeError):
        with store.atomic():
            store.update(User, {"id": user.id}, {"karma_points": 100}).unwrap()
            store.insert(User, {"auth_user_id": "new", "email": "n@example.com", "name": "n"}).unwrap()
            raise RuntimeError("boom")

    assert store.select(User, id=user.id).unwrap()[0].karma_points == 1
    assert store.select(User, auth_user_id="new").unwrap() == []
    assert not store.in_transaction


def test_nested_atomic_commits_once(store, make_user):
    user = make_user()
    with store.atomic():
        with store.atomic():
            store.update(User, {"id": user.id}, {"name": "renamed"}).unwrap()
        assert store.in_transaction
    assert store.select(User, id=user.id).unwrap()[0].name == "renamed"


def test_database_url_from_environment(monkeypatch):
    from skillswap.db.base import _database_url

    monkeypatch.setenv("DATABASE_URL", " postgres://u:p@db:5432/skillswap ")
    assert _database_url() == "postgresql+psycopg2://u:p@db:5432/skillswap"

    monkeypatch.delenv("DATABASE_URL")
    assert _database_url() == "sqlite:///./local.db"
