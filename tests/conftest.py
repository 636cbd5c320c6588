import itertools
import os
from datetime import timedelta

# Must be set before skillswap modules read the environment.
os.environ.setdefault("AUTH_JWT_SECRET", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from skillswap.main import app  # noqa: E402
from skillswap.cards.catalog import create_skill_card  # noqa: E402
from skillswap.core.security import create_access_token  # noqa: E402
from skillswap.core.timeutils import utcnow  # noqa: E402
from skillswap.db.base import Base  # noqa: E402
from skillswap.db.session import get_db  # noqa: E402
from skillswap.db.store import Store  # noqa: E402
from skillswap.sessions.lifecycle import request_session  # noqa: E402
from skillswap.users.models import User  # noqa: E402


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def store(db):
    return Store(db)


@pytest.fixture
def make_user(store):
    counter = itertools.count(1)

    def _make(name=None, role="learner", status="active", karma=0, trust=0, email=None):
        n = next(counter)
        name = name or f"user{n}"
        return store.insert(User, {
            "auth_user_id": f"auth-{name}-{n}",
            "email": email or f"{name}@example.com",
            "name": name,
            "role": role,
            "status": status,
            "karma_points": karma,
            "trust_score": trust,
            "skills": [],
        }).unwrap()

    return _make


@pytest.fixture
def make_card(store):
    def _make(owner, **overrides):
        fields = {
            "skill_offered": "Guitar",
            "language": "English",
            "availability": "Weekends",
            "location": "Remote",
        }
        fields.update(overrides)
        return create_skill_card(store, owner, **fields)

    return _make


@pytest.fixture
def make_session(store):
    """Pending session requested ``starts_in`` from now."""
    links = itertools.count(1)

    def _make(learner, card, starts_in=timedelta(hours=2), now=None):
        now = now or utcnow()
        return request_session(
            store,
            learner_id=learner.id,
            skill_card_id=card.id,
            session_time=now + starts_in,
            now=now,
            link_factory=lambda: f"https://meet.example/room-{next(links)}",
        )

    return _make


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def auth_headers(subject: str, email: str = "") -> dict:
    return {"Authorization": f"Bearer {create_access_token(subject, email or f'{subject}@example.com')}"}
