import logging
import os

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

logger = logging.getLogger(__name__)


def _database_url() -> str:
    """DATABASE_URL from the environment, or a local SQLite file.

    Heroku-style ``postgres://`` URLs are rewritten for SQLAlchemy 2.
    """
    url = os.getenv("DATABASE_URL", "sqlite:///./local.db").strip()
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+psycopg2://", 1)
    return url


DATABASE_URL = _database_url()

# SQLite connections are shared across FastAPI's worker threads
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=connect_args, future=True)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

logger.info(
    "[DB] backend=%s url=%s",
    engine.url.get_backend_name(),
    engine.url.render_as_string(hide_password=True),
)
