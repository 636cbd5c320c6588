import logging
import sys

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from skillswap.core.config import LOG_LEVEL
from skillswap.core.errors import SkillSwapError
from skillswap.db.base import Base, engine

# Import models so create_all picks them up
from skillswap.users.models import User  # noqa: F401
from skillswap.cards.models import SkillCard  # noqa: F401
from skillswap.sessions.models import SkillSession  # noqa: F401
from skillswap.reputation.models import Feedback  # noqa: F401
from skillswap.reports.models import Report  # noqa: F401
from skillswap.moderation.models import Announcement  # noqa: F401

from skillswap.users.routes import router as users_router
from skillswap.cards.routes import router as cards_router
from skillswap.sessions.routes import router as sessions_router
from skillswap.moderation.routes import router as moderation_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

app = FastAPI(title="SkillSwap", version="0.1.0")

# Create database tables (still useful in dev; in production prefer Alembic)
Base.metadata.create_all(bind=engine)


@app.exception_handler(SkillSwapError)
async def skillswap_error_handler(request: Request, exc: SkillSwapError):
    if exc.status_code >= 500:
        logger.error("[API] %s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "An internal server error occurred."},
    )


# Include routers
app.include_router(users_router)
app.include_router(cards_router)
app.include_router(sessions_router)
app.include_router(moderation_router)


@app.get("/", include_in_schema=False)
def root():
    return {"message": "Welcome to SkillSwap API"}
