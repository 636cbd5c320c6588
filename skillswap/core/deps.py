import logging

from fastapi import Request, Depends, HTTPException
from sqlalchemy.orm import Session

from skillswap.db.session import get_db
from skillswap.db.store import Store
from skillswap.users.models import User
from skillswap.users.profiles import get_or_create_profile
from skillswap.core.security import decode_access_token

logger = logging.getLogger(__name__)


def get_store(db: Session = Depends(get_db)) -> Store:
    return Store(db)


def _read_token(request: Request):
    auth_header = request.headers.get("authorization")
    if auth_header and auth_header.lower().startswith("bearer "):
        return auth_header[7:].strip()

    token = request.cookies.get("access_token")
    # Support both "Bearer <token>" and raw token values in the cookie.
    if isinstance(token, str) and token.lower().startswith("bearer "):
        token = token[7:].strip()
    return token


def get_current_user(
    request: Request,
    store: Store = Depends(get_store),
) -> User:
    """Profile of the caller; created on first authenticated access."""
    token = _read_token(request)
    if not token:
        logger.info("[AUTH] reject reason=missing_token path=%s", request.url.path)
        raise HTTPException(status_code=401, detail="Not authenticated")

    payload = decode_access_token(token)
    if not payload:
        logger.info("[AUTH] reject reason=invalid_token path=%s", request.url.path)
        raise HTTPException(status_code=401, detail="Invalid token")

    auth_user_id = payload.get("sub")
    if not auth_user_id:
        logger.info("[AUTH] reject reason=no_subject path=%s", request.url.path)
        raise HTTPException(status_code=401, detail="Invalid token payload")

    return get_or_create_profile(store, str(auth_user_id), payload.get("email"))
