"""
Identity tokens.

Tokens are issued by the external auth provider; this module only verifies
them. ``create_access_token`` exists for local tooling and tests.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError

from skillswap.core.config import (
    AUTH_JWT_ALGORITHM,
    AUTH_JWT_AUDIENCE,
    AUTH_JWT_SECRET,
    ENVIRONMENT,
)

logger = logging.getLogger(__name__)

SECRET_KEY = AUTH_JWT_SECRET
if not SECRET_KEY:
    # In production, require a secret; for local dev, use a default (UNSAFE for prod)
    if ENVIRONMENT == "production":
        raise RuntimeError("AUTH_JWT_SECRET env var is required in production")
    SECRET_KEY = "dev-secret-key-CHANGE-IN-PRODUCTION-12345678901234567890"
    logger.warning("[AUTH] Using default AUTH_JWT_SECRET for development. DO NOT USE IN PRODUCTION!")

ACCESS_TOKEN_EXPIRE_MINUTES = 60


def create_access_token(subject: str, email: str = "", expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    claims = {"sub": subject, "email": email, "exp": expire}
    if AUTH_JWT_AUDIENCE:
        claims["aud"] = AUTH_JWT_AUDIENCE
    return jwt.encode(claims, SECRET_KEY, algorithm=AUTH_JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    try:
        return jwt.decode(
            token,
            SECRET_KEY,
            algorithms=[AUTH_JWT_ALGORITHM],
            audience=AUTH_JWT_AUDIENCE,
            options={"verify_aud": AUTH_JWT_AUDIENCE is not None},
        )
    except jwt.ExpiredSignatureError:
        logger.info("[AUTH] Token expired")
        return None
    except JWTError as e:
        logger.info("[AUTH] JWT decode error: %s", type(e).__name__)
        return None
