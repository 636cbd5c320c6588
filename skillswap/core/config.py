"""
Configuration constants for the application.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).resolve().parent.parent.parent / '.env'
load_dotenv(dotenv_path=env_path)


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# Shared secret used to verify identity tokens issued by the auth provider.
# IMPORTANT: Do NOT hardcode secrets in code or commit them to git.
AUTH_JWT_SECRET = os.getenv("AUTH_JWT_SECRET", os.getenv("SECRET_KEY", ""))
AUTH_JWT_ALGORITHM = os.getenv("AUTH_JWT_ALGORITHM", "HS256")
# Optional: when set, tokens must carry this "aud" claim (e.g. "authenticated")
AUTH_JWT_AUDIENCE = os.getenv("AUTH_JWT_AUDIENCE", "") or None

ENVIRONMENT = os.getenv("ENVIRONMENT", "development").lower()

# Reputation
KARMA_PER_FEEDBACK = int(os.getenv("KARMA_PER_FEEDBACK", "5"))
LEADERBOARD_SIZE = int(os.getenv("LEADERBOARD_SIZE", "10"))

# Sessions: prefix for generated meeting rooms
MEETING_BASE_URL = os.getenv("MEETING_BASE_URL", "https://meet.jit.si/SkillSwap").rstrip("-/")

# Skill cards: when enabled, self-created cards wait for moderator approval
CARDS_REQUIRE_APPROVAL = _env_flag("CARDS_REQUIRE_APPROVAL")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
