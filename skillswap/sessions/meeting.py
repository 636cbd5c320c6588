import secrets
import string
import time

from skillswap.core.config import MEETING_BASE_URL

_ALPHABET = string.ascii_lowercase + string.digits


def generate_meeting_link() -> str:
    """Opaque, unique meeting room URL: ``{base}-{epoch_ms}-{9 random chars}``."""
    timestamp = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(9))
    return f"{MEETING_BASE_URL}-{timestamp}-{suffix}"
