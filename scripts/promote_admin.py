"""
Script to grant the admin role to an existing profile.

Moderation is only available to profiles with role "admin", and nobody can
give themselves that role through the API. Run this once for the first
moderator (they must have signed in at least once so their profile exists):

    python scripts/promote_admin.py moderator@example.com
"""
import sys
import os

# Add the parent directory to the path so we can import skillswap modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from skillswap.core.errors import SkillSwapError
from skillswap.db.session import SessionLocal
from skillswap.db.store import Store
from skillswap.users.profiles import promote_to_admin


def main(email: str) -> bool:
    db = SessionLocal()

    try:
        user = promote_to_admin(Store(db), email)
        print(f"SUCCESS: User '{user.name}' (ID: {user.id}) now has the admin role.")
        print(f"Email: {user.email}")
        return True

    except SkillSwapError as e:
        print(f"ERROR: Failed to promote {email}: {e.message}")
        return False
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python scripts/promote_admin.py <email>")
        sys.exit(2)

    print(f"Promoting {sys.argv[1]} to admin...")
    print("-" * 50)

    if main(sys.argv[1]):
        print("-" * 50)
        print("Admin promotion complete!")
    else:
        print("-" * 50)
        print("Admin promotion failed!")
        sys.exit(1)
