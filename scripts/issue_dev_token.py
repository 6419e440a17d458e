"""
Script to issue a bearer token for a development user, optionally seeding
that user's remote store with the demo data.
Run: python -m scripts.issue_dev_token <user_id> [--demo]
"""
import asyncio
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from jobtracker.core.auth import TokenAuthProvider
from jobtracker.db.init_db import init_db
from jobtracker.db.session import SessionLocal
from jobtracker.services.remote_store import RemoteBackend
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def issue_token(user_id: str, seed_demo: bool = False) -> str:
    """Sign a token for `user_id`; with seed_demo, load demo data for them first."""
    auth = TokenAuthProvider()
    token = auth.sign_in(user_id)

    if seed_demo:
        init_db()
        remote = RemoteBackend(SessionLocal, auth)
        await remote.load_demo_data()
        logger.info(f"Seeded demo data for user {user_id}")

    return token


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python -m scripts.issue_dev_token <user_id> [--demo]")
        sys.exit(1)

    user_id = sys.argv[1]
    token = asyncio.run(issue_token(user_id, seed_demo="--demo" in sys.argv[2:]))
    print(f"\n[SUCCESS] Token for {user_id}:")
    print(f"   Authorization: Bearer {token}")
