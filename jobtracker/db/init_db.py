"""
Create remote store tables directly, without running migrations.
"""
import logging

from jobtracker.db.base import Base
import jobtracker.db.models  # noqa: F401  registers every model on Base.metadata

logger = logging.getLogger(__name__)


def init_db(bind=None):
    """Create all tables on `bind` (defaults to the configured engine)."""
    if bind is None:
        from jobtracker.db.session import engine
        bind = engine
    Base.metadata.create_all(bind=bind)
    logger.info("Database tables ensured")
