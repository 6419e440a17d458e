"""
Database migration runner for Alembic migrations.
"""
import logging
import os
from alembic.config import Config
from alembic import command
from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

ADVISORY_LOCK_ID = 741852963

ALEMBIC_INI_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "alembic.ini")


def alembic_config(database_url: str) -> Config:
    alembic_cfg = Config(ALEMBIC_INI_PATH)
    alembic_cfg.set_main_option("sqlalchemy.url", database_url)
    return alembic_cfg


def run_migrations(database_url: str = None):
    """
    Run Alembic migrations to head revision.

    On PostgreSQL an advisory lock keeps two instances from migrating at once.
    """
    from jobtracker.core import config as app_config

    database_url = database_url or app_config.DATABASE_URL
    if not database_url:
        raise ValueError("DATABASE_URL is not set")

    logger.info("RUN_MIGRATIONS=1 -> running alembic upgrade head")

    engine = create_engine(database_url, pool_pre_ping=True)
    lock_conn = None

    try:
        if database_url.startswith("postgresql"):
            # Keep the connection open to hold the lock
            lock_conn = engine.connect()
            try:
                lock_conn.execute(text(f"SELECT pg_advisory_lock({ADVISORY_LOCK_ID})"))
                lock_conn.commit()
                logger.info("Migration lock acquired")
            except SQLAlchemyError as lock_error:
                logger.warning(f"Could not acquire advisory lock: {lock_error}")
                lock_conn.close()
                lock_conn = None

        command.upgrade(alembic_config(database_url), "head")
        logger.info("Migrations complete")

    except Exception:
        logger.exception("Migration failed")
        raise
    finally:
        if lock_conn:
            try:
                lock_conn.execute(text(f"SELECT pg_advisory_unlock({ADVISORY_LOCK_ID})"))
                lock_conn.commit()
            except SQLAlchemyError as unlock_error:
                logger.warning(f"Could not release advisory lock: {unlock_error}")
            finally:
                lock_conn.close()
        engine.dispose()
