"""
Health check endpoint for deployment monitoring.
"""
import logging
from datetime import datetime, timezone
from typing import Callable

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from jobtracker.api.deps import get_local_backend, get_session_factory
from jobtracker.services.local_store import LocalBackend

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
def health_check(
    session_factory: Callable[[], Session] = Depends(get_session_factory),
    local: LocalBackend = Depends(get_local_backend),
):
    """
    Returns 200 while the API is up.

    `status` is "degraded" when the remote database cannot be reached; the
    local store keeps serving demo mode in that case.
    """
    status = "healthy"

    db = session_factory()
    try:
        db.execute(text("SELECT 1"))
        db_status = "connected"
    except SQLAlchemyError as e:
        logger.error(f"Health check database error: {e}")
        db_status = "error"
        status = "degraded"
    finally:
        db.close()

    return {
        "status": status,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": db_status,
        "local_storage": "available" if local.store.is_available() else "unavailable",
        "version": "1.0.0",
    }
