"""
Shared FastAPI dependencies.

A request with `Authorization: Bearer <jwt>` is served by the remote store for
that identity; without one it falls through to the local store.
"""
import logging
from typing import Callable, Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from jobtracker.core import config
from jobtracker.core.auth import TokenAuthProvider, token_from_header
from jobtracker.db.session import SessionLocal
from jobtracker.services.data_service import DataService
from jobtracker.services.local_store import (
    QUOTA_EXCEEDED_MESSAGE,
    FileStorage,
    LocalBackend,
    LocalStore,
)
from jobtracker.services.remote_store import RemoteBackend

logger = logging.getLogger(__name__)

_local_backend: Optional[LocalBackend] = None


def _alert_quota_exceeded(message: str):
    logger.warning(f"Local storage alert: {message}")


def get_local_backend() -> LocalBackend:
    """Process-wide local backend over the configured storage directory."""
    global _local_backend
    if _local_backend is None:
        storage = FileStorage(config.LOCAL_STORAGE_DIR, quota_bytes=config.LOCAL_STORAGE_QUOTA_BYTES)
        _local_backend = LocalBackend(LocalStore(storage, on_quota_exceeded=_alert_quota_exceeded))
    return _local_backend


def get_session_factory() -> Callable[[], Session]:
    return SessionLocal


def get_auth_provider(authorization: Optional[str] = Header(None)) -> TokenAuthProvider:
    return TokenAuthProvider(token_from_header(authorization))


def get_data_service(
    local: LocalBackend = Depends(get_local_backend),
    session_factory: Callable[[], Session] = Depends(get_session_factory),
    auth: TokenAuthProvider = Depends(get_auth_provider),
) -> DataService:
    return DataService(local=local, remote=RemoteBackend(session_factory, auth), auth=auth)


def ensure_saved(saved: bool, what: str):
    """Turn a failed local write into 507 Insufficient Storage."""
    if not saved:
        logger.warning(f"{what} not saved")
        raise HTTPException(
            status_code=status.HTTP_507_INSUFFICIENT_STORAGE,
            detail=QUOTA_EXCEEDED_MESSAGE,
        )
