"""
Shared fixtures: an in-memory SQLite remote store, an in-memory local store
and a TestClient wired to both.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobtracker.core.auth import TokenAuthProvider
from jobtracker.core.security import create_access_token
from jobtracker.db.base import Base
from jobtracker.db.init_db import init_db
from jobtracker.services.data_service import DataService
from jobtracker.services.local_store import LocalBackend, LocalStore, MemoryStorage
from jobtracker.services.remote_store import RemoteBackend


# Setup in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(scope="function")
def session_factory():
    """Create a fresh database for each test."""
    init_db(test_engine)
    yield TestSessionLocal
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def local_store(storage):
    return LocalStore(storage)


@pytest.fixture
def local_backend(local_store):
    return LocalBackend(local_store)


@pytest.fixture
def auth():
    """Signed-out identity provider."""
    return TokenAuthProvider()


@pytest.fixture
def remote_backend(session_factory, auth):
    return RemoteBackend(session_factory, auth)


@pytest.fixture
def data_service(local_backend, remote_backend, auth):
    return DataService(local=local_backend, remote=remote_backend, auth=auth)


@pytest.fixture
def client(local_backend, session_factory):
    """TestClient using the in-memory stores instead of the configured ones."""
    from jobtracker.api.deps import get_local_backend, get_session_factory
    from jobtracker.main import app

    app.dependency_overrides[get_local_backend] = lambda: local_backend
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Bearer header for user-1."""
    return {"Authorization": f"Bearer {create_access_token({'sub': 'user-1'})}"}
