"""
Centralized Test Configuration.
"""

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from backend.app.main import app
from backend.app.db.session import Base, build_session_factory
from backend.app.core.dependencies import get_parcel_store
from backend.app.models.parcel import Parcel
from backend.app.models.parcel_enums import ParcelStatus
from backend.app.repositories.parcel_store import ParcelStore
from backend.app.services.parcel_service import ParcelService

# Setup In-Memory Test Database
TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = build_session_factory(engine)


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test function and drop after."""
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)


@pytest.fixture
def store():
    return ParcelStore(TestingSessionLocal)


@pytest.fixture
def broken_store():
    """Store on a database where the parcel table was never created."""
    broken_engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield ParcelStore(build_session_factory(broken_engine))
    broken_engine.dispose()


@pytest.fixture
def service(store):
    return ParcelService(store)


@pytest.fixture
def make_parcel():
    """Factory for unsaved parcels in the registered state."""
    def _make(client=1000, status=ParcelStatus.REGISTERED.value, address="test",
              created_at="2024-01-01T00:00:00Z"):
        return Parcel(client=client, status=status, address=address, created_at=created_at)
    return _make


@pytest.fixture
async def client(store):
    """Async client for testing, wired to the in-memory store."""
    app.dependency_overrides[get_parcel_store] = lambda: store
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides = {}
