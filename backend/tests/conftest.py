"""Shared test fixtures: in-memory database, API client and admin credentials."""

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from gemvault.database import Base, get_db
from gemvault.main import app
from gemvault.models import Admin, Gemstone, GemstoneOwner
from gemvault.rate_limiter import limiter
from gemvault.services.auth_service import AuthService

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"


@pytest.fixture
def engine():
    """In-memory SQLite engine shared across threads."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_maker(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_maker):
    """Database session for service and repository tests."""
    session = session_maker()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_maker):
    """Test client bound to the in-memory database.

    Yields a tuple of (TestClient, SessionMaker).
    """
    limiter.reset()

    db = session_maker()
    db.add(Admin(username=ADMIN_USERNAME, password_hash=AuthService.hash_password(ADMIN_PASSWORD)))
    db.commit()
    db.close()

    def override_get_db():
        session = session_maker()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client, session_maker

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(client):
    """Bearer headers for the seeded admin."""
    test_client, _ = client
    response = test_client.post(
        "/api/admin/login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def make_gemstone(db, unique_id: str = "GEM-1700000000000-ABC123", **fields) -> Gemstone:
    """Insert a gemstone directly, bypassing identifier generation."""
    gemstone = Gemstone(unique_id_number=unique_id, name=fields.pop("name", "Ruby"), **fields)
    db.add(gemstone)
    db.commit()
    db.refresh(gemstone)
    return gemstone


def make_owner(
    db,
    gemstone_id: int,
    name: str,
    start: date,
    end: date | None = None,
    current: bool = False,
    phone: str = "0812",
) -> GemstoneOwner:
    """Insert an ownership record directly, bypassing chain validation."""
    owner = GemstoneOwner(
        gemstone_id=gemstone_id,
        owner_name=name,
        owner_phone=phone,
        ownership_start_date=start,
        ownership_end_date=end,
        is_current_owner=current,
    )
    db.add(owner)
    db.commit()
    db.refresh(owner)
    return owner


@pytest.fixture
def gemstone_factory():
    return make_gemstone


@pytest.fixture
def owner_factory():
    return make_owner
