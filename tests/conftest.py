"""
Test configuration and fixtures for LinkTrackr.
This centralizes all test setup, making individual tests clean.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from main import app
from linktrackr.auth import create_access_token
from linktrackr.cache.strategies import InMemoryCache
from linktrackr.click_processor.recorder import ClickRecorder
from linktrackr.database.connection import Base, get_db
from linktrackr.dependencies import get_cache, get_click_recorder

# Test database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)

OWNER_ID = "account-a"
OTHER_ID = "account-b"


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database for each test.
    This ensures tests are isolated and don't affect each other.
    """
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()

    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def cache():
    return InMemoryCache()


@pytest.fixture(scope="function")
def client(db_session, cache):
    """
    Create a test client with database, cache and click recorder overridden.
    Every request gets its own session, as in production.
    """
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache] = lambda: cache
    app.dependency_overrides[get_click_recorder] = lambda: ClickRecorder(TestingSessionLocal)

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {create_access_token(OWNER_ID)}"}


@pytest.fixture
def other_auth_headers():
    return {"Authorization": f"Bearer {create_access_token(OTHER_ID)}"}


@pytest.fixture
def session_factory(db_session):
    """Session factory bound to the test database, for code that opens its own sessions"""
    return TestingSessionLocal
