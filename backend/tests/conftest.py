"""
Pytest configuration and fixtures for Zona Flash backend tests.

Every test gets a fresh in-memory SQLite schema, so commits and rollbacks
made by the code under test are real and never leak between tests.
"""
import sys
import os
import pathlib
import pytest
from unittest.mock import MagicMock
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")

if TEST_DATABASE_URL.startswith("sqlite"):
    test_engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,  # Set to True for SQL debugging
    )
else:
    test_engine = create_engine(TEST_DATABASE_URL, echo=False)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

from tests.helpers.hunt_helpers import HUNTER_ID, OTHER_HUNTER_ID  # noqa: E402


@pytest.fixture(scope="function")
def db():
    """
    Provide a database session on a freshly created schema.

    Tables are dropped after the test, so no cleanup is needed.
    """
    from zonaflash.db import Base
    from zonaflash import models  # noqa: F401  (registers tables)

    Base.metadata.create_all(bind=test_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def allowed_hunters(monkeypatch):
    """Put the test hunters on the submission allow-list."""
    from zonaflash.core.config import settings
    monkeypatch.setattr(settings, "HUNTER_ALLOWED_UIDS", f"{HUNTER_ID},{OTHER_HUNTER_ID}")
    return [HUNTER_ID, OTHER_HUNTER_ID]


@pytest.fixture
def media_uploader():
    """Photo store double that always succeeds."""
    from zonaflash.services.media_uploader import MediaUploader
    uploader = MagicMock(spec=MediaUploader)
    uploader.upload.return_value = "https://storage.googleapis.com/test-bucket/zona_flash/captures/photo.jpg"
    return uploader


def override_get_db(db_session):
    """Dependency override that hands routes the test session."""
    def _override():
        yield db_session
    return _override


@pytest.fixture(scope="function")
def client(db, media_uploader):
    """
    FastAPI TestClient wired to the test session and photo store double.
    """
    from fastapi.testclient import TestClient
    from zonaflash.main import app
    from zonaflash.db import get_db
    from zonaflash.routers.hunter import get_media_uploader

    app.dependency_overrides[get_db] = override_get_db(db)
    app.dependency_overrides[get_media_uploader] = lambda: media_uploader

    try:
        # Exceptions are converted to responses instead of raised into the test
        with TestClient(app, raise_server_exceptions=False) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()
