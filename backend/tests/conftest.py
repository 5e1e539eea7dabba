"""Pytest fixtures for the AutoDoc backend.

Provides reusable test fixtures for:
- Database session on an in-memory SQLite database
- In-memory fakes for object storage, staging and pickers
- Authenticated test clients with JWT tokens

Usage:
    def test_register(authenticated_client, fake_storage):
        response = authenticated_client.post("/api/v1/vehicles", data={...})
        assert response.status_code == 201
"""

import os
import sys
import tempfile
from pathlib import Path

# Set environment variables BEFORE any imports to ensure they take effect
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("STAGING_CACHE_DIR", tempfile.mkdtemp(prefix="autodoc-test-staging-"))
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-key-256-bits-minimum-length-required-for-security")
os.environ.setdefault("S3_ENDPOINT_URL", "")
os.environ.setdefault("S3_ACCESS_KEY_ID", "testing")
os.environ.setdefault("S3_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("S3_BUCKET_NAME", "test-bucket")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("LOG_JSON", "false")

backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))
sys.path.insert(0, str(Path(__file__).parent))

from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from auth.jwt import create_access_token
from database import SessionLocal, engine, get_db
from dependencies import get_uploader
from domain.vehicles.uploader import DocumentUploader
from fixtures.fakes import FakeObjectStorage, FakeStaging
from models.base import Base

TEST_OWNER_ID = "u1"


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Fresh schema per test; tables are dropped afterwards."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def fake_storage() -> FakeObjectStorage:
    return FakeObjectStorage()


@pytest.fixture
def fake_staging() -> FakeStaging:
    return FakeStaging()


@pytest.fixture
def uploader(fake_storage, fake_staging) -> DocumentUploader:
    return DocumentUploader(storage=fake_storage, staging=fake_staging, timeout_seconds=5)


@pytest.fixture
def auth_token() -> str:
    return create_access_token(user_id=TEST_OWNER_ID, email="owner@test.com")


@pytest.fixture(scope="function")
def client(db_session: Session, fake_storage, tmp_path) -> Generator[TestClient, None, None]:
    """Unauthenticated client wired to the test database and fake storage.

    Staging uses the real LocalFileStaging, so documents attached to requests
    go through the same file:// path as in production.
    """
    from main import app
    from infrastructure.staging.local_file_staging import LocalFileStaging

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_uploader] = lambda: DocumentUploader(
        storage=fake_storage,
        staging=LocalFileStaging(tmp_path / "cache"),
        timeout_seconds=5,
    )

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def authenticated_client(client: TestClient, auth_token: str) -> TestClient:
    """Client with the Authorization header pre-configured."""
    client.headers.update({"Authorization": f"Bearer {auth_token}"})
    return client
