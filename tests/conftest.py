# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up test environment variables before any imports
# - Swaps the Supabase client for an in-memory fake
# - Provides service instances and an HTTP test client
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.main which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("JWT_SECRET", "test-signing-secret-0123456789abcdef")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from app.config import get_settings
from app.dependencies import get_supabase_client
from app.main import app
from core.models.scheme import DEFAULT_SCHEMES
from core.models.user import UserRole
from core.services import (
    ApplicationWorkflow,
    AuthService,
    CredentialStore,
    SchemeCatalog,
    TokenService,
)
from lib.passwords import PasswordHasher
from tests.fakes import FakeSupabaseClient


# =============================================================================
# Service Fixtures
# =============================================================================

@pytest.fixture
def settings():
    """The settings built from the test environment above."""
    return get_settings()


@pytest.fixture
def fake_db():
    """Fresh in-memory database for each test."""
    return FakeSupabaseClient()


@pytest.fixture
def token_service(settings):
    return TokenService(
        secret=settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        ttl=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )


@pytest.fixture
def hasher():
    """Minimum bcrypt work factor keeps the suite fast."""
    return PasswordHasher(rounds=4)


@pytest.fixture
def credential_store(fake_db):
    return CredentialStore(fake_db)


@pytest.fixture
def auth_service(credential_store, hasher, token_service):
    return AuthService(credential_store, hasher, token_service)


@pytest.fixture
def catalog(fake_db):
    """Scheme catalog pre-seeded with the default schemes."""
    catalog = SchemeCatalog(fake_db)
    catalog.seed_if_empty(DEFAULT_SCHEMES)
    return catalog


@pytest.fixture
def workflow(fake_db, catalog):
    return ApplicationWorkflow(fake_db, catalog)


@pytest.fixture
def citizen(auth_service):
    """A registered citizen account."""
    return auth_service.register("alice@example.com", "pw123")


@pytest.fixture
def admin(auth_service):
    """A registered admin account."""
    return auth_service.register("admin@example.com", "admin-pw", UserRole.ADMIN)


# =============================================================================
# HTTP Fixtures
# =============================================================================

@pytest.fixture
def client(fake_db, catalog):
    """
    TestClient wired to the fake database.

    Not used as a context manager, so the startup lifespan (which talks to
    the real database) never runs.
    """
    app.dependency_overrides[get_supabase_client] = lambda: fake_db
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def register_and_login(client):
    """Register an account over HTTP and return auth headers for it."""

    def _register_and_login(email: str, password: str, role: str | None = None) -> dict[str, str]:
        body = {"email": email, "password": password}
        if role:
            body["role"] = role
        response = client.post("/api/register", json=body)
        assert response.status_code == 201, response.text

        response = client.post("/api/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _register_and_login
