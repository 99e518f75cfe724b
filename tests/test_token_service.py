# =============================================================================
# tests/test_token_service.py - Token Service Tests
# =============================================================================
# Unit tests for signing and verifying access tokens:
# - Round trip of identity claims
# - Tamper and wrong-secret detection
# - Expiry boundary
# =============================================================================

from datetime import timedelta
from uuid import uuid4

import pytest
from jose import jwt

from app.exceptions import InvalidTokenError
from core.models.user import AuthUser, UserRole
from core.services.token_service import TokenService
from lib.utils import utc_now


@pytest.fixture
def identity():
    return AuthUser(id=uuid4(), role=UserRole.ADMIN, email="admin@example.com")


class TestIssueAndVerify:
    """Tokens carry the identity and verify with the same secret."""

    def test_round_trip(self, token_service, identity):
        token = token_service.issue(identity)

        resolved = token_service.verify(token)

        assert resolved.id == identity.id
        assert resolved.role == UserRole.ADMIN
        assert resolved.email == "admin@example.com"

    def test_claims_include_expiry(self, token_service, identity, settings):
        token = token_service.issue(identity)

        claims = jwt.get_unverified_claims(token)

        assert claims["id"] == str(identity.id)
        assert claims["role"] == "admin"
        assert claims["exp"] - claims["iat"] == settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60

    def test_email_is_optional(self, token_service):
        token = token_service.issue(AuthUser(id=uuid4(), role=UserRole.CITIZEN))

        assert "email" not in jwt.get_unverified_claims(token)
        assert token_service.verify(token).email is None


class TestRejection:
    """Anything other than an intact, unexpired token is rejected."""

    def test_wrong_secret(self, identity):
        issuer = TokenService("another-secret-0123456789")
        verifier = TokenService("the-real-secret-0123456789")

        with pytest.raises(InvalidTokenError):
            verifier.verify(issuer.issue(identity))

    def test_tampered_payload(self, token_service, identity, settings):
        header, _, signature = token_service.issue(identity).split(".")
        forged = jwt.encode(
            {"id": str(identity.id), "role": "admin", "exp": 9999999999},
            "attacker-secret",
            algorithm=settings.JWT_ALGORITHM,
        )
        forged_payload = forged.split(".")[1]

        with pytest.raises(InvalidTokenError):
            token_service.verify(f"{header}.{forged_payload}.{signature}")

    def test_garbage(self, token_service):
        with pytest.raises(InvalidTokenError):
            token_service.verify("not-a-token")

    def test_missing_role_claim(self, token_service, settings):
        token = jwt.encode(
            {"id": str(uuid4()), "exp": int((utc_now() + timedelta(hours=1)).timestamp())},
            settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
        )

        with pytest.raises(InvalidTokenError):
            token_service.verify(token)

    def test_unknown_role_claim(self, token_service, settings):
        token = jwt.encode(
            {"id": str(uuid4()), "role": "superuser", "exp": int((utc_now() + timedelta(hours=1)).timestamp())},
            settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
        )

        with pytest.raises(InvalidTokenError):
            token_service.verify(token)

    def test_empty_secret_refused(self):
        with pytest.raises(ValueError):
            TokenService("")


class TestExpiry:
    """A token is valid until its ttl has elapsed and not after."""

    def test_valid_one_second_before_expiry(self, token_service, identity):
        ttl = timedelta(hours=1)
        # Issued ttl - 1s ago: one second of life left
        token = token_service.issue(identity, ttl=ttl, now=utc_now() - ttl + timedelta(seconds=1))

        assert token_service.verify(token).id == identity.id

    def test_invalid_one_second_after_expiry(self, token_service, identity):
        ttl = timedelta(hours=1)
        token = token_service.issue(identity, ttl=ttl, now=utc_now() - ttl - timedelta(seconds=1))

        with pytest.raises(InvalidTokenError):
            token_service.verify(token)
