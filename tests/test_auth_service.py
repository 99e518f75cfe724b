# =============================================================================
# tests/test_auth_service.py - Auth Service Tests
# =============================================================================
# This module contains tests for:
# - Registration (defaults, duplicates, missing fields, role policy)
# - Login (token contents, indistinguishable failures)
# - Password storage (never plaintext)
# =============================================================================

from unittest.mock import patch
from uuid import uuid4

import pytest

from app.exceptions import (
    IdentityExistsError,
    InvalidCredentialsError,
    MissingFieldsError,
    PersistenceError,
    RoleNotAllowedError,
)
from core.models.user import UserRole
from core.services.auth_service import AuthService


# =============================================================================
# Registration
# =============================================================================

class TestRegister:
    """Tests for AuthService.register."""

    def test_role_defaults_to_citizen(self, auth_service):
        user = auth_service.register("alice@example.com", "pw123")

        assert user.role == UserRole.CITIZEN
        assert user.email == "alice@example.com"

    def test_admin_role_kept(self, admin):
        assert admin.role == UserRole.ADMIN

    def test_password_is_hashed(self, auth_service, fake_db, hasher):
        auth_service.register("alice@example.com", "pw123")

        stored = fake_db.rows("users")[0]
        assert "password" not in stored
        assert stored["password_hash"] != "pw123"
        assert hasher.verify("pw123", stored["password_hash"])

    def test_duplicate_email_conflicts(self, auth_service, fake_db):
        auth_service.register("alice@example.com", "pw123")

        with pytest.raises(IdentityExistsError) as exc_info:
            auth_service.register("alice@example.com", "other-password")

        assert exc_info.value.status_code == 409
        assert len(fake_db.rows("users")) == 1

    def test_email_is_case_sensitive(self, auth_service):
        auth_service.register("alice@example.com", "pw123")

        user = auth_service.register("Alice@example.com", "pw123")

        assert user.email == "Alice@example.com"

    @pytest.mark.parametrize(
        "email,password,missing",
        [
            (None, "pw123", ["email"]),
            ("alice@example.com", "", ["password"]),
            ("", None, ["email", "password"]),
        ],
    )
    def test_missing_fields(self, auth_service, fake_db, email, password, missing):
        with pytest.raises(MissingFieldsError) as exc_info:
            auth_service.register(email, password)

        assert exc_info.value.details["fields"] == missing
        assert fake_db.rows("users") == []

    def test_admin_registration_can_be_disabled(self, credential_store, hasher, token_service):
        service = AuthService(credential_store, hasher, token_service, allow_admin_registration=False)

        with pytest.raises(RoleNotAllowedError):
            service.register("root@example.com", "pw", UserRole.ADMIN)

        # Citizens are unaffected
        assert service.register("alice@example.com", "pw123").role == UserRole.CITIZEN

    def test_store_failure_surfaces_as_persistence_error(self, auth_service, fake_db):
        fake_db.fail_with = RuntimeError("connection reset")

        with pytest.raises(PersistenceError):
            auth_service.register("alice@example.com", "pw123")


# =============================================================================
# Login
# =============================================================================

class TestLogin:
    """Tests for AuthService.login."""

    def test_register_then_login(self, auth_service, token_service, citizen):
        result = auth_service.login("alice@example.com", "pw123")

        assert result.role == UserRole.CITIZEN
        assert result.email == "alice@example.com"
        identity = token_service.verify(result.token)
        assert identity.id == citizen.id
        assert identity.role == UserRole.CITIZEN

    def test_admin_token_carries_admin_role(self, auth_service, token_service, admin):
        result = auth_service.login("admin@example.com", "admin-pw")

        assert token_service.verify(result.token).role == UserRole.ADMIN

    def test_expires_in_matches_ttl(self, auth_service, settings, citizen):
        result = auth_service.login("alice@example.com", "pw123")

        assert result.expires_in == settings.access_token_ttl_seconds

    def test_wrong_password_and_unknown_email_fail_identically(self, auth_service, citizen):
        with pytest.raises(InvalidCredentialsError) as wrong_password:
            auth_service.login("alice@example.com", "not-the-password")
        with pytest.raises(InvalidCredentialsError) as unknown_email:
            auth_service.login("nobody@example.com", "pw123")

        assert wrong_password.value.to_dict() == unknown_email.value.to_dict()
        assert wrong_password.value.status_code == 401

    def test_missing_fields(self, auth_service):
        with pytest.raises(MissingFieldsError):
            auth_service.login("alice@example.com", None)

    def test_unknown_email_still_spends_hashing_time(self, auth_service, hasher, citizen):
        with patch.object(hasher, "dummy_verify", wraps=hasher.dummy_verify) as dummy:
            with pytest.raises(InvalidCredentialsError):
                auth_service.login("nobody@example.com", "pw123")

        dummy.assert_called_once_with()

    def test_wrong_password_uses_real_verify(self, auth_service, hasher, citizen):
        with patch.object(hasher, "dummy_verify") as dummy, \
                patch.object(hasher, "verify", wraps=hasher.verify) as verify:
            with pytest.raises(InvalidCredentialsError):
                auth_service.login("alice@example.com", "not-the-password")

        verify.assert_called_once()
        dummy.assert_not_called()


class TestPasswordHasher:
    """Tests for lib.passwords.PasswordHasher."""

    def test_round_trip(self, hasher):
        stored = hasher.hash("pw123")

        assert stored != "pw123"
        assert hasher.verify("pw123", stored)
        assert not hasher.verify("pw124", stored)

    def test_missing_or_malformed_hash_is_a_mismatch(self, hasher):
        assert not hasher.verify("pw123", None)
        assert not hasher.verify("pw123", "not-a-hash")

    def test_dummy_verify_never_succeeds(self, hasher):
        assert hasher.dummy_verify() is False


# =============================================================================
# Credential Store
# =============================================================================

class TestCredentialStore:
    """Tests for the users table adapter."""

    def test_unique_constraint_catches_concurrent_registration(self, credential_store, fake_db):
        credential_store.create_user("alice@example.com", "hash-1")

        # Simulate a second request that passed the lookup before the first insert landed
        with patch.object(credential_store, "find_by_email", return_value=None):
            with pytest.raises(IdentityExistsError):
                credential_store.create_user("alice@example.com", "hash-2")

        assert len(fake_db.rows("users")) == 1

    def test_find_by_id(self, credential_store):
        user = credential_store.create_user("alice@example.com", "hash", UserRole.ADMIN)

        found = credential_store.find_by_id(user.id)

        assert found == user
        assert credential_store.find_by_id(uuid4()) is None
