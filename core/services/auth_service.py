# =============================================================================
# core/services/auth_service.py - Registration and Login
# =============================================================================
# Orchestrates the credential store, password hasher and token service.
# Separates HTTP concerns from identity logic.
# =============================================================================

import logging
from dataclasses import dataclass

from app.exceptions import (
    InvalidCredentialsError,
    MissingFieldsError,
    RoleNotAllowedError,
)
from core.models.user import AuthUser, UserRecord, UserRole
from core.services.credential_store import CredentialStore
from core.services.token_service import TokenService
from lib.passwords import PasswordHasher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    """What a successful login hands back to the caller."""
    token: str
    role: UserRole
    email: str
    expires_in: int


class AuthService:
    """
    Service for account registration and login.

    Args:
        store: Where identities live
        hasher: Password hashing capability
        tokens: Token issuer used on successful login
        allow_admin_registration: Whether role=admin may be self-registered
    """

    def __init__(
        self,
        store: CredentialStore,
        hasher: PasswordHasher,
        tokens: TokenService,
        allow_admin_registration: bool = True,
    ):
        self.store = store
        self.hasher = hasher
        self.tokens = tokens
        self.allow_admin_registration = allow_admin_registration

    def register(
        self,
        email: str | None,
        password: str | None,
        role: UserRole | None = None,
    ) -> UserRecord:
        """
        Create a new account.

        Args:
            email: Login email, stored exactly as given
            password: Plaintext password, hashed before it reaches the store
            role: Requested role; defaults to citizen

        Returns:
            The stored user record

        Raises:
            MissingFieldsError: If email or password is empty
            RoleNotAllowedError: If admin self-registration is disabled
            IdentityExistsError: If the email is already registered
        """
        _require_fields(email=email, password=password)

        role = role or UserRole.CITIZEN
        if role is UserRole.ADMIN and not self.allow_admin_registration:
            logger.warning("Refused self-registration with admin role")
            raise RoleNotAllowedError(role.value)

        user = self.store.create_user(email, self.hasher.hash(password), role)
        logger.info(f"Registered user: {user.id} with role: {user.role.value}")
        return user

    def login(self, email: str | None, password: str | None) -> LoginResult:
        """
        Exchange credentials for an access token.

        Raises:
            MissingFieldsError: If email or password is empty
            InvalidCredentialsError: Unknown email or wrong password (same error for both)
        """
        _require_fields(email=email, password=password)

        user = self.store.find_by_email(email)
        if user is None:
            # Same hashing cost as a wrong password
            self.hasher.dummy_verify()
            logger.info("Failed login attempt")
            raise InvalidCredentialsError()

        if not self.hasher.verify(password, user.password_hash):
            logger.info("Failed login attempt")
            raise InvalidCredentialsError()

        identity = AuthUser(id=user.id, role=user.role, email=user.email)
        token = self.tokens.issue(identity)
        logger.info(f"User logged in: {user.id}")

        return LoginResult(
            token=token,
            role=user.role,
            email=user.email,
            expires_in=int(self.tokens.ttl.total_seconds()),
        )


def _require_fields(**fields: str | None) -> None:
    missing = [name for name, value in fields.items() if not value]
    if missing:
        raise MissingFieldsError(missing)
