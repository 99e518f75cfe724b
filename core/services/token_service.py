# =============================================================================
# core/services/token_service.py - Signed Access Tokens
# =============================================================================
# Issues and verifies self-contained JWT bearer tokens. Verification needs
# nothing but the signing secret: there is no server-side session table.
#
# Claims:
#   id     - user id (string UUID)
#   role   - "citizen" | "admin"
#   email  - login email
#   iat    - issued-at (seconds)
#   exp    - absolute expiry (seconds)
# =============================================================================

import logging
from datetime import datetime, timedelta
from typing import Any
from uuid import UUID

from jose import jwt, JWTError, ExpiredSignatureError
from pydantic import BaseModel, ValidationError

from core.models.user import AuthUser
from app.exceptions import InvalidTokenError
from lib.utils import utc_now

logger = logging.getLogger(__name__)


class TokenClaims(BaseModel):
    """Decoded and validated token payload."""
    id: UUID
    role: str
    email: str | None = None
    iat: int | None = None
    exp: int


class TokenService:
    """
    Signs identity claims into a tamper-evident, time-limited token.

    Args:
        secret: Process-wide signing secret; an empty secret is refused
        algorithm: HMAC algorithm understood by python-jose
        ttl: Default token lifetime
    """

    def __init__(self, secret: str, algorithm: str = "HS256", ttl: timedelta = timedelta(hours=1)):
        if not secret:
            raise ValueError("A token signing secret is required")
        self._secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(
        self,
        identity: AuthUser,
        ttl: timedelta | None = None,
        now: datetime | None = None,
    ) -> str:
        """
        Create a signed token for an identity.

        Args:
            identity: The user id, role and email to embed
            ttl: Lifetime override; defaults to the service ttl
            now: Issue time override (defaults to the current UTC time)

        Returns:
            The encoded JWT string
        """
        issued_at = now or utc_now()
        expires_at = issued_at + (ttl if ttl is not None else self.ttl)

        claims: dict[str, Any] = {
            "id": str(identity.id),
            "role": identity.role.value,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        if identity.email:
            claims["email"] = identity.email

        return jwt.encode(claims, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> AuthUser:
        """
        Check signature and expiry and return the embedded identity.

        Raises:
            InvalidTokenError: Bad signature, malformed claims or expired token
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
            claims = TokenClaims.model_validate(payload)
            return AuthUser(id=claims.id, role=claims.role, email=claims.email)

        except ExpiredSignatureError:
            logger.info("Rejected expired token")
            raise InvalidTokenError()

        except (JWTError, ValidationError) as e:
            logger.warning(f"Token validation failed: {type(e).__name__}")
            raise InvalidTokenError()
