# =============================================================================
# lib/passwords.py - Password Hashing
# =============================================================================
# Slow, salted one-way hashing for stored credentials.
#
# Uses passlib's CryptContext with bcrypt_sha256 as the default scheme: the
# password is pre-hashed with SHA-256 so inputs longer than bcrypt's 72-byte
# limit are not silently truncated. Plain bcrypt hashes are still accepted
# on verify.
#
# Usage:
#   hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)
#   stored = hasher.hash("pw123")
#   hasher.verify("pw123", stored)  # True
# =============================================================================

import logging

from passlib.context import CryptContext

logger = logging.getLogger(__name__)


class PasswordHasher:
    """
    Hash and verify passwords with a configurable bcrypt work factor.

    The plaintext never leaves the call that received it: it is not stored
    on the instance and never logged.
    """

    def __init__(self, rounds: int = 10):
        self.rounds = rounds
        self._context = CryptContext(
            schemes=["bcrypt_sha256", "bcrypt"],
            default="bcrypt_sha256",
            deprecated="auto",
            bcrypt_sha256__rounds=rounds,
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        """Return a salted hash suitable for storage."""
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str | None) -> bool:
        """
        Check a plaintext password against a stored hash.

        A missing or malformed stored hash counts as a mismatch rather than
        an error, so login failures stay indistinguishable.
        """
        if not password_hash:
            return False
        try:
            return self._context.verify(password, password_hash)
        except (ValueError, TypeError) as e:
            logger.warning(f"Stored password hash could not be parsed: {type(e).__name__}")
            return False

    def dummy_verify(self) -> bool:
        """
        Spend the same time as verify() without a stored hash.

        Called when a login names an unknown email, so the response time
        matches a wrong-password attempt. Always returns False.
        """
        self._context.dummy_verify()
        return False
