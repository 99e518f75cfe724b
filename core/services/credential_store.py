# =============================================================================
# core/services/credential_store.py - User Identity Records
# =============================================================================
# Reads and creates rows in the users table. There is deliberately no
# update or delete surface: identities are immutable once registered.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from app.exceptions import IdentityExistsError, PersistenceError
from core.models.user import UserRecord, UserRole
from lib.utils import normalize_uuid, utc_now_iso

logger = logging.getLogger(__name__)

USERS_TABLE = "users"

# Postgres unique_violation
UNIQUE_VIOLATION = "23505"


class CredentialStore:
    """
    Persistence for user identities.

    Email uniqueness is checked before insert and enforced again by the
    table's unique constraint, so two concurrent registrations of the same
    email cannot both succeed.
    """

    def __init__(self, client: Client):
        self.client = client

    def create_user(
        self,
        email: str,
        password_hash: str,
        role: UserRole = UserRole.CITIZEN,
    ) -> UserRecord:
        """
        Insert a new user.

        Raises:
            IdentityExistsError: If the email is already registered
            PersistenceError: If the store rejects the insert
        """
        if self.find_by_email(email) is not None:
            raise IdentityExistsError()

        data = {
            "email": email,
            "password_hash": password_hash,
            "role": role.value,
            "created_at": utc_now_iso(),
        }

        try:
            response = self.client.table(USERS_TABLE).insert(data).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise IdentityExistsError()
            raise PersistenceError("register user", str(e))
        except Exception as e:
            raise PersistenceError("register user", str(e))

        if not response.data:
            raise PersistenceError("register user", "Insert returned no data")

        return UserRecord.model_validate(response.data[0])

    def find_by_email(self, email: str) -> UserRecord | None:
        """Exact-match lookup; returns None when no user has this email."""
        return self._find_one("email", email)

    def find_by_id(self, user_id: UUID | str) -> UserRecord | None:
        return self._find_one("id", normalize_uuid(user_id))

    def _find_one(self, column: str, value: Any) -> UserRecord | None:
        try:
            response = (
                self.client.table(USERS_TABLE)
                .select("*")
                .eq(column, value)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise PersistenceError("look up user", str(e))

        if not response.data:
            return None
        return UserRecord.model_validate(response.data[0])
