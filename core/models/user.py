# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# A user is an identity record: unique email, password hash and one role.
# Users are created on registration and never modified through the API.
# =============================================================================

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserRole(str, Enum):
    """
    Coarse authorization tier carried in the identity and in tokens.

    - citizen: may browse schemes, apply and check their own applications
    - admin: may additionally list and review every application
    """
    CITIZEN = "citizen"
    ADMIN = "admin"


class UserRecord(BaseModel):
    """
    A row of the users table.

    Holds the password hash, so it is never returned by an endpoint.
    """

    id: UUID = Field(..., description="Unique user identifier")

    # Compared exactly as stored (no case folding)
    email: str = Field(..., min_length=1, description="Login email")

    password_hash: str = Field(..., repr=False, description="Salted one-way hash")

    role: UserRole = Field(default=UserRole.CITIZEN)

    created_at: datetime | None = Field(default=None)


class AuthUser(BaseModel):
    """
    Authenticated identity carried inside an access token.

    This is all the access-control layer knows about the caller; it is
    resolved from the token alone, without querying the database.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    role: UserRole = UserRole.CITIZEN
    email: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN
