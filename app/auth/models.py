# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for the register/login request and response bodies.
# =============================================================================

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from core.models.user import AuthUser, UserRole


class RegisterRequest(BaseModel):
    """
    Body of POST /api/register.

    Presence of email and password is checked by the auth service so that
    absent and empty values produce the same MISSING_FIELDS error.
    """
    email: str | None = Field(default=None, examples=["alice@example.com"])
    password: str | None = Field(default=None, examples=["pw123"])
    role: UserRole | None = Field(
        default=None,
        description="Defaults to citizen when omitted"
    )


class RegisterResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = "User registered"
    user_id: UUID = Field(..., alias="userId")


class LoginRequest(BaseModel):
    """Body of POST /api/login."""
    email: str | None = None
    password: str | None = None


class LoginResponse(BaseModel):
    """
    Token returned on successful login.

    Send it back as 'Authorization: Bearer <token>'.
    """
    token: str
    role: UserRole
    email: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")


class MeResponse(BaseModel):
    """Identity carried by the caller's token."""
    id: UUID
    role: UserRole
    email: str | None = None


__all__ = [
    "AuthUser",
    "RegisterRequest",
    "RegisterResponse",
    "LoginRequest",
    "LoginResponse",
    "MeResponse",
]
