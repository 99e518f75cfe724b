# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Registration, login and token introspection.
# Mounted under /api in main.py.
# =============================================================================

import logging

from fastapi import APIRouter, status

from app.auth.dependencies import CurrentUser
from app.auth.models import (
    LoginRequest,
    LoginResponse,
    MeResponse,
    RegisterRequest,
    RegisterResponse,
)
from app.dependencies import AuthServiceDep

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(request: RegisterRequest, auth: AuthServiceDep) -> RegisterResponse:
    """
    Register a new account.

    Role defaults to citizen. The password is hashed before storage and is
    never echoed back.

    Raises:
        400: If email or password is missing
        409: If the email is already registered
    """
    user = auth.register(request.email, request.password, request.role)
    return RegisterResponse(user_id=user.id)


@router.post("/login", response_model=LoginResponse)
def login(request: LoginRequest, auth: AuthServiceDep) -> LoginResponse:
    """
    Exchange email and password for a bearer token.

    Raises:
        400: If email or password is missing
        401: If the credentials don't match (same response for unknown email)
    """
    result = auth.login(request.email, request.password)
    return LoginResponse(
        token=result.token,
        role=result.role,
        email=result.email,
        expires_in=result.expires_in,
    )


@router.get("/me", response_model=MeResponse)
async def me(user: CurrentUser) -> MeResponse:
    """
    Return the identity carried by the current token.

    Useful for checking whether a stored token is still valid.
    """
    return MeResponse(id=user.id, role=user.role, email=user.email)
