# =============================================================================
# app/auth/dependencies.py - Access Control Gates
# =============================================================================
# Two composable dependencies guard protected routes:
#
# 1. get_current_user - authentication gate. Reads the Bearer token from the
#    Authorization header and verifies it. No token -> 401; a token that
#    fails verification (bad signature, expired) -> 403.
# 2. require_admin - admin gate, layered on top of get_current_user.
#    Any role other than admin -> 403.
#
# Both are stateless: the role travels inside the token, so no database
# read happens per request.
#
# Usage:
#   from app.auth import get_current_user, require_admin, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.dependencies import TokenServiceDep
from app.exceptions import AdminRequiredError, UnauthenticatedError
from core.models.user import AuthUser

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor; missing headers are reported by our own 401
security = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    tokens: TokenServiceDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthUser:
    """
    Resolve the caller's identity from their bearer token.

    The identity is also attached to request.state.user for handlers and
    middleware further down the chain.

    Raises:
        UnauthenticatedError: 401 if no bearer token was sent
        InvalidTokenError: 403 if the token fails verification
    """
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError()

    user = tokens.verify(credentials.credentials)
    request.state.user = user
    logger.debug(f"Authenticated user: {user.id}")
    return user


async def require_admin(user: AuthUser = Depends(get_current_user)) -> AuthUser:
    """
    Allow only admin identities through.

    Raises:
        AdminRequiredError: 403 for any non-admin role
    """
    if not user.is_admin:
        logger.warning(f"Non-admin user {user.id} attempted admin access")
        raise AdminRequiredError()
    return user


# Type aliases for dependency injection
CurrentUser = Annotated[AuthUser, Depends(get_current_user)]
AdminUser = Annotated[AuthUser, Depends(require_admin)]
