# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides JWT-based authentication and role gates.
#
# Usage:
#   from app.auth import get_current_user, require_admin, AuthUser
#
#   @router.get("/admin-only")
#   async def admin_only(user: AuthUser = Depends(require_admin)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import AdminUser, CurrentUser, get_current_user, require_admin
from app.auth.models import AuthUser, LoginResponse, MeResponse, RegisterResponse

__all__ = [
    "AdminUser",
    "CurrentUser",
    "get_current_user",
    "require_admin",
    "AuthUser",
    "LoginResponse",
    "MeResponse",
    "RegisterResponse",
]
