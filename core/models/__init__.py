# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - user.py: User identity record and roles
# - scheme.py: Scheme catalog entries and the default seed set
# - application.py: Applications, their status and review decisions
#
# These models define the "contract" between API and clients.
# =============================================================================

from .user import AuthUser, UserRecord, UserRole
from .scheme import DEFAULT_SCHEMES, Scheme, SchemeCreate
from .application import (
    Application,
    ApplicationStatus,
    ApplicationWithScheme,
    ReviewDecision,
)

__all__ = [
    # User
    "AuthUser",
    "UserRecord",
    "UserRole",
    # Scheme
    "DEFAULT_SCHEMES",
    "Scheme",
    "SchemeCreate",
    # Application
    "Application",
    "ApplicationStatus",
    "ApplicationWithScheme",
    "ReviewDecision",
]
