# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - schemes.py: Scheme catalog listing
# - applications.py: Citizen submission and status endpoints
# - admin.py: Admin listing and review endpoints
#
# Registration and login live in app/auth/routes.py.
# Each router is mounted in main.py under the /api prefix.
# =============================================================================

from . import health
from . import schemes
from . import applications
from . import admin

__all__ = [
    "health",
    "schemes",
    "applications",
    "admin",
]
