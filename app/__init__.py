# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the scheme portal web application:
# - main.py: App entry point, middleware setup, error handlers, startup
# - config.py: Environment variable loading and settings
# - dependencies.py: Service wiring for Depends()
# - exceptions.py: Error taxonomy and JSON error handlers
# - auth/: Register/login routes and the access-control gates
# - routers/: API endpoint definitions organized by feature
#
# The app layer is thin - it handles HTTP concerns and delegates
# business logic to the core/ package.
# =============================================================================

__version__ = "1.0.0"
