# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the portal's business logic:
# - models/: Pydantic schemas for users, schemes and applications
# - services/: Credential store, token service, auth, catalog and workflow
#
# Route handling stays in app/; services only raise the exceptions
# defined in app/exceptions.py and receive their database client and
# settings from the caller.
# =============================================================================
