# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .credential_store import CredentialStore
from .token_service import TokenService
from .auth_service import AuthService, LoginResult
from .scheme_catalog import SchemeCatalog
from .application_workflow import ApplicationWorkflow

__all__ = [
    "CredentialStore",
    "TokenService",
    "AuthService",
    "LoginResult",
    "SchemeCatalog",
    "ApplicationWorkflow",
]
