# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends(), and tests swap
# them out through app.dependency_overrides.
# =============================================================================

from datetime import timedelta
from typing import Annotated

from fastapi import Depends
from supabase import Client

from app.config import Settings, get_settings
from core.services import (
    ApplicationWorkflow,
    AuthService,
    CredentialStore,
    SchemeCatalog,
    TokenService,
)
from lib.passwords import PasswordHasher
from lib.supabase_client import SupabaseClient


SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_supabase_client(settings: SettingsDep) -> Client:
    """
    Get Supabase client instance.

    Returns the process-wide client.
    """
    return SupabaseClient.get_client(settings)


SupabaseDep = Annotated[Client, Depends(get_supabase_client)]


def get_token_service(settings: SettingsDep) -> TokenService:
    return TokenService(
        secret=settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        ttl=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )


def get_password_hasher(settings: SettingsDep) -> PasswordHasher:
    return PasswordHasher(rounds=settings.BCRYPT_ROUNDS)


def get_auth_service(
    settings: SettingsDep,
    client: SupabaseDep,
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthService:
    return AuthService(
        store=CredentialStore(client),
        hasher=hasher,
        tokens=tokens,
        allow_admin_registration=settings.ALLOW_ADMIN_REGISTRATION,
    )


def get_scheme_catalog(client: SupabaseDep) -> SchemeCatalog:
    return SchemeCatalog(client)


def get_application_workflow(
    client: SupabaseDep,
    catalog: Annotated[SchemeCatalog, Depends(get_scheme_catalog)],
) -> ApplicationWorkflow:
    return ApplicationWorkflow(client, catalog)


# Type aliases for dependency injection
TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
SchemeCatalogDep = Annotated[SchemeCatalog, Depends(get_scheme_catalog)]
ApplicationWorkflowDep = Annotated[ApplicationWorkflow, Depends(get_application_workflow)]
