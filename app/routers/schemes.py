# =============================================================================
# app/routers/schemes.py - Scheme Catalog Endpoints
# =============================================================================
# Read-only listing of welfare schemes. Requires authentication.
# =============================================================================

from fastapi import APIRouter

from app.auth import CurrentUser
from app.dependencies import SchemeCatalogDep
from core.models.scheme import Scheme

router = APIRouter()


@router.get("/schemes", response_model=list[Scheme])
def list_schemes(user: CurrentUser, catalog: SchemeCatalogDep):
    """
    List all available schemes in storage order.

    No pagination or filtering: the catalog is small reference data.
    """
    return catalog.list_schemes()
