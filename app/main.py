# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Scheme Portal API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main
# =============================================================================

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app import __version__
from app.config import get_settings
from app.exceptions import (
    SchemePortalException,
    scheme_portal_exception_handler,
    unexpected_exception_handler,
    validation_exception_handler,
)
from app.routers import admin, applications, health, schemes
from app.auth import routes as auth_routes
from core.models.scheme import DEFAULT_SCHEMES
from core.services.scheme_catalog import SchemeCatalog
from lib.supabase_client import SupabaseClient

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def bootstrap_database() -> None:
    """
    Verify the database answers and seed the scheme catalog.

    Runs once at startup. Connection failure is fatal: the error propagates
    and the server refuses to start.
    """
    client = SupabaseClient.connect_with_retry(settings)

    if settings.SEED_DEFAULT_SCHEMES:
        SchemeCatalog(client).seed_if_empty(DEFAULT_SCHEMES)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown:
    - Startup: Verify database connectivity, seed default schemes
    - Shutdown: Drop the cached database client
    """
    # Startup
    logger.info(f"Starting Scheme Portal API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list if settings.is_production else ['*']}")

    try:
        await asyncio.to_thread(bootstrap_database)
    except Exception:
        logger.critical("Startup failed: database is unavailable", exc_info=True)
        raise

    yield

    # Shutdown
    logger.info("Shutting down Scheme Portal API")
    SupabaseClient.reset()


# Create FastAPI application
app = FastAPI(
    title="Scheme Portal API",
    description="""
## Welfare Scheme Application Portal

Citizens register, browse government welfare schemes, apply and track the
status of their applications. Administrators review and decide submissions.

### Flow

1. **Register** - `POST /api/register`
2. **Log in** - `POST /api/login` returns a bearer token
3. **Browse** - `GET /api/schemes`
4. **Apply** - `POST /api/apply`
5. **Track** - `GET /api/application/{id}/status`
6. **Review (admin)** - `PUT /api/admin/application/{id}/review`

### Quick Start

```bash
curl -X POST http://localhost:3000/api/login \\
  -H "Content-Type: application/json" \\
  -d '{"email": "alice@example.com", "password": "pw123"}'

curl http://localhost:3000/api/schemes -H "Authorization: Bearer <token>"
```
""",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Registration, login and token introspection",
        },
        {
            "name": "Schemes",
            "description": "Browse available welfare schemes",
        },
        {
            "name": "Applications",
            "description": "Submit applications and check their status",
        },
        {
            "name": "Admin",
            "description": "Review submitted applications (admin role only)",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(SchemePortalException)
async def handle_scheme_portal_exception(request: Request, exc: SchemePortalException):
    """Handle custom portal exceptions."""
    return await scheme_portal_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle malformed request bodies and path parameters."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    return await unexpected_exception_handler(request, exc)


# =============================================================================
# Routers
# =============================================================================

# Registration and login
app.include_router(
    auth_routes.router,
    prefix="/api",
    tags=["Auth"]
)

# Scheme catalog
app.include_router(
    schemes.router,
    prefix="/api",
    tags=["Schemes"]
)

# Citizen applications
app.include_router(
    applications.router,
    prefix="/api",
    tags=["Applications"]
)

# Admin review
app.include_router(
    admin.router,
    prefix="/api",
    tags=["Admin"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api",
    tags=["Health"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Scheme Portal API",
        "version": __version__,
        "docs": "/docs",
        "health": "/api/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)
