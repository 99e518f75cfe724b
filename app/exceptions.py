# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error leaves the service as JSON with a "message" field; clients can
# branch on "code" without parsing text.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.config import get_settings

logger = logging.getLogger(__name__)


class SchemePortalException(Exception):
    """
    Base exception for the scheme portal.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "SCHEME_PORTAL_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "message": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Validation Exceptions
# =============================================================================

class MissingFieldsError(SchemePortalException):
    """Raised when required request fields are absent or empty."""

    def __init__(self, fields: list[str]):
        super().__init__(
            message="Missing required fields",
            code="MISSING_FIELDS",
            status_code=400,
            suggestion=f"Provide non-empty values for: {', '.join(fields)}",
            details={"fields": fields},
        )


# =============================================================================
# Identity Exceptions
# =============================================================================

class IdentityExistsError(SchemePortalException):
    """Raised when registering an email that already has an account."""

    def __init__(self):
        super().__init__(
            message="User already exists",
            code="IDENTITY_EXISTS",
            status_code=409,
            suggestion="Log in with the existing account instead",
        )


class InvalidCredentialsError(SchemePortalException):
    """
    Raised when login fails.

    Unknown email and wrong password produce the same error so callers
    cannot probe which accounts exist.
    """

    def __init__(self):
        super().__init__(
            message="Invalid credentials",
            code="INVALID_CREDENTIALS",
            status_code=401,
        )


class RoleNotAllowedError(SchemePortalException):
    """Raised when self-registration asks for a role that is disabled."""

    def __init__(self, role: str):
        super().__init__(
            message="Access required",
            code="ROLE_NOT_ALLOWED",
            status_code=403,
            suggestion="Register without a role or ask an administrator",
            details={"role": role},
        )


# =============================================================================
# Access Control Exceptions
# =============================================================================

class UnauthenticatedError(SchemePortalException):
    """Raised when a protected route is called without a bearer token."""

    def __init__(self):
        super().__init__(
            message="No token provided",
            code="UNAUTHENTICATED",
            status_code=401,
            suggestion="Send an 'Authorization: Bearer <token>' header obtained from POST /api/login",
        )


class InvalidTokenError(SchemePortalException):
    """Raised when a bearer token has a bad signature, bad claims or has expired."""

    def __init__(self):
        super().__init__(
            message="Invalid token",
            code="INVALID_TOKEN",
            status_code=403,
            suggestion="Log in again to obtain a fresh token",
        )


class AdminRequiredError(SchemePortalException):
    """Raised when a non-admin identity calls an admin-only route."""

    def __init__(self):
        super().__init__(
            message="Admin access required",
            code="ADMIN_REQUIRED",
            status_code=403,
        )


class ApplicationAccessDeniedError(SchemePortalException):
    """Raised when a citizen asks about an application they do not own."""

    def __init__(self):
        super().__init__(
            message="Unauthorized",
            code="UNAUTHORIZED",
            status_code=403,
        )


# =============================================================================
# Catalog / Workflow Exceptions
# =============================================================================

class SchemeNotFoundError(SchemePortalException):
    """Raised when an application targets a scheme that doesn't exist."""

    def __init__(self, scheme_id: str):
        super().__init__(
            message=f"Scheme not found: {scheme_id}",
            code="SCHEME_NOT_FOUND",
            status_code=404,
            suggestion="Pick a scheme id from GET /api/schemes",
            details={"scheme_id": scheme_id},
        )


class ApplicationNotFoundError(SchemePortalException):
    """Raised when an application ID doesn't exist."""

    def __init__(self, application_id: str):
        super().__init__(
            message="Application not found",
            code="APPLICATION_NOT_FOUND",
            status_code=404,
            suggestion="Check that the application id is correct",
            details={"application_id": application_id},
        )


class ApplicationAlreadyReviewedError(SchemePortalException):
    """Raised when reviewing an application that already has a decision."""

    def __init__(self, application_id: str, status: str):
        super().__init__(
            message=f"Application already {status}",
            code="ALREADY_REVIEWED",
            status_code=409,
            suggestion="Decisions are final; the applicant must submit a new application",
            details={"application_id": application_id, "status": status},
        )


# =============================================================================
# Persistence Exceptions
# =============================================================================

class PersistenceError(SchemePortalException):
    """Raised when the data store is unreachable or rejects an operation."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            message=f"Error while trying to {operation}",
            code="PERSISTENCE_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"error": error},
        )
        self.operation = operation


# =============================================================================
# Exception Handlers
# =============================================================================

async def scheme_portal_exception_handler(
    request: Request,
    exc: SchemePortalException
) -> JSONResponse:
    """
    Convert SchemePortalException to JSON response.

    Persistence details describe infrastructure, so they are stripped unless
    the deployment explicitly opted in outside production.
    """
    content = exc.to_dict()
    if isinstance(exc, PersistenceError):
        logger.error(f"Persistence failure during '{exc.operation}': {exc.details.get('error')}")
        if not get_settings().include_error_details:
            content.pop("details", None)
    return JSONResponse(status_code=exc.status_code, content=content)


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Missing body fields, malformed ids and unknown enum values all map to 400.
    """
    raw_errors = exc.errors()
    errors = [
        {"field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"), "error": err.get("msg")}
        for err in raw_errors
    ]
    only_missing = bool(raw_errors) and all(err.get("type") == "missing" for err in raw_errors)
    return JSONResponse(
        status_code=400,
        content={
            "message": "Missing required fields" if only_missing else "Invalid request",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }
    )


async def unexpected_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler; never leaks stack traces in production."""
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    content = {
        "message": "An unexpected error occurred",
        "code": "INTERNAL_ERROR",
    }
    if get_settings().include_error_details:
        content["details"] = {"error": str(exc)}
    return JSONResponse(status_code=500, content=content)
