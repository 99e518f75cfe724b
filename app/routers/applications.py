# =============================================================================
# app/routers/applications.py - Citizen Application Endpoints
# =============================================================================
# Submitting applications and checking their status.
# All endpoints require authentication.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path
from pydantic import BaseModel, ConfigDict, Field

from app.auth import CurrentUser
from app.dependencies import ApplicationWorkflowDep
from core.models.application import ApplicationStatus

router = APIRouter()


# =============================================================================
# Request/Response Models
# =============================================================================

class ApplyRequest(BaseModel):
    """Body of POST /api/apply."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "schemeId": "7d1c6a9e-0b7e-4a57-9a55-0b3c1f5f4b1a",
                "formData": "{income:50000}",
            }
        },
    )

    scheme_id: UUID = Field(..., alias="schemeId", description="Target scheme id")
    form_data: str | None = Field(
        default=None,
        alias="formData",
        description="Opaque form contents; not interpreted by the server"
    )


class ApplyResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    application_id: UUID = Field(..., alias="applicationId")
    status: ApplicationStatus = ApplicationStatus.PENDING


class StatusResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: ApplicationStatus
    admin_remarks: str | None = Field(default=None, alias="adminRemarks")


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/apply", response_model=ApplyResponse)
def apply(
    user: CurrentUser,
    request: ApplyRequest,
    workflow: ApplicationWorkflowDep,
):
    """
    Submit an application to a scheme.

    The application is owned by the caller and starts as pending.

    Raises:
        400: If schemeId is missing or malformed
        404: If the scheme doesn't exist
    """
    application = workflow.submit(user.id, request.scheme_id, request.form_data)
    return ApplyResponse(application_id=application.id, status=application.status)


@router.get("/application/{application_id}/status", response_model=StatusResponse)
def get_application_status(
    user: CurrentUser,
    application_id: Annotated[UUID, Path(description="Application UUID")],
    workflow: ApplicationWorkflowDep,
):
    """
    Get the status of one application.

    Only the owner or an admin may ask.

    Raises:
        403: If the caller neither owns the application nor is an admin
        404: If the application doesn't exist
    """
    application = workflow.get_for_requester(application_id, user)
    return StatusResponse(status=application.status, admin_remarks=application.admin_remarks)
