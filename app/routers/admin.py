# =============================================================================
# app/routers/admin.py - Admin Review Endpoints
# =============================================================================
# Listing and deciding applications. Every endpoint here passes through the
# authentication gate and then the admin gate.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path
from pydantic import BaseModel, ConfigDict, Field

from app.auth import AdminUser
from app.dependencies import ApplicationWorkflowDep
from core.models.application import ApplicationStatus, ApplicationWithScheme, ReviewDecision

router = APIRouter(prefix="/admin")


# =============================================================================
# Request/Response Models
# =============================================================================

class ReviewRequest(BaseModel):
    """Body of PUT /api/admin/application/{id}/review."""
    decision: ReviewDecision = Field(..., description="approved or rejected")
    remarks: str | None = Field(default=None, description="Note stored as adminRemarks")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"decision": "approved", "remarks": "ok"},
                {"decision": "rejected", "remarks": "ineligible"},
            ]
        }
    }


class ReviewResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = "Application updated"
    status: ApplicationStatus
    admin_remarks: str | None = Field(default=None, alias="adminRemarks")


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/applications", response_model=list[ApplicationWithScheme])
def list_applications(admin: AdminUser, workflow: ApplicationWorkflowDep):
    """
    List every application with its scheme resolved.

    Oldest first, no pagination.
    """
    return workflow.list_all_for_admin()


@router.put("/application/{application_id}/review", response_model=ReviewResponse)
def review_application(
    admin: AdminUser,
    application_id: Annotated[UUID, Path(description="Application UUID")],
    request: ReviewRequest,
    workflow: ApplicationWorkflowDep,
):
    """
    Approve or reject a pending application.

    Status and remarks are written together. Decisions are final.

    Raises:
        404: If the application doesn't exist
        409: If the application was already reviewed
    """
    application = workflow.review(application_id, request.decision, request.remarks, admin)
    return ReviewResponse(status=application.status, admin_remarks=application.admin_remarks)
