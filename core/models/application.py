# =============================================================================
# core/models/application.py - Application Schemas
# =============================================================================
# An application is a citizen's submission against a scheme. It is the only
# entity with a lifecycle:
#
#   pending --review(approved)--> approved
#   pending --review(rejected)--> rejected
#
# approved and rejected are terminal. The owner is fixed at creation.
# =============================================================================

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .scheme import Scheme


class ApplicationStatus(str, Enum):
    """
    Possible states for an application.

    Flow: pending -> approved | rejected
    """
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not ApplicationStatus.PENDING


class ReviewDecision(str, Enum):
    """Outcomes an admin may record; a review can never move back to pending."""
    APPROVED = "approved"
    REJECTED = "rejected"

    def to_status(self) -> ApplicationStatus:
        return ApplicationStatus(self.value)


class Application(BaseModel):
    """
    A row of the applications table, serialized with camelCase keys.

    form_data is an opaque blob; its structure is up to the client.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: UUID = Field(..., description="Unique application identifier")
    user_id: UUID = Field(..., description="Owning user")
    scheme_id: UUID = Field(..., description="Target scheme")
    form_data: str | None = Field(default=None)
    status: ApplicationStatus = Field(default=ApplicationStatus.PENDING)
    admin_remarks: str | None = Field(default=None)
    created_at: datetime | None = Field(default=None)
    reviewed_at: datetime | None = Field(default=None)
    reviewed_by: UUID | None = Field(default=None)


class ApplicationWithScheme(Application):
    """
    An application with its target scheme resolved, for the admin listing.

    scheme is None if the referenced scheme row can no longer be found.
    """

    scheme: Scheme | None = Field(default=None)
