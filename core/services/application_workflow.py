# =============================================================================
# core/services/application_workflow.py - Application Lifecycle
# =============================================================================
# Handles submission, status lookup and admin review of applications.
#
# State machine:
#   pending -> approved | rejected   (admin review only, terminal)
#
# A review is a single conditional update on (id, status = 'pending'), so
# status and remarks are written together and two concurrent reviews of the
# same application cannot both win.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from supabase import Client

from app.exceptions import (
    AdminRequiredError,
    ApplicationAccessDeniedError,
    ApplicationAlreadyReviewedError,
    ApplicationNotFoundError,
    PersistenceError,
    SchemeNotFoundError,
)
from core.models.application import (
    Application,
    ApplicationStatus,
    ApplicationWithScheme,
    ReviewDecision,
)
from core.models.user import AuthUser
from core.services.scheme_catalog import SchemeCatalog
from lib.utils import normalize_uuid, utc_now_iso

logger = logging.getLogger(__name__)

APPLICATIONS_TABLE = "applications"


class ApplicationWorkflow:
    """
    Service for application submission and review.

    Args:
        client: Supabase client for the applications table
        catalog: Scheme catalog, used to validate and resolve scheme references
    """

    def __init__(self, client: Client, catalog: SchemeCatalog):
        self.client = client
        self.catalog = catalog

    def submit(
        self,
        user_id: UUID | str,
        scheme_id: UUID | str,
        form_data: str | None,
    ) -> Application:
        """
        Create a pending application owned by user_id.

        Raises:
            SchemeNotFoundError: If scheme_id is not in the catalog
            PersistenceError: If the insert fails
        """
        scheme_id_str = normalize_uuid(scheme_id)
        if self.catalog.get(scheme_id_str) is None:
            raise SchemeNotFoundError(scheme_id_str)

        data = {
            "user_id": normalize_uuid(user_id),
            "scheme_id": scheme_id_str,
            "form_data": form_data,
            "status": ApplicationStatus.PENDING.value,
            "created_at": utc_now_iso(),
        }

        try:
            response = self.client.table(APPLICATIONS_TABLE).insert(data).execute()
        except Exception as e:
            raise PersistenceError("submit application", str(e))

        if not response.data:
            raise PersistenceError("submit application", "Insert returned no data")

        application = Application.model_validate(response.data[0])
        logger.info(f"Application {application.id} submitted by user {user_id} for scheme {scheme_id_str}")
        return application

    def get(self, application_id: UUID | str) -> Application:
        """
        Fetch an application by id.

        Raises:
            ApplicationNotFoundError: If the id doesn't resolve
        """
        application_id_str = normalize_uuid(application_id)
        row = self._fetch_row(application_id_str)
        if row is None:
            raise ApplicationNotFoundError(application_id_str)
        return Application.model_validate(row)

    def get_for_requester(self, application_id: UUID | str, requester: AuthUser) -> Application:
        """
        Fetch an application the requester is allowed to see.

        Owners see their own applications; admins see everything.

        Raises:
            ApplicationNotFoundError: If the id doesn't resolve
            ApplicationAccessDeniedError: If the requester is neither owner nor admin
        """
        application = self.get(application_id)
        if application.user_id != requester.id and not requester.is_admin:
            logger.warning(f"User {requester.id} denied access to application {application.id}")
            raise ApplicationAccessDeniedError()
        return application

    def get_status(self, application_id: UUID | str, requester: AuthUser) -> ApplicationStatus:
        return self.get_for_requester(application_id, requester).status

    def list_all_for_admin(self) -> list[ApplicationWithScheme]:
        """
        Every application, oldest first, with its scheme resolved.

        Applications whose scheme row is missing are returned with scheme=None.
        """
        try:
            response = (
                self.client.table(APPLICATIONS_TABLE)
                .select("*")
                .order("created_at")
                .execute()
            )
        except Exception as e:
            raise PersistenceError("list applications", str(e))

        rows = response.data or []
        schemes = self.catalog.get_many(row["scheme_id"] for row in rows)

        return [
            ApplicationWithScheme.model_validate({**row, "scheme": schemes.get(str(row["scheme_id"]))})
            for row in rows
        ]

    def review(
        self,
        application_id: UUID | str,
        decision: ReviewDecision,
        remarks: str | None,
        reviewer: AuthUser,
    ) -> Application:
        """
        Record an admin decision on a pending application.

        Args:
            application_id: Application to decide
            decision: approved or rejected
            remarks: Free-text note stored with the decision
            reviewer: The admin making the decision

        Returns:
            The updated application

        Raises:
            AdminRequiredError: If reviewer is not an admin
            ApplicationNotFoundError: If the id doesn't resolve
            ApplicationAlreadyReviewedError: If the application already has a decision
        """
        if not reviewer.is_admin:
            raise AdminRequiredError()

        application_id_str = normalize_uuid(application_id)
        update_data = {
            "status": decision.to_status().value,
            "admin_remarks": remarks,
            "reviewed_at": utc_now_iso(),
            "reviewed_by": str(reviewer.id),
        }

        try:
            response = (
                self.client.table(APPLICATIONS_TABLE)
                .update(update_data)
                .eq("id", application_id_str)
                .eq("status", ApplicationStatus.PENDING.value)
                .execute()
            )
        except Exception as e:
            raise PersistenceError("review application", str(e))

        if response.data:
            application = Application.model_validate(response.data[0])
            logger.info(
                f"Application {application_id_str} {application.status.value} by admin {reviewer.id}"
            )
            return application

        # Nothing matched: either the id is unknown or a decision already exists
        current = self._fetch_row(application_id_str)
        if current is None:
            raise ApplicationNotFoundError(application_id_str)

        status = ApplicationStatus(current["status"])
        if status.is_terminal:
            raise ApplicationAlreadyReviewedError(application_id_str, status.value)
        raise PersistenceError("review application", "Conditional update matched no rows")

    def _fetch_row(self, application_id: str) -> dict[str, Any] | None:
        try:
            response = (
                self.client.table(APPLICATIONS_TABLE)
                .select("*")
                .eq("id", application_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise PersistenceError("look up application", str(e))

        return response.data[0] if response.data else None
