"""Service for admissions applications: submission and admin review."""

from datetime import date, datetime, timezone
from typing import Any, Dict, List, Mapping, Optional
from uuid import UUID

from admissions.core.exceptions import ApplicationNotFoundError, ValidationError
from admissions.database.models import Application
from admissions.repositories.application_repository import ApplicationRepository
from admissions.schemas.applications import ApplicationStatus
from admissions.services.base_service import BaseService
from admissions.utils.logging import get_logger

LOGGER = get_logger(__name__)

# Checked in this order; the first missing one is reported.
REQUIRED_APPLICATION_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "phone",
    "date_of_birth",
    "address",
    "program_interest",
    "education_background",
    "motivation_statement",
    "emergency_contact_name",
    "emergency_contact_phone",
    "emergency_contact_relationship",
)

OPTIONAL_APPLICATION_FIELDS = ("previous_healthcare_experience",)

VALID_STATUSES = tuple(status.value for status in ApplicationStatus)


class ApplicationService(BaseService):
    """Submits applications and applies admin review decisions.

    The repository is injected so the service can run against a test double.
    """

    persistence_errors = {
        "submit_application": "Failed to submit application",
        "list_applications": "Failed to fetch applications",
        "update_status": "Failed to update application",
    }

    def __init__(self, repository: ApplicationRepository):
        super().__init__(repository)
        self.repository: ApplicationRepository = repository

    async def submit_application(self, payload: Mapping[str, Any]) -> Application:
        """Validate and persist a new application with status ``pending``.

        Args:
            payload: Form fields keyed by column name

        Returns:
            The inserted application

        Raises:
            ValidationError: A required field is missing or empty
            PersistenceError: The insert failed
        """
        return await self.execute(action="submit_application", payload=payload)

    async def list_applications(self, status: Optional[str] = None) -> List[Application]:
        """All applications, newest submission first, optionally by status."""
        return await self.execute(action="list_applications", status=status)

    async def update_status(
        self,
        application_id: Optional[UUID],
        status: Optional[str],
        admin_notes: Optional[str] = None,
        reviewed_by: Optional[str] = None,
    ) -> Application:
        """Record an admin review decision on an application.

        Raises:
            ValidationError: Missing id or status, or unknown status
            ApplicationNotFoundError: No application with that id
            PersistenceError: The update failed
        """
        return await self.execute(
            action="update_status",
            application_id=application_id,
            status=status,
            admin_notes=admin_notes,
            reviewed_by=reviewed_by,
        )

    def validate(self, *args, **kwargs) -> None:
        action = kwargs.get("action")

        if action == "submit_application":
            payload = kwargs.get("payload") or {}
            # Falsy counts as missing: "", 0 and false are rejected like absent keys
            for field in REQUIRED_APPLICATION_FIELDS:
                if not payload.get(field):
                    raise ValidationError(f"Missing required field: {field}")

        elif action == "list_applications":
            status = kwargs.get("status")
            if status and status not in VALID_STATUSES:
                raise ValidationError(
                    f"Invalid status. Must be one of: {', '.join(VALID_STATUSES)}"
                )

        elif action == "update_status":
            if not kwargs.get("application_id") or not kwargs.get("status"):
                raise ValidationError("Application ID and status are required")
            if kwargs["status"] not in VALID_STATUSES:
                raise ValidationError(
                    f"Invalid status. Must be one of: {', '.join(VALID_STATUSES)}"
                )

    async def run(self, *args, **kwargs) -> Any:
        action = kwargs.get("action")

        if action == "submit_application":
            return await self._submit_application_logic(kwargs["payload"])
        elif action == "list_applications":
            return await self._list_applications_logic(kwargs.get("status"))
        elif action == "update_status":
            return await self._update_status_logic(
                kwargs["application_id"],
                kwargs["status"],
                kwargs.get("admin_notes"),
                kwargs.get("reviewed_by"),
            )
        else:
            raise ValidationError(f"Unknown action: {action}")

    async def _submit_application_logic(self, payload: Mapping[str, Any]) -> Application:
        # Presence was checked on the raw values; columns are text from here on
        record: Dict[str, Any] = {
            field: str(payload[field]) for field in REQUIRED_APPLICATION_FIELDS
        }
        for field in OPTIONAL_APPLICATION_FIELDS:
            value = payload.get(field)
            record[field] = str(value) if value is not None else None
        record["date_of_birth"] = _parse_date(payload["date_of_birth"])

        now = datetime.now(timezone.utc)
        record.update(
            status=ApplicationStatus.PENDING.value,
            submitted_at=now,
            created_at=now,
            updated_at=now,
        )

        application = await self.repository.create(**record)

        LOGGER.info(
            f"Application submitted: application_id={application.id}, "
            f"program={application.program_interest}"
        )
        return application

    async def _list_applications_logic(self, status: Optional[str]) -> List[Application]:
        applications = await self.repository.list_applications(status=status)
        LOGGER.debug(f"Fetched {len(applications)} applications (status={status or 'all'})")
        return applications

    async def _update_status_logic(
        self,
        application_id: UUID,
        status: str,
        admin_notes: Optional[str],
        reviewed_by: Optional[str],
    ) -> Application:
        now = datetime.now(timezone.utc)
        application = await self.repository.update(
            application_id,
            status=status,
            admin_notes=admin_notes,
            reviewed_by=reviewed_by,
            reviewed_at=now,
            updated_at=now,
        )
        if application is None:
            raise ApplicationNotFoundError(f"Application with ID {application_id} not found")

        LOGGER.info(
            f"Application reviewed: application_id={application_id}, "
            f"status={status}, reviewed_by={reviewed_by}"
        )
        return application


def _parse_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise ValidationError("Invalid date_of_birth. Expected format YYYY-MM-DD")
