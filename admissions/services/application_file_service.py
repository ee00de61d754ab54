"""Service for supporting documents attached to applications."""

from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional, Sequence
from uuid import UUID

from admissions.core.exceptions import ValidationError
from admissions.database.models import ApplicationFile
from admissions.repositories.application_file_repository import ApplicationFileRepository
from admissions.schemas.application_files import FileType
from admissions.services.base_service import BaseService
from admissions.utils.logging import get_logger

LOGGER = get_logger(__name__)

# Checked in this order; only absent keys and None count as missing.
REQUIRED_FILE_FIELDS = (
    "application_id",
    "file_type",
    "file_path",
    "file_name",
    "file_size",
    "authenticity_score",
    "authenticity_flags",
)

VALID_FILE_TYPES = tuple(file_type.value for file_type in FileType)

# Documents scoring below this are sent to manual review
REVIEW_SCORE_THRESHOLD = 70


def requires_review(authenticity_score: float, authenticity_flags: Sequence[str]) -> bool:
    """Whether a document needs manual staff inspection.

    Either a low score or any raised flag is enough on its own.
    """
    return authenticity_score < REVIEW_SCORE_THRESHOLD or len(authenticity_flags) > 0


class ApplicationFileService(BaseService):
    """Ingests document metadata and lists an application's documents."""

    persistence_errors = {
        "ingest_file": "Failed to upload application file",
        "list_files": "Failed to fetch application files",
    }

    def __init__(self, repository: ApplicationFileRepository):
        super().__init__(repository)
        self.repository: ApplicationFileRepository = repository

    async def ingest_file(self, payload: Mapping[str, Any]) -> ApplicationFile:
        """Validate document metadata, derive ``requires_review`` and persist it.

        Args:
            payload: Metadata for a file already uploaded to storage

        Returns:
            The inserted application file

        Raises:
            ValidationError: Missing field, unknown file type or bad value
            PersistenceError: The insert failed
        """
        return await self.execute(action="ingest_file", payload=payload)

    async def list_files(self, application_id: Optional[UUID]) -> List[ApplicationFile]:
        """All files of an application, newest first. Empty when there are none."""
        return await self.execute(action="list_files", application_id=application_id)

    def validate(self, *args, **kwargs) -> None:
        action = kwargs.get("action")

        if action == "ingest_file":
            payload = kwargs.get("payload") or {}
            for field in REQUIRED_FILE_FIELDS:
                if payload.get(field) is None:
                    raise ValidationError(f"Missing required field: {field}")

            if payload["file_type"] not in VALID_FILE_TYPES:
                raise ValidationError(
                    f"Invalid file_type. Must be one of: {', '.join(VALID_FILE_TYPES)}"
                )

            score = payload["authenticity_score"]
            if isinstance(score, bool) or not isinstance(score, (int, float)):
                raise ValidationError("authenticity_score must be a number")
            if isinstance(score, float) and not score.is_integer():
                raise ValidationError("authenticity_score must be a whole number")
            if not 0 <= score <= 100:
                raise ValidationError("authenticity_score must be between 0 and 100")

            if not isinstance(payload["authenticity_flags"], (list, tuple)):
                raise ValidationError("authenticity_flags must be a list")

        elif action == "list_files":
            if not kwargs.get("application_id"):
                raise ValidationError("Application ID is required")

    async def run(self, *args, **kwargs) -> Any:
        action = kwargs.get("action")

        if action == "ingest_file":
            return await self._ingest_file_logic(kwargs["payload"])
        elif action == "list_files":
            return await self._list_files_logic(_coerce_uuid(kwargs["application_id"]))
        else:
            raise ValidationError(f"Unknown action: {action}")

    async def _ingest_file_logic(self, payload: Mapping[str, Any]) -> ApplicationFile:
        flags = list(payload["authenticity_flags"])
        score = int(payload["authenticity_score"])
        now = datetime.now(timezone.utc)

        record = {
            "application_id": _coerce_uuid(payload["application_id"]),
            "file_type": payload["file_type"],
            "file_path": payload["file_path"],
            "file_name": payload["file_name"],
            "file_size": payload["file_size"],
            "file_url": payload.get("file_url"),
            "authenticity_score": score,
            "authenticity_flags": flags,
            "requires_review": requires_review(score, flags),
            "created_at": now,
            "updated_at": now,
        }

        application_file = await self.repository.create(**record)

        if application_file.requires_review:
            LOGGER.warning(
                f"Application file flagged for review: file_id={application_file.id}, "
                f"application_id={record['application_id']}, score={score}, flags={flags}"
            )
        else:
            LOGGER.info(
                f"Application file recorded: file_id={application_file.id}, "
                f"file_type={record['file_type']}"
            )
        return application_file

    async def _list_files_logic(self, application_id: UUID) -> List[ApplicationFile]:
        return await self.repository.list_by_application(application_id)


def _coerce_uuid(value: Any) -> UUID:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        raise ValidationError(f"Invalid application ID: {value}")
