"""Tests for ApplicationService."""

from datetime import date
from uuid import uuid4

import pytest
from sqlalchemy.exc import SQLAlchemyError

from admissions.core.exceptions import (
    ApplicationNotFoundError,
    PersistenceError,
    ValidationError,
)
from admissions.services.application_service import REQUIRED_APPLICATION_FIELDS, ApplicationService


@pytest.fixture
def application_service(mock_application_repository) -> ApplicationService:
    return ApplicationService(mock_application_repository)


class TestSubmitApplication:
    @pytest.mark.asyncio
    async def test_submit_sets_pending_status_and_identical_timestamps(
        self, application_service, mock_application_repository, application_payload
    ):
        application = await application_service.submit_application(application_payload)

        assert application.status == "pending"
        assert application.submitted_at == application.created_at == application.updated_at
        assert application.submitted_at.tzinfo is not None
        assert application.date_of_birth == date(2004, 3, 18)
        assert application.email == application_payload["email"]
        mock_application_repository.create.assert_awaited_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", REQUIRED_APPLICATION_FIELDS)
    async def test_missing_required_field_is_rejected(
        self, field, application_service, mock_application_repository, application_payload
    ):
        del application_payload[field]

        with pytest.raises(ValidationError, match=f"Missing required field: {field}$"):
            await application_service.submit_application(application_payload)

        mock_application_repository.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_email_counts_as_missing(
        self, application_service, mock_application_repository, application_payload
    ):
        application_payload["email"] = ""

        with pytest.raises(ValidationError) as exc_info:
            await application_service.submit_application(application_payload)

        assert str(exc_info.value) == "Missing required field: email"
        mock_application_repository.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_first_missing_field_is_reported(self, application_service, application_payload):
        application_payload["phone"] = None
        application_payload["address"] = ""

        with pytest.raises(ValidationError, match="Missing required field: phone"):
            await application_service.submit_application(application_payload)

    @pytest.mark.asyncio
    async def test_caller_cannot_override_status_or_timestamps(
        self, application_service, mock_application_repository, application_payload
    ):
        application_payload["status"] = "approved"
        application_payload["submitted_at"] = "1999-01-01T00:00:00Z"

        application = await application_service.submit_application(application_payload)

        assert application.status == "pending"
        assert application.submitted_at.year != 1999
        _, kwargs = mock_application_repository.create.call_args
        assert kwargs["status"] == "pending"

    @pytest.mark.asyncio
    async def test_optional_field_is_carried_through(self, application_service, application_payload):
        application = await application_service.submit_application(application_payload)

        assert application.previous_healthcare_experience == "Volunteer at UTH paediatric ward"

    @pytest.mark.asyncio
    async def test_invalid_date_of_birth(
        self, application_service, mock_application_repository, application_payload
    ):
        application_payload["date_of_birth"] = "18/03/2004"

        with pytest.raises(ValidationError, match="date_of_birth"):
            await application_service.submit_application(application_payload)

        mock_application_repository.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_store_failure_raises_persistence_error(
        self, application_service, mock_application_repository, application_payload
    ):
        mock_application_repository.create.side_effect = SQLAlchemyError("connection refused")

        with pytest.raises(PersistenceError, match="Failed to submit application") as exc_info:
            await application_service.submit_application(application_payload)

        assert "connection refused" in str(exc_info.value)
        assert mock_application_repository.create.await_count == 1


class TestListApplications:
    @pytest.mark.asyncio
    async def test_list_passes_status_filter(
        self, application_service, mock_application_repository, stored_application
    ):
        mock_application_repository.list_applications.return_value = [stored_application]

        result = await application_service.list_applications(status="pending")

        assert result == [stored_application]
        mock_application_repository.list_applications.assert_awaited_once_with(status="pending")

    @pytest.mark.asyncio
    async def test_list_without_rows_returns_empty(self, application_service):
        assert await application_service.list_applications() == []

    @pytest.mark.asyncio
    async def test_unknown_status_filter(self, application_service):
        with pytest.raises(ValidationError, match="Invalid status"):
            await application_service.list_applications(status="archived")

    @pytest.mark.asyncio
    async def test_list_failure(self, application_service, mock_application_repository):
        mock_application_repository.list_applications.side_effect = SQLAlchemyError("timeout")

        with pytest.raises(PersistenceError, match="Failed to fetch applications"):
            await application_service.list_applications()


class TestUpdateStatus:
    @pytest.mark.asyncio
    async def test_update_stamps_review_fields(
        self, application_service, mock_application_repository, stored_application
    ):
        mock_application_repository.update.return_value = stored_application

        result = await application_service.update_status(
            stored_application.id, "approved", admin_notes="All documents verified", reviewed_by="admin@college.edu"
        )

        assert result is stored_application
        args, kwargs = mock_application_repository.update.call_args
        assert args == (stored_application.id,)
        assert kwargs["status"] == "approved"
        assert kwargs["admin_notes"] == "All documents verified"
        assert kwargs["reviewed_by"] == "admin@college.edu"
        assert kwargs["reviewed_at"] == kwargs["updated_at"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("application_id, status", [(None, "approved"), (uuid4(), None), (uuid4(), "")])
    async def test_id_and_status_are_required(self, application_service, application_id, status):
        with pytest.raises(ValidationError, match="Application ID and status are required"):
            await application_service.update_status(application_id, status)

    @pytest.mark.asyncio
    async def test_invalid_status(self, application_service, mock_application_repository):
        with pytest.raises(ValidationError, match="Invalid status"):
            await application_service.update_status(uuid4(), "accepted")

        mock_application_repository.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_application(self, application_service, mock_application_repository):
        mock_application_repository.update.return_value = None

        with pytest.raises(ApplicationNotFoundError):
            await application_service.update_status(uuid4(), "rejected")

    @pytest.mark.asyncio
    async def test_update_failure(self, application_service, mock_application_repository):
        mock_application_repository.update.side_effect = SQLAlchemyError("deadlock detected")

        with pytest.raises(PersistenceError, match="Failed to update application"):
            await application_service.update_status(uuid4(), "under_review")


class TestSubmitApplicationFalsyValues:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [0, False, "", None])
    async def test_falsy_phone_counts_as_missing(
        self, value, application_service, mock_application_repository, application_payload
    ):
        application_payload["phone"] = value

        with pytest.raises(ValidationError, match="Missing required field: phone$"):
            await application_service.submit_application(application_payload)

        mock_application_repository.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_numeric_values_are_stored_as_text(
        self, application_service, mock_application_repository, application_payload
    ):
        application_payload["phone"] = 260977123456

        await application_service.submit_application(application_payload)

        _, kwargs = mock_application_repository.create.call_args
        assert kwargs["phone"] == "260977123456"
