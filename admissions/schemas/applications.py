from datetime import date, datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    UNDER_REVIEW = "under_review"


class ApplicationSubmitRequest(BaseModel):
    """Application form payload.

    Fields are left untyped so values reach the service as sent: a required
    field that is empty, ``0`` or ``false`` must be reported as missing by
    name rather than coerced or rejected here. The service stores them as
    text once the presence check has passed.
    """

    model_config = ConfigDict(extra="ignore")

    first_name: Optional[Any] = None
    last_name: Optional[Any] = None
    email: Optional[Any] = None
    phone: Optional[Any] = None
    date_of_birth: Optional[Any] = Field(default=None, description="ISO date, YYYY-MM-DD")
    address: Optional[Any] = None
    program_interest: Optional[Any] = None
    education_background: Optional[Any] = None
    previous_healthcare_experience: Optional[Any] = None
    motivation_statement: Optional[Any] = None
    emergency_contact_name: Optional[Any] = None
    emergency_contact_phone: Optional[Any] = None
    emergency_contact_relationship: Optional[Any] = None


class ApplicationStatusUpdateRequest(BaseModel):
    """Admin review decision."""

    model_config = ConfigDict(populate_by_name=True)

    application_id: Optional[UUID] = Field(default=None, alias="applicationId")
    status: Optional[str] = None
    admin_notes: Optional[str] = Field(default=None, alias="adminNotes")
    reviewed_by: Optional[str] = Field(default=None, alias="reviewedBy")


class ApplicationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    first_name: str
    last_name: str
    email: str
    phone: str
    date_of_birth: date
    address: str
    program_interest: str
    education_background: str
    previous_healthcare_experience: Optional[str] = None
    motivation_statement: str
    emergency_contact_name: str
    emergency_contact_phone: str
    emergency_contact_relationship: str
    status: str
    admin_notes: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    submitted_at: datetime
    created_at: datetime
    updated_at: datetime
