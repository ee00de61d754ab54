from datetime import datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class FileType(str, Enum):
    """Supporting documents an applicant must provide."""

    NRC_PHOTO = "nrc_photo"
    GRADE12_RESULTS = "grade12_results"
    PAYMENT_RECEIPT = "payment_receipt"


class ApplicationFileIngestRequest(BaseModel):
    """Metadata for a document already uploaded to storage.

    ``requires_review`` is deliberately absent: it is always derived.
    """

    model_config = ConfigDict(extra="ignore")

    application_id: Optional[UUID] = None
    file_type: Optional[str] = None
    file_path: Optional[str] = None
    file_name: Optional[str] = None
    file_size: Optional[int] = None
    file_url: Optional[str] = None
    authenticity_score: Optional[int] = None
    authenticity_flags: Optional[List[str]] = None


class ApplicationFileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    application_id: UUID
    file_type: str
    file_path: str
    file_name: str
    file_size: int
    file_url: Optional[str] = None
    authenticity_score: int
    authenticity_flags: List[str]
    requires_review: bool
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    review_notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
