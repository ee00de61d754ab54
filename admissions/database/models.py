"""SQLAlchemy models for the admissions tables."""

import uuid
from datetime import date, datetime

from sqlalchemy import (
    TIMESTAMP,
    Boolean,
    CheckConstraint,
    Date,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from sqlalchemy.orm import Mapped, mapped_column

from admissions.core.database import Base


class Application(Base):
    """A single admissions submission."""

    __tablename__ = "applications"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    program_interest: Mapped[str] = mapped_column(String(255), nullable=False)
    education_background: Mapped[str] = mapped_column(Text, nullable=False)
    previous_healthcare_experience: Mapped[str | None] = mapped_column(Text, nullable=True)
    motivation_statement: Mapped[str] = mapped_column(Text, nullable=False)
    emergency_contact_name: Mapped[str] = mapped_column(String(200), nullable=False)
    emergency_contact_phone: Mapped[str] = mapped_column(String(50), nullable=False)
    emergency_contact_relationship: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending"
    )  # pending | approved | rejected | under_review
    admin_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    reviewed_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    reviewed_at: Mapped[datetime | None] = mapped_column(TIMESTAMP(timezone=True), nullable=True)
    submitted_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default="NOW()", nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default="NOW()", nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default="NOW()", nullable=False
    )

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected', 'under_review')",
            name="ck_applications_status",
        ),
        Index("idx_applications_status", "status"),
        Index("idx_applications_submitted_at", "submitted_at"),
    )


class ApplicationFile(Base):
    """A supporting document uploaded for an application.

    ``application_id`` is a lookup reference only; files are fetched by
    filtering on it rather than through an ORM relationship.
    """

    __tablename__ = "application_files"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    application_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("applications.id", ondelete="CASCADE"), nullable=False
    )
    file_type: Mapped[str] = mapped_column(String(20), nullable=False)
    file_path: Mapped[str] = mapped_column(String(500), nullable=False)
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_size: Mapped[int] = mapped_column(Integer, nullable=False)
    file_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    authenticity_score: Mapped[int] = mapped_column(Integer, nullable=False)
    authenticity_flags: Mapped[list[str]] = mapped_column(
        ARRAY(Text), nullable=False, default=list
    )
    requires_review: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    reviewed_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    reviewed_at: Mapped[datetime | None] = mapped_column(TIMESTAMP(timezone=True), nullable=True)
    review_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default="NOW()", nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default="NOW()", nullable=False
    )

    __table_args__ = (
        CheckConstraint(
            "file_type IN ('nrc_photo', 'grade12_results', 'payment_receipt')",
            name="ck_application_files_file_type",
        ),
        CheckConstraint(
            "authenticity_score >= 0 AND authenticity_score <= 100",
            name="ck_application_files_authenticity_score",
        ),
        Index("idx_application_files_application_id", "application_id"),
        Index("idx_application_files_requires_review", "requires_review"),
        Index("idx_application_files_created_at", "created_at"),
    )
