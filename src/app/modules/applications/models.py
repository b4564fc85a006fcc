"""
Application Models

Database model for program applications. Nested sections (personal details,
location, course selection, documents, education, history) are stored as
JSONB documents on the application row; the section shapes are defined and
validated by the Pydantic schemas before anything is written.
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, Index, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.modules.shared import BaseModel


class ApplicationStatus(str, enum.Enum):
    """Lifecycle status of an application."""

    DRAFT = "draft"
    SUBMITTED = "submitted"
    UNDER_REVIEW = "under-review"
    SHORTLISTED = "shortlisted"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    WAITLISTED = "waitlisted"
    CANCELLED = "cancelled"


class ProgramLevel(str, enum.Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    DIPLOMA = "diploma"
    BACHELOR = "bachelor"
    MASTERS = "masters"
    PHD = "phd"
    CERTIFICATE = "certificate"
    OTHER = "other"


class IntakeMonth(str, enum.Enum):
    JANUARY = "january"
    FEBRUARY = "february"
    MARCH = "march"
    APRIL = "april"
    MAY = "may"
    JUNE = "june"
    JULY = "july"
    AUGUST = "august"
    SEPTEMBER = "september"
    OCTOBER = "october"
    NOVEMBER = "november"
    DECEMBER = "december"


class ModeOfStudy(str, enum.Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    ONLINE = "online"
    HYBRID = "hybrid"


class Gender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
    PREFER_NOT_TO_SAY = "prefer-not-to-say"


class LanguageProficiency(str, enum.Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    NATIVE = "native"


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    # Persist the wire values ("under-review"), not the member names
    return [member.value for member in enum_cls]


class Application(BaseModel):
    """
    A program application.

    Created as a draft by the public intake endpoint, edited while in draft,
    submitted explicitly, then moved through review statuses by admins.
    """

    __tablename__ = "applications"

    # Assigned once, on submission
    application_number: Mapped[str | None] = mapped_column(
        String(20), unique=True, nullable=True
    )

    # Sections
    personal_info: Mapped[dict] = mapped_column(JSONB, nullable=False)
    location_info: Mapped[dict] = mapped_column(JSONB, nullable=False)
    course_selection: Mapped[dict] = mapped_column(JSONB, nullable=False)
    documents: Mapped[dict] = mapped_column(JSONB, nullable=False, default=dict)
    education: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)
    work_experience: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)
    additional_info: Mapped[dict | None] = mapped_column(JSONB, nullable=True)
    payment: Mapped[dict | None] = mapped_column(JSONB, nullable=True)

    terms_agreed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Lifecycle
    status: Mapped[ApplicationStatus] = mapped_column(
        Enum(ApplicationStatus, name="application_status", values_callable=_enum_values),
        nullable=False,
        default=ApplicationStatus.DRAFT,
    )
    # [{status, changed_by, changed_at, notes}, ...] - append only
    status_history: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)

    # Review audit
    submitted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    reviewed_by: Mapped[uuid.UUID | None] = mapped_column(UUID(as_uuid=True), nullable=True)
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    review_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    reviewer_comments: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Request metadata
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(String(500), nullable=True)

    __table_args__ = (
        Index("ix_applications_status", "status"),
        Index("ix_applications_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Application(id={self.id}, number={self.application_number}, status={self.status})>"

    @property
    def full_name(self) -> str:
        info = self.personal_info or {}
        return f"{info.get('first_name', '')} {info.get('last_name', '')}".strip()

    @property
    def is_submitted(self) -> bool:
        return self.status is not None and self.status != ApplicationStatus.DRAFT

    @property
    def is_under_review(self) -> bool:
        return self.status == ApplicationStatus.UNDER_REVIEW

    @property
    def is_accepted(self) -> bool:
        return self.status == ApplicationStatus.ACCEPTED

    @property
    def is_rejected(self) -> bool:
        return self.status == ApplicationStatus.REJECTED
