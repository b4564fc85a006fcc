"""
Application Schemas

Pydantic schemas for the application sections, request payloads and
response serialization.
"""

from datetime import date, datetime
from typing import Annotated
from uuid import UUID

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, EmailStr, Field

from app.modules.applications.models import (
    ApplicationStatus,
    Gender,
    IntakeMonth,
    LanguageProficiency,
    ModeOfStudy,
    PaymentStatus,
    ProgramLevel,
)

PHONE_PATTERN = r"^[+]*[(]{0,1}[0-9]{1,4}[)]{0,1}[-\s./0-9]*$"
MIN_INTAKE_YEAR = 2020
MAX_INTAKE_YEAR = 2030
MAX_RECOMMENDATION_LETTERS = 3


def _strip(value):
    return value.strip() if isinstance(value, str) else value


TrimmedStr = Annotated[str, BeforeValidator(_strip)]
NormalizedEmail = Annotated[EmailStr, AfterValidator(str.lower)]


# ============================================
# Sections
# ============================================


class PersonalInfo(BaseModel):
    """Applicant identity and contact details."""

    first_name: TrimmedStr = Field(..., min_length=1, max_length=100)
    last_name: TrimmedStr = Field(..., min_length=1, max_length=100)
    email: NormalizedEmail
    phone: TrimmedStr = Field(..., min_length=1, max_length=30, pattern=PHONE_PATTERN)
    date_of_birth: date | None = None
    gender: Gender | None = None
    nationality: str = Field("Rwandan", max_length=100)


class LocationInfo(BaseModel):
    """Administrative location, province down to village."""

    province: TrimmedStr = Field(..., min_length=1, max_length=100)
    district: TrimmedStr = Field(..., min_length=1, max_length=100)
    sector: TrimmedStr = Field(..., min_length=1, max_length=100)
    cell: TrimmedStr = Field(..., min_length=1, max_length=100)
    village: TrimmedStr = Field(..., min_length=1, max_length=100)
    address: str | None = Field(None, max_length=500)
    postal_code: str | None = Field(None, max_length=20)


class CourseSelection(BaseModel):
    """The program and intake being applied for."""

    program: TrimmedStr = Field(..., min_length=1, max_length=200)
    level: ProgramLevel
    specialization: str | None = Field(None, max_length=200)
    intake_year: int = Field(..., ge=MIN_INTAKE_YEAR, le=MAX_INTAKE_YEAR)
    intake_month: IntakeMonth = IntakeMonth.JANUARY
    mode_of_study: ModeOfStudy = ModeOfStudy.FULL_TIME


class FileMetadata(BaseModel):
    """A stored upload occupying a document slot."""

    filename: str
    path: str
    url: str
    size: int
    mimetype: str
    uploaded_at: datetime


class AttachedFile(BaseModel):
    """
    A supporting file referenced by an education or work entry.

    Only the public URL is kept; storage paths are never taken from clients.
    """

    filename: str
    url: str


class ApplicationDocuments(BaseModel):
    resume: FileMetadata | None = None
    transcripts: FileMetadata | None = None
    id_proof: FileMetadata | None = None
    passport_photo: FileMetadata | None = None
    recommendation_letters: list[FileMetadata] = Field(
        default_factory=list, max_length=MAX_RECOMMENDATION_LETTERS
    )


class EducationEntry(BaseModel):
    institution: str = Field(..., min_length=1, max_length=200)
    qualification: str = Field(..., min_length=1, max_length=200)
    field_of_study: str | None = Field(None, max_length=200)
    start_year: int | None = Field(None, ge=1900, le=2100)
    end_year: int | None = Field(None, ge=1900, le=2100)
    grade: str | None = Field(None, max_length=50)
    is_completed: bool = True
    documents: list[AttachedFile] = Field(default_factory=list)


class WorkExperienceEntry(BaseModel):
    employer: str = Field(..., min_length=1, max_length=200)
    position: str = Field(..., min_length=1, max_length=200)
    start_date: date | None = None
    end_date: date | None = None
    is_current: bool = False
    description: str | None = Field(None, max_length=2000)
    documents: list[AttachedFile] = Field(default_factory=list)


class LanguageSkill(BaseModel):
    language: str = Field(..., min_length=1, max_length=100)
    proficiency: LanguageProficiency


class Reference(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    relationship: str | None = Field(None, max_length=100)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=30, pattern=PHONE_PATTERN)
    organization: str | None = Field(None, max_length=200)


class AdditionalInfo(BaseModel):
    skills: list[str] = Field(default_factory=list)
    languages: list[LanguageSkill] = Field(default_factory=list)
    hobbies: list[str] = Field(default_factory=list)
    references: list[Reference] = Field(default_factory=list)


class PaymentInfo(BaseModel):
    amount: float | None = Field(None, ge=0)
    currency: str = Field("RWF", max_length=3)
    method: str | None = Field(None, max_length=50)
    transaction_id: str | None = Field(None, max_length=100)
    status: PaymentStatus = PaymentStatus.PENDING
    paid_at: datetime | None = None


class StatusHistoryEntry(BaseModel):
    status: ApplicationStatus
    changed_by: UUID | None = None
    changed_at: datetime
    notes: str | None = None


# ============================================
# Partial section updates
# ============================================


class PersonalInfoUpdate(BaseModel):
    """Partial personal details; unset fields keep their stored value."""

    first_name: TrimmedStr | None = Field(None, min_length=1, max_length=100)
    last_name: TrimmedStr | None = Field(None, min_length=1, max_length=100)
    email: NormalizedEmail | None = None
    phone: TrimmedStr | None = Field(None, min_length=1, max_length=30, pattern=PHONE_PATTERN)
    date_of_birth: date | None = None
    gender: Gender | None = None
    nationality: str | None = Field(None, max_length=100)


class LocationInfoUpdate(BaseModel):
    province: str | None = Field(None, min_length=1, max_length=100)
    district: str | None = Field(None, min_length=1, max_length=100)
    sector: str | None = Field(None, min_length=1, max_length=100)
    cell: str | None = Field(None, min_length=1, max_length=100)
    village: str | None = Field(None, min_length=1, max_length=100)
    address: str | None = Field(None, max_length=500)
    postal_code: str | None = Field(None, max_length=20)


class CourseSelectionUpdate(BaseModel):
    program: str | None = Field(None, min_length=1, max_length=200)
    level: ProgramLevel | None = None
    specialization: str | None = Field(None, max_length=200)
    intake_year: int | None = Field(None, ge=MIN_INTAKE_YEAR, le=MAX_INTAKE_YEAR)
    intake_month: IntakeMonth | None = None
    mode_of_study: ModeOfStudy | None = None


# ============================================
# Requests
# ============================================


class ApplicationCreate(BaseModel):
    """Payload for creating a draft application."""

    personal_info: PersonalInfo
    location_info: LocationInfo
    course_selection: CourseSelection
    terms_agreed: bool = False
    education: list[EducationEntry] = Field(default_factory=list)
    work_experience: list[WorkExperienceEntry] = Field(default_factory=list)
    additional_info: AdditionalInfo | None = None
    payment: PaymentInfo | None = None


class ApplicationUpdate(BaseModel):
    """
    Partial update payload.

    ``status``, ``review_notes``, ``reviewer_comments`` and ``status_notes``
    are reserved for admins.
    """

    personal_info: PersonalInfoUpdate | None = None
    location_info: LocationInfoUpdate | None = None
    course_selection: CourseSelectionUpdate | None = None
    terms_agreed: bool | None = None
    education: list[EducationEntry] | None = None
    work_experience: list[WorkExperienceEntry] | None = None
    additional_info: AdditionalInfo | None = None
    payment: PaymentInfo | None = None

    status: ApplicationStatus | None = None
    status_notes: str | None = Field(None, max_length=1000)
    review_notes: str | None = Field(None, max_length=5000)
    reviewer_comments: str | None = Field(None, max_length=5000)


class StatusChangeRequest(BaseModel):
    """Request body for POST /applications/{id}/status."""

    status: ApplicationStatus
    notes: str | None = Field(None, max_length=1000)


# ============================================
# Responses
# ============================================


class ApplicationResponse(BaseModel):
    """Full application representation."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    application_number: str | None = None
    personal_info: PersonalInfo
    location_info: LocationInfo
    course_selection: CourseSelection
    documents: ApplicationDocuments
    education: list[EducationEntry]
    work_experience: list[WorkExperienceEntry]
    additional_info: AdditionalInfo | None = None
    payment: PaymentInfo | None = None
    terms_agreed: bool
    status: ApplicationStatus
    status_history: list[StatusHistoryEntry]
    submitted_at: datetime | None = None
    reviewed_by: UUID | None = None
    reviewed_at: datetime | None = None
    review_notes: str | None = None
    reviewer_comments: str | None = None
    created_at: datetime
    updated_at: datetime

    # Derived
    full_name: str
    is_submitted: bool
    is_under_review: bool
    is_accepted: bool
    is_rejected: bool


class ApplicationStatistics(BaseModel):
    """Aggregate counts for the admin dashboard."""

    total: int
    submitted: int
    accepted: int
    by_status: dict[str, int]
