"""Contact schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.modules.contacts.models import ContactStatus


class ContactCreate(BaseModel):
    """Public contact-form submission."""

    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    subject: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1, max_length=2000)

    @field_validator("first_name", "last_name", "subject", "message", mode="before")
    @classmethod
    def strip_whitespace(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class ContactUpdate(BaseModel):
    status: ContactStatus | None = None
    admin_notes: str | None = Field(None, max_length=500)


class BulkDeleteRequest(BaseModel):
    ids: list[str] = Field(..., min_length=1)


class BulkDeleteResponse(BaseModel):
    deleted_count: int


class ContactResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    first_name: str
    last_name: str
    full_name: str
    email: str
    subject: str
    message: str
    status: ContactStatus
    admin_notes: str | None = None
    created_at: datetime
    updated_at: datetime


class ContactListResponse(BaseModel):
    """Page of contacts plus counts for every status."""

    success: bool = True
    message: str = "Contacts retrieved successfully"
    data: list[ContactResponse]
    pagination: dict
    status_counts: dict[str, int]
