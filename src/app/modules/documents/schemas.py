"""Document library schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.modules.documents.models import DocumentCategory, DocumentFileType


class DocumentCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: DocumentCategory
    description: str = Field("", max_length=5000)
    file_size: str = Field("0 MB", max_length=50)
    file_type: DocumentFileType
    upload_date: datetime | None = None
    url: str = Field(..., min_length=1, max_length=1000)

    @field_validator("name", "description", "url", mode="before")
    @classmethod
    def strip_whitespace(cls, v):
        return v.strip() if isinstance(v, str) else v


class DocumentUpdate(BaseModel):
    """Partial update. ``upload_date`` is fixed at creation and not accepted."""

    name: str | None = Field(None, min_length=1, max_length=255)
    category: DocumentCategory | None = None
    description: str | None = Field(None, max_length=5000)
    file_size: str | None = Field(None, max_length=50)
    file_type: DocumentFileType | None = None
    url: str | None = Field(None, min_length=1, max_length=1000)


class DocumentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    category: DocumentCategory
    description: str
    file_size: str
    file_type: DocumentFileType
    upload_date: datetime
    url: str
    created_at: datetime
    updated_at: datetime


class DocumentSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    category: DocumentCategory
    file_type: DocumentFileType
    upload_date: datetime


class CategorySummary(BaseModel):
    category: DocumentCategory
    count: int
    latest: datetime | None = None


class DocumentStats(BaseModel):
    total_documents: int
    by_category: dict[str, int]
    by_type: dict[str, int]
    recent_uploads: list[DocumentSummary]


class DownloadDescriptor(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    url: str
    file_type: DocumentFileType
    file_size: str
