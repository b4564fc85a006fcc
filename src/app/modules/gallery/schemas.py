"""Gallery schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from app.core.config import settings
from app.modules.gallery.models import DEFAULT_CATEGORY

MAX_BULK_ITEMS = 100


class GalleryItemCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field("", max_length=1000)
    category: str = Field(DEFAULT_CATEGORY, min_length=1, max_length=100)
    image_url: str = Field(..., min_length=1, max_length=1000)
    alt_text: str = Field("", max_length=300)

    @field_validator("title", "description", "category", "image_url", "alt_text", mode="before")
    @classmethod
    def strip_whitespace(cls, v):
        return v.strip() if isinstance(v, str) else v


class GalleryItemUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=1000)
    category: str | None = Field(None, min_length=1, max_length=100)
    image_url: str | None = Field(None, min_length=1, max_length=1000)
    alt_text: str | None = Field(None, max_length=300)


class BulkGalleryRequest(BaseModel):
    items: list[GalleryItemCreate] = Field(..., min_length=1, max_length=MAX_BULK_ITEMS)


class GalleryItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str
    category: str
    image_url: str
    alt_text: str
    created_at: datetime
    updated_at: datetime

    @computed_field
    @property
    def full_image_url(self) -> str:
        return f"{settings.base_url}{self.image_url}"


class CategoryCount(BaseModel):
    category: str
    count: int


class GalleryCategories(BaseModel):
    categories: list[str]
    counts: list[CategoryCount]


class GalleryStats(BaseModel):
    total: int
    recent_uploads: int
    by_category: list[CategoryCount]
