"""Notification schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.modules.notifications.models import NotificationType


class NotificationCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1, max_length=500)
    type: NotificationType = NotificationType.INFO
    timestamp: datetime | None = None

    @field_validator("title", "message", mode="before")
    @classmethod
    def strip_whitespace(cls, v):
        return v.strip() if isinstance(v, str) else v


class NotificationUpdate(BaseModel):
    """Partial update; only the fields sent are changed."""

    title: str | None = Field(None, min_length=1, max_length=200)
    message: str | None = Field(None, min_length=1, max_length=500)
    type: NotificationType | None = None
    timestamp: datetime | None = None


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    message: str
    type: NotificationType
    timestamp: datetime
    created_at: datetime
    updated_at: datetime


class ClearedResponse(BaseModel):
    deleted_count: int
