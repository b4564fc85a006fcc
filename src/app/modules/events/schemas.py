"""Event schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class EventCreate(BaseModel):
    event_id: int = Field(..., ge=1)
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    image: str = Field(..., min_length=1, max_length=1000)
    date: datetime
    time: str = Field(..., min_length=1, max_length=50)
    location: str = Field(..., min_length=1, max_length=300)
    category: str = Field(..., min_length=1, max_length=100)
    max_attendees: int = Field(..., ge=1)


class EventUpdate(BaseModel):
    """Partial update. ``event_id`` cannot change."""

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, min_length=1)
    image: str | None = Field(None, min_length=1, max_length=1000)
    date: datetime | None = None
    time: str | None = Field(None, min_length=1, max_length=50)
    location: str | None = Field(None, min_length=1, max_length=300)
    category: str | None = Field(None, min_length=1, max_length=100)
    attendees: int | None = Field(None, ge=0)
    max_attendees: int | None = Field(None, ge=1)
    is_active: bool | None = None


class EventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    event_id: int
    title: str
    description: str
    image: str
    date: datetime
    time: str
    location: str
    category: str
    attendees: int
    max_attendees: int
    is_active: bool
    created_at: datetime
    updated_at: datetime
