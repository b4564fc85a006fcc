"""Leader schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class LeaderCreate(BaseModel):
    leader_id: int = Field(..., ge=1)
    name: str = Field(..., min_length=1, max_length=200)
    role: str = Field("", max_length=200)
    image: str = Field("", max_length=1000)
    linkedin: str = Field("#", max_length=500)
    email: EmailStr
    category: str = Field("", max_length=100)
    phone: str = Field("", max_length=30)
    profession: str = Field("", max_length=200)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class LeaderUpdate(BaseModel):
    """Partial update. ``leader_id`` cannot change."""

    name: str | None = Field(None, min_length=1, max_length=200)
    role: str | None = Field(None, max_length=200)
    image: str | None = Field(None, max_length=1000)
    linkedin: str | None = Field(None, max_length=500)
    email: EmailStr | None = None
    category: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=30)
    profession: str | None = Field(None, max_length=200)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str | None) -> str | None:
        return v.lower() if v else v


class LeaderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    leader_id: int
    name: str
    role: str
    image: str
    linkedin: str
    email: str
    category: str
    phone: str
    profession: str
    created_at: datetime
    updated_at: datetime
