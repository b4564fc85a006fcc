"""Admin schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

MIN_PASSWORD_LENGTH = 6


class AdminResponse(BaseModel):
    """Admin account without credentials."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    created_at: datetime
    updated_at: datetime


class SeedAdminRequest(BaseModel):
    """Optional credentials for the first admin; settings defaults apply otherwise."""

    email: EmailStr | None = None
    password: str | None = Field(None, min_length=MIN_PASSWORD_LENGTH)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    admin: AdminResponse


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ForgotPasswordResponse(BaseModel):
    reset_token: str
    expires_at: datetime


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)


class UpdateCredentialsRequest(BaseModel):
    """Change e-mail and/or password; the current password is always required."""

    current_password: str = Field(..., min_length=1)
    new_email: EmailStr | None = None
    new_password: str | None = Field(None, min_length=MIN_PASSWORD_LENGTH)

    @model_validator(mode="after")
    def validate_has_change(self) -> "UpdateCredentialsRequest":
        if not self.new_email and not self.new_password:
            raise ValueError("Provide new_email or new_password")
        return self


class AdminExistsResponse(BaseModel):
    exists: bool
