"""Pydantic schemas for user endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from schemas.validators import MAX_NAME_LENGTH, reject_explicit_null


class UserUpdate(BaseModel):
    """Schema for a partial profile update. Omitted fields are left unchanged."""

    email: EmailStr | None = None
    first_name: str | None = Field(default=None, max_length=MAX_NAME_LENGTH)
    last_name: str | None = Field(default=None, max_length=MAX_NAME_LENGTH)

    @field_validator("email", mode="before")
    @classmethod
    def check_email_not_null(cls, v: str | None) -> str | None:
        """Email is the login identifier and cannot be removed."""
        return reject_explicit_null(v, "email")


class UserResponse(BaseModel):
    """Response model for user info. Never exposes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    first_name: str | None
    last_name: str | None
    created_at: datetime
    updated_at: datetime
