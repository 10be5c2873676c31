"""Pydantic schemas for bookmark endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from schemas.validators import (
    MAX_DESCRIPTION_LENGTH,
    MAX_LINK_LENGTH,
    MAX_TITLE_LENGTH,
    reject_explicit_null,
    strip_required,
)


class BookmarkCreate(BaseModel):
    """Schema for creating a new bookmark."""

    title: str = Field(..., max_length=MAX_TITLE_LENGTH)
    # Stored as given; links are not required to be absolute URLs
    link: str = Field(..., max_length=MAX_LINK_LENGTH)
    description: str | None = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)

    @field_validator("title", "link")
    @classmethod
    def check_not_blank(cls, v: str, info: ValidationInfo) -> str:
        """Require a non-blank title and link."""
        return strip_required(v, info.field_name)


class BookmarkUpdate(BaseModel):
    """
    Schema for a partial bookmark update.

    Only fields present in the request body are applied (the service reads them with
    model_dump(exclude_unset=True)). description may be cleared with an explicit null;
    title and link may not.
    """

    title: str | None = Field(default=None, max_length=MAX_TITLE_LENGTH)
    link: str | None = Field(default=None, max_length=MAX_LINK_LENGTH)
    description: str | None = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)

    @field_validator("title", "link", mode="before")
    @classmethod
    def check_not_null(cls, v: str | None, info: ValidationInfo) -> str | None:
        """Reject explicit null for required columns."""
        return reject_explicit_null(v, info.field_name)

    @field_validator("title", "link")
    @classmethod
    def check_not_blank(cls, v: str, info: ValidationInfo) -> str:
        """Require a non-blank title and link when supplied."""
        return strip_required(v, info.field_name)


class BookmarkResponse(BaseModel):
    """Schema for bookmark responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    link: str
    description: str | None
    created_at: datetime
    updated_at: datetime
