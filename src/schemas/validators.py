"""Shared validation functions for Pydantic schemas."""

MAX_TITLE_LENGTH = 500
MAX_DESCRIPTION_LENGTH = 2000
MAX_LINK_LENGTH = 2048
MAX_NAME_LENGTH = 255


def reject_explicit_null(value: object, field_name: str) -> object:
    """
    Reject an explicit null for a column that is NOT NULL in the database.

    Partial-update schemas default these fields to None to mean "not supplied";
    only an explicit null in the request body reaches this check.
    """
    if value is None:
        raise ValueError(f"{field_name} cannot be null")
    return value


def strip_required(value: str, field_name: str) -> str:
    """Strip surrounding whitespace and reject strings that end up empty."""
    stripped = value.strip()
    if not stripped:
        raise ValueError(f"{field_name} cannot be empty")
    return stripped
