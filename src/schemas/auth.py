"""Pydantic schemas for signup and signin."""
from pydantic import BaseModel, EmailStr, Field


class AuthRequest(BaseModel):
    """Credentials submitted to /auth/signup and /auth/signin."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=256)


class TokenResponse(BaseModel):
    """Access token issued after a successful signup or signin."""

    access_token: str
    token_type: str = "bearer"
