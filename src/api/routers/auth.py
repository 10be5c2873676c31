"""Signup and signin endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_settings
from core.config import Settings
from schemas.auth import AuthRequest, TokenResponse
from services import user_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=TokenResponse, status_code=201)
async def signup(
    data: AuthRequest,
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> TokenResponse:
    """Register a new account and return an access token."""
    return await user_service.signup(db, data, settings)


@router.post("/signin", response_model=TokenResponse)
async def signin(
    data: AuthRequest,
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> TokenResponse:
    """Exchange email and password for an access token."""
    return await user_service.signin(db, data, settings)
