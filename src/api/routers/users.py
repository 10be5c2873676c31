"""User profile endpoints."""
from fastapi import APIRouter, Depends

from api.dependencies import get_current_user, get_dispatch
from models.user import User
from schemas.user import UserResponse, UserUpdate
from services.operation_dispatch import OperationDispatch


router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user: User = Depends(get_current_user),
    dispatch: OperationDispatch = Depends(get_dispatch),
) -> UserResponse:
    """Get the current authenticated user's profile."""
    user = await dispatch.execute("users.get", current_user.id)
    return UserResponse.model_validate(user)


@router.patch("", response_model=UserResponse)
async def update_me(
    data: UserUpdate,
    current_user: User = Depends(get_current_user),
    dispatch: OperationDispatch = Depends(get_dispatch),
) -> UserResponse:
    """Edit the current user's email or name. Omitted fields are left unchanged."""
    user = await dispatch.execute("users.update", current_user.id, data)
    return UserResponse.model_validate(user)
