"""FastAPI dependencies for injection."""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import get_current_user
from core.config import get_settings
from db.session import get_async_session
from services.operation_dispatch import OperationDispatch


def get_dispatch(db: AsyncSession = Depends(get_async_session)) -> OperationDispatch:
    """Operation dispatcher bound to the request's session."""
    return OperationDispatch(db)


__all__ = [
    "get_async_session",
    "get_current_user",
    "get_dispatch",
    "get_settings",
]
