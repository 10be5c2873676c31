"""Bookmark CRUD endpoints."""
from fastapi import APIRouter, Depends

from api.dependencies import get_current_user, get_dispatch
from models.user import User
from schemas.bookmark import BookmarkCreate, BookmarkResponse, BookmarkUpdate
from services.operation_dispatch import OperationDispatch

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


@router.post("", response_model=BookmarkResponse, status_code=201)
async def create_bookmark(
    data: BookmarkCreate,
    current_user: User = Depends(get_current_user),
    dispatch: OperationDispatch = Depends(get_dispatch),
) -> BookmarkResponse:
    """Create a new bookmark."""
    bookmark = await dispatch.execute("bookmarks.create", current_user.id, data)
    return BookmarkResponse.model_validate(bookmark)


@router.get("", response_model=list[BookmarkResponse])
async def list_bookmarks(
    current_user: User = Depends(get_current_user),
    dispatch: OperationDispatch = Depends(get_dispatch),
) -> list[BookmarkResponse]:
    """List all bookmarks for the current user."""
    bookmarks = await dispatch.execute("bookmarks.list", current_user.id)
    return [BookmarkResponse.model_validate(b) for b in bookmarks]


@router.get("/{bookmark_id}", response_model=BookmarkResponse)
async def get_bookmark(
    bookmark_id: int,
    current_user: User = Depends(get_current_user),
    dispatch: OperationDispatch = Depends(get_dispatch),
) -> BookmarkResponse:
    """Get a single bookmark by ID. Other users' bookmarks return 404."""
    bookmark = await dispatch.execute("bookmarks.get", current_user.id, entity_id=bookmark_id)
    return BookmarkResponse.model_validate(bookmark)


@router.patch("/{bookmark_id}", response_model=BookmarkResponse)
async def update_bookmark(
    bookmark_id: int,
    data: BookmarkUpdate,
    current_user: User = Depends(get_current_user),
    dispatch: OperationDispatch = Depends(get_dispatch),
) -> BookmarkResponse:
    """Update a bookmark. Only fields present in the body are changed."""
    bookmark = await dispatch.execute(
        "bookmarks.update", current_user.id, data, entity_id=bookmark_id,
    )
    return BookmarkResponse.model_validate(bookmark)


@router.delete("/{bookmark_id}", status_code=204)
async def delete_bookmark(
    bookmark_id: int,
    current_user: User = Depends(get_current_user),
    dispatch: OperationDispatch = Depends(get_dispatch),
) -> None:
    """Permanently delete a bookmark."""
    await dispatch.execute("bookmarks.delete", current_user.id, entity_id=bookmark_id)
