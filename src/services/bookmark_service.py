"""Service layer for owner-scoped bookmark CRUD operations."""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from schemas.bookmark import BookmarkCreate, BookmarkUpdate
from services.entity_store import EntityStore
from services.ownership import require_owner

logger = logging.getLogger(__name__)

ENTITY_NAME = "Bookmark"


async def create_bookmark(
    db: AsyncSession,
    user_id: int,
    data: BookmarkCreate,
) -> Bookmark:
    """
    Create a new bookmark owned by the caller.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    bookmark = await EntityStore(db).create(
        Bookmark,
        user_id=user_id,
        title=data.title,
        link=data.link,
        description=data.description,
    )
    logger.debug("Created bookmark %s for user %s", bookmark.id, user_id)
    return bookmark


async def list_bookmarks(
    db: AsyncSession,
    user_id: int,
) -> list[Bookmark]:
    """Get all bookmarks owned by the caller. Other users' rows are never included."""
    return await EntityStore(db).list(Bookmark, user_id=user_id)


async def get_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
) -> Bookmark:
    """
    Get a bookmark by ID, scoped to the caller.

    Raises:
        NotFoundError: If the bookmark does not exist or belongs to another user.
    """
    bookmark = await EntityStore(db).get(Bookmark, bookmark_id)
    return require_owner(bookmark, user_id, ENTITY_NAME)


async def update_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
    data: BookmarkUpdate,
) -> Bookmark:
    """
    Update the fields present in the request; omitted fields keep their value.

    Raises:
        NotFoundError: If the bookmark does not exist or belongs to another user.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    await get_bookmark(db, user_id, bookmark_id)
    update_data = data.model_dump(exclude_unset=True)
    return await EntityStore(db).update(Bookmark, bookmark_id, update_data)


async def delete_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
) -> None:
    """
    Permanently delete a bookmark.

    Deleting an already deleted bookmark raises NotFoundError, so repeating the
    request is safe.

    Raises:
        NotFoundError: If the bookmark does not exist or belongs to another user.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    await get_bookmark(db, user_id, bookmark_id)
    await EntityStore(db).delete(Bookmark, bookmark_id)
    logger.debug("Deleted bookmark %s for user %s", bookmark_id, user_id)
