"""Tests for the operation dispatch table."""
import pytest
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from models.user import User
from schemas.bookmark import BookmarkUpdate
from services.exceptions import NotFoundError, UnknownOperationError
from services.operation_dispatch import OPERATIONS, OperationDispatch


@pytest.fixture
def dispatch(db_session: AsyncSession) -> OperationDispatch:
    return OperationDispatch(db_session)


def test__operations__registers_every_bookmark_and_user_operation() -> None:
    assert set(OPERATIONS) == {
        "bookmarks.create",
        "bookmarks.list",
        "bookmarks.get",
        "bookmarks.update",
        "bookmarks.delete",
        "users.get",
        "users.update",
    }


async def test__execute__unknown_operation_raises(dispatch: OperationDispatch) -> None:
    with pytest.raises(UnknownOperationError, match="Unknown operation: bookmarks.archive"):
        await dispatch.execute("bookmarks.archive", 1)


async def test__execute__validates_dict_payload_before_handler(
    dispatch: OperationDispatch,
    test_user: User,
) -> None:
    """An invalid payload never reaches the service layer."""
    with pytest.raises(ValidationError):
        await dispatch.execute("bookmarks.create", test_user.id, {"link": "http://x"})

    assert await dispatch.execute("bookmarks.list", test_user.id) == []


async def test__execute__requires_entity_id(
    dispatch: OperationDispatch,
    test_user: User,
) -> None:
    with pytest.raises(ValueError, match="requires an entity id"):
        await dispatch.execute("bookmarks.get", test_user.id)


async def test__execute__full_bookmark_lifecycle(
    dispatch: OperationDispatch,
    test_user: User,
    other_user: User,
) -> None:
    created = await dispatch.execute(
        "bookmarks.create",
        test_user.id,
        {"title": "First", "link": "http://x", "description": "desc"},
    )

    updated = await dispatch.execute(
        "bookmarks.update", test_user.id, {"title": "Renamed"}, entity_id=created.id,
    )
    assert updated.title == "Renamed"
    assert updated.description == "desc"

    with pytest.raises(NotFoundError):
        await dispatch.execute("bookmarks.get", other_user.id, entity_id=created.id)

    await dispatch.execute("bookmarks.delete", test_user.id, entity_id=created.id)
    assert await dispatch.execute("bookmarks.list", test_user.id) == []


async def test__execute__model_payload_keeps_unset_fields_unset(
    dispatch: OperationDispatch,
    test_user: User,
) -> None:
    created = await dispatch.execute(
        "bookmarks.create",
        test_user.id,
        {"title": "T", "link": "http://x", "description": "keep"},
    )

    updated = await dispatch.execute(
        "bookmarks.update", test_user.id, BookmarkUpdate(link="http://y"), entity_id=created.id,
    )

    assert updated.link == "http://y"
    assert updated.description == "keep"


async def test__execute__users_get_and_update(
    dispatch: OperationDispatch,
    test_user: User,
) -> None:
    user = await dispatch.execute("users.get", test_user.id)
    assert user.email == "test@example.com"

    updated = await dispatch.execute("users.update", test_user.id, {"last_name": "Doe"})
    assert updated.last_name == "Doe"
