"""
Operation dispatch: explicit routing from operation name to handler function.

Invariants:
    - Every operation -> handler mapping is listed in one dict, no auto-discovery
    - Input is validated into a typed schema before any handler runs
    - The caller's user id is an explicit argument to every handler
    - Unknown operations raise UnknownOperationError
"""
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from models.user import User
from schemas.bookmark import BookmarkCreate, BookmarkUpdate
from schemas.user import UserUpdate
from services import bookmark_service, user_service
from services.exceptions import UnknownOperationError

logger = logging.getLogger(__name__)

Handler = Callable[[AsyncSession, int, BaseModel | None, int | None], Awaitable[Any]]


@dataclass(frozen=True)
class Operation:
    """A registered operation: optional input schema plus the handler it validates for."""

    handler: Handler
    schema: type[BaseModel] | None = None
    requires_entity_id: bool = False


async def _create_bookmark(
    db: AsyncSession, user_id: int, data: BaseModel | None, _entity_id: int | None,
) -> Bookmark:
    return await bookmark_service.create_bookmark(db, user_id, data)


async def _list_bookmarks(
    db: AsyncSession, user_id: int, _data: BaseModel | None, _entity_id: int | None,
) -> list[Bookmark]:
    return await bookmark_service.list_bookmarks(db, user_id)


async def _get_bookmark(
    db: AsyncSession, user_id: int, _data: BaseModel | None, entity_id: int | None,
) -> Bookmark:
    return await bookmark_service.get_bookmark(db, user_id, entity_id)


async def _update_bookmark(
    db: AsyncSession, user_id: int, data: BaseModel | None, entity_id: int | None,
) -> Bookmark:
    return await bookmark_service.update_bookmark(db, user_id, entity_id, data)


async def _delete_bookmark(
    db: AsyncSession, user_id: int, _data: BaseModel | None, entity_id: int | None,
) -> None:
    await bookmark_service.delete_bookmark(db, user_id, entity_id)


async def _get_user(
    db: AsyncSession, user_id: int, _data: BaseModel | None, _entity_id: int | None,
) -> User:
    return await user_service.get_user(db, user_id)


async def _update_user(
    db: AsyncSession, user_id: int, data: BaseModel | None, _entity_id: int | None,
) -> User:
    return await user_service.edit_user(db, user_id, data)


# Adding an operation requires editing this dict
OPERATIONS: dict[str, Operation] = {
    "bookmarks.create": Operation(_create_bookmark, schema=BookmarkCreate),
    "bookmarks.list": Operation(_list_bookmarks),
    "bookmarks.get": Operation(_get_bookmark, requires_entity_id=True),
    "bookmarks.update": Operation(_update_bookmark, schema=BookmarkUpdate, requires_entity_id=True),
    "bookmarks.delete": Operation(_delete_bookmark, requires_entity_id=True),
    "users.get": Operation(_get_user),
    "users.update": Operation(_update_user, schema=UserUpdate),
}


class OperationDispatch:
    """Routes operation name -> handler for one request-scoped session."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    @staticmethod
    def validate(operation: Operation, payload: BaseModel | dict | None) -> BaseModel | None:
        """
        Validate raw input into the operation's schema.

        A payload that is already an instance of the schema is re-validated through a
        dump, so only fields the client actually set survive as "set" fields.

        Raises:
            pydantic.ValidationError: If the payload does not match the schema.
        """
        if operation.schema is None:
            return None
        if isinstance(payload, operation.schema):
            return operation.schema.model_validate(payload.model_dump(exclude_unset=True))
        return operation.schema.model_validate(payload if payload is not None else {})

    async def execute(
        self,
        name: str,
        caller_id: int,
        payload: BaseModel | dict | None = None,
        entity_id: int | None = None,
    ) -> Any:  # noqa: ANN401
        """
        Validate the payload and run the named operation as `caller_id`.

        Raises:
            UnknownOperationError: If `name` is not registered.
            ValueError: If the operation needs an entity id and none was given.
            pydantic.ValidationError: If the payload is invalid.
            NotFoundError, ConstraintViolationError: Propagated from the services.
        """
        operation = OPERATIONS.get(name)
        if operation is None:
            raise UnknownOperationError(name)
        if operation.requires_entity_id and entity_id is None:
            raise ValueError(f"Operation '{name}' requires an entity id")

        data = self.validate(operation, payload)
        logger.debug("Dispatching %s for user %s", name, caller_id)
        return await operation.handler(self._db, caller_id, data, entity_id)
