"""
Persistence layer for users and bookmarks.

EntityStore wraps a request-scoped AsyncSession and exposes the same five
operations for every model. It holds no business rules: ownership checks live in
services.ownership and are applied by the entity services that compose the store.

Writes use flush(), not commit. The session generator commits once at request end.
"""
import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models.base import Base, utc_now
from services.exceptions import ConstraintViolationError, NotFoundError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=Base)

# Columns the store manages itself; callers can never write them through update()
IMMUTABLE_FIELDS = frozenset({"id", "created_at", "updated_at"})


class EntityStore:
    """Generic CRUD over SQLAlchemy models, raising typed errors instead of returning None."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get(self, model: type[M], entity_id: int) -> M:
        """
        Get an entity by primary key.

        Raises:
            NotFoundError: If no row has this id.
        """
        result = await self.db.execute(select(model).where(model.id == entity_id))
        entity = result.scalar_one_or_none()
        if entity is None:
            raise NotFoundError(model.__name__)
        return entity

    async def find_one(self, model: type[M], **filters: Any) -> M | None:  # noqa: ANN401
        """Get the single entity matching equality filters on unique columns, or None."""
        self._check_columns(model, filters)
        result = await self.db.execute(select(model).filter_by(**filters))
        return result.scalar_one_or_none()

    async def list(self, model: type[M], **filters: Any) -> list[M]:  # noqa: ANN401
        """List entities matching equality filters, oldest first."""
        self._check_columns(model, filters)
        result = await self.db.execute(
            select(model).filter_by(**filters).order_by(model.id),
        )
        return list(result.scalars().all())

    async def create(self, model: type[M], **fields: Any) -> M:  # noqa: ANN401
        """
        Insert a new entity.

        Raises:
            ConstraintViolationError: If the insert violates a unique or foreign key constraint.
        """
        self._check_columns(model, fields)
        entity = model(**fields)
        self.db.add(entity)
        await self._flush(model)
        await self.db.refresh(entity)
        return entity

    async def update(self, model: type[M], entity_id: int, fields: Mapping[str, Any]) -> M:
        """
        Apply a partial update. Fields not present in `fields` keep their value.

        The update is all-or-nothing: field names are checked before anything is
        written, and a constraint failure rolls the session back.

        Raises:
            ValueError: If a field is not a writable column of the model.
            NotFoundError: If no row has this id.
            ConstraintViolationError: If the new values violate a constraint.
        """
        self._check_columns(model, fields)
        protected = IMMUTABLE_FIELDS.intersection(fields)
        if protected:
            raise ValueError(f"Fields cannot be updated: {', '.join(sorted(protected))}")

        entity = await self.get(model, entity_id)
        for field, value in fields.items():
            setattr(entity, field, value)
        entity.updated_at = utc_now()

        await self._flush(model)
        await self.db.refresh(entity)
        return entity

    async def delete(self, model: type[M], entity_id: int) -> None:
        """
        Permanently delete an entity.

        Raises:
            NotFoundError: If no row has this id.
        """
        entity = await self.get(model, entity_id)
        await self.db.delete(entity)
        await self.db.flush()

    # --- Private Helper Methods ---

    @staticmethod
    def _check_columns(model: type[Base], fields: Mapping[str, Any]) -> None:
        """Raise ValueError for names that are not columns of the model's table."""
        unknown = set(fields) - set(model.__table__.columns.keys())
        if unknown:
            raise ValueError(
                f"Unknown {model.__name__} fields: {', '.join(sorted(unknown))}",
            )

    async def _flush(self, model: type[Base]) -> None:
        """Flush pending changes, mapping constraint failures to ConstraintViolationError."""
        try:
            await self.db.flush()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning("Constraint violation writing %s: %s", model.__name__, e.orig)
            raise ConstraintViolationError(
                f"{model.__name__} violates a uniqueness or reference constraint",
            ) from e
