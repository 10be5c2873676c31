"""Ownership guard for user-scoped entities."""
from enum import StrEnum
from typing import Protocol, TypeVar

from services.exceptions import NotFoundError


class OwnedEntity(Protocol):
    """Any entity that records the id of the user who owns it."""

    user_id: int


T = TypeVar("T", bound=OwnedEntity)


class Access(StrEnum):
    """Outcome of an ownership check."""

    ALLOWED = "allowed"
    DENIED = "denied"


def authorize(entity: OwnedEntity, caller_id: int) -> Access:
    """Allow access only when the caller is the entity's owner."""
    if entity.user_id == caller_id:
        return Access.ALLOWED
    return Access.DENIED


def require_owner(entity: T, caller_id: int, entity_name: str) -> T:
    """
    Return the entity if the caller owns it.

    Raises:
        NotFoundError: If the caller is not the owner. Denied access is reported
            exactly like a missing entity to prevent ID enumeration.
    """
    if authorize(entity, caller_id) is Access.DENIED:
        raise NotFoundError(entity_name)
    return entity
