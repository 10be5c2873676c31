"""Shared exceptions for service layer operations."""


class NotFoundError(Exception):
    """
    Raised when an entity does not exist or is not owned by the caller.

    Both cases carry the same message so that a caller cannot tell another
    user's record apart from a missing one.
    """

    def __init__(self, entity_name: str) -> None:
        self.entity_name = entity_name
        super().__init__(f"{entity_name} not found")


class ConstraintViolationError(Exception):
    """Raised when a create or update would violate a uniqueness or reference constraint."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class InvalidCredentialError(Exception):
    """Raised when a password or access token cannot be resolved to a user."""

    def __init__(self, message: str = "Could not validate credentials") -> None:
        super().__init__(message)


class UnknownOperationError(Exception):
    """Raised when the dispatcher is asked for an operation it does not register."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Unknown operation: {operation}")
