"""Service layer for signup, signin, and profile editing."""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import create_access_token, hash_password, verify_password
from core.config import Settings
from models.user import User
from schemas.auth import AuthRequest, TokenResponse
from schemas.user import UserUpdate
from services.entity_store import EntityStore
from services.exceptions import ConstraintViolationError, InvalidCredentialError

logger = logging.getLogger(__name__)

# Same message for unknown email and wrong password so signin does not reveal registered emails
CREDENTIALS_INCORRECT = "Credentials incorrect"

# Verified against when the email is unknown so both signin failures cost one hash check
_DUMMY_PASSWORD_HASH = hash_password("unused-password-for-unknown-emails")


def _normalize_email(email: str) -> str:
    return email.strip().lower()


async def _ensure_email_available(
    store: EntityStore,
    email: str,
    exclude_user_id: int | None = None,
) -> None:
    """
    Early uniqueness check for a better error message.

    The unique constraint on users.email still guards against races; the store maps
    that IntegrityError to ConstraintViolationError too.
    """
    existing = await store.find_one(User, email=email)
    if existing is not None and existing.id != exclude_user_id:
        raise ConstraintViolationError("Email already registered")


async def signup(
    db: AsyncSession,
    data: AuthRequest,
    settings: Settings,
) -> TokenResponse:
    """
    Register a new user and issue an access token.

    Raises:
        ConstraintViolationError: If the email is already registered.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    store = EntityStore(db)
    email = _normalize_email(data.email)
    await _ensure_email_available(store, email)

    user = await store.create(
        User,
        email=email,
        password_hash=hash_password(data.password),
    )
    logger.info("Registered user %s", user.id)
    return TokenResponse(access_token=create_access_token(user.id, user.email, settings))


async def signin(
    db: AsyncSession,
    data: AuthRequest,
    settings: Settings,
) -> TokenResponse:
    """
    Verify credentials and issue an access token.

    Raises:
        InvalidCredentialError: If the email is unknown or the password is wrong.
    """
    user = await EntityStore(db).find_one(User, email=_normalize_email(data.email))
    password_hash = user.password_hash if user is not None else _DUMMY_PASSWORD_HASH
    password_ok = verify_password(data.password, password_hash)
    if user is None or not password_ok:
        logger.warning("Failed signin attempt")
        raise InvalidCredentialError(CREDENTIALS_INCORRECT)
    return TokenResponse(access_token=create_access_token(user.id, user.email, settings))


async def get_user(db: AsyncSession, user_id: int) -> User:
    """
    Get a user by ID.

    Raises:
        NotFoundError: If no such user exists.
    """
    return await EntityStore(db).get(User, user_id)


async def edit_user(
    db: AsyncSession,
    user_id: int,
    data: UserUpdate,
) -> User:
    """
    Update the caller's own profile. Omitted fields are left unchanged.

    Raises:
        NotFoundError: If no such user exists.
        ConstraintViolationError: If the new email belongs to another user.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    store = EntityStore(db)
    update_data = data.model_dump(exclude_unset=True)
    if "email" in update_data:
        update_data["email"] = _normalize_email(update_data["email"])
        await _ensure_email_available(store, update_data["email"], exclude_user_id=user_id)
    return await store.update(User, user_id, update_data)
