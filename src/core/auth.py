"""Authentication module: password hashing, access token issuance, and identity resolution."""
import logging
from datetime import UTC, datetime, timedelta

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings, get_settings
from db.session import get_async_session
from models.user import User
from services.entity_store import EntityStore
from services.exceptions import InvalidCredentialError, NotFoundError

logger = logging.getLogger(__name__)


# HTTP Bearer token scheme
security = HTTPBearer(auto_error=False)

# PBKDF2 needs no native backend; "deprecated=auto" lets hashes be upgraded if schemes change
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash a plaintext password for storage."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored hash."""
    return pwd_context.verify(plain_password, password_hash)


def create_access_token(user_id: int, email: str, settings: Settings) -> str:
    """
    Issue a signed access token for a user.

    The subject claim carries the user id as a string (JWT requires `sub` to be a string).
    """
    now = datetime.now(UTC)
    payload = {
        "sub": str(user_id),
        "email": email,
        "iat": now,
        "exp": now + timedelta(minutes=settings.access_token_expire_minutes),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def resolve_identity(credential: str, settings: Settings) -> int:
    """
    Resolve an access token to the integer id of the user it was issued to.

    The token format is opaque to callers; only the returned id is consumed.

    Raises:
        InvalidCredentialError: If the token is malformed, expired, has a bad
            signature, or carries no usable subject.
    """
    try:
        payload = jwt.decode(
            credential,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise InvalidCredentialError("Token has expired")
    except jwt.PyJWTError as e:
        # Log details server-side only
        logger.warning("JWT validation failed: %s", e)
        raise InvalidCredentialError("Invalid token")

    try:
        return int(payload["sub"])
    except (TypeError, ValueError):
        raise InvalidCredentialError("Invalid token: malformed sub claim")


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> User:
    """
    Dependency that validates the bearer token and returns the current user.

    Raises:
        InvalidCredentialError: If no token is sent, the token is invalid, or its
            user no longer exists.
    """
    if credentials is None:
        raise InvalidCredentialError("Not authenticated")

    user_id = resolve_identity(credentials.credentials, settings)
    try:
        return await EntityStore(db).get(User, user_id)
    except NotFoundError:
        raise InvalidCredentialError("User not found")
