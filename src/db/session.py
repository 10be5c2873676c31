"""Async SQLAlchemy session factory."""
from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from core.config import get_settings


settings = get_settings()


def enable_sqlite_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:  # noqa: ANN401
    """SQLite leaves FOREIGN KEY and ON DELETE CASCADE unenforced until this pragma is set."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# SQLite uses a single-connection pool that rejects sizing arguments
engine_options: dict = {"echo": False}
if not settings.is_sqlite:
    engine_options.update(
        pool_pre_ping=True,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
    )

engine = create_async_engine(settings.database_url, **engine_options)

if settings.is_sqlite:
    event.listen(engine.sync_engine, "connect", enable_sqlite_foreign_keys)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """
    Yield an async database session.

    Uses unit-of-work pattern: services use flush() for refreshing objects,
    commit happens once here at request end. If anything fails, all changes
    made during the request are rolled back.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
