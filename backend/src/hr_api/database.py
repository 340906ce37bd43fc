"""Database connection and session management."""

import logging
from collections.abc import AsyncGenerator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from hr_api.config import get_settings
from hr_api.exceptions import PersistenceError
from hr_api.utils.secure_logging import log_error

logger = logging.getLogger(__name__)

settings = get_settings()

engine = create_async_engine(
    settings.async_database_url,
    pool_size=settings.database_pool_size,
    max_overflow=settings.database_max_overflow,
    # Validate connections before checkout to detect stale connections
    pool_pre_ping=True,
    pool_recycle=3600,
    echo=False,
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            raise


async def commit_or_raise(session: AsyncSession) -> None:
    """Commit the pending unit of work atomically.

    Args:
        session: Session holding the mutations

    Raises:
        PersistenceError: If the database rejects the commit. The session is
            rolled back, so none of the mutations are applied.
    """
    try:
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        log_error(logger, "Commit rejected by database", e)
        raise PersistenceError() from e


def is_unique_violation(error: IntegrityError) -> bool:
    """Check whether an integrity error was raised by a unique constraint."""
    message = str(error.orig).lower()
    return "unique" in message or "duplicate" in message
