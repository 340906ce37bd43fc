"""Base repository with common database operations."""

from typing import Any, Generic, TypeVar

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.models.orm.base import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """Base repository with common CRUD operations.

    Repositories only flush. Committing is the service's job so that every
    operation is applied as one unit of work.
    """

    model: type[T]

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def get(self, id: int) -> T | None:
        """Get a record by ID.

        Args:
            id: Record ID

        Returns:
            Record or None if not found
        """
        result = await self.session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def get_for_update(self, id: int) -> T | None:
        """Get a record by ID and lock its row until the transaction ends.

        Args:
            id: Record ID

        Returns:
            Record or None if not found
        """
        result = await self.session.execute(
            select(self.model).where(self.model.id == id).with_for_update()
        )
        return result.scalar_one_or_none()

    async def exists(self, id: int) -> bool:
        """Check whether a record with this ID exists."""
        result = await self.session.execute(select(exists().where(self.model.id == id)))
        return bool(result.scalar())

    async def create(self, **kwargs: Any) -> T:
        """Create a new record.

        Args:
            **kwargs: Field values

        Returns:
            Created record with its database-assigned ID
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        return instance

    async def update(self, instance: T, **kwargs: Any) -> T:
        """Apply field values to a loaded record.

        Args:
            instance: Record to modify
            **kwargs: Fields to update; unknown names are ignored

        Returns:
            The updated record
        """
        for key, value in kwargs.items():
            if hasattr(instance, key):
                setattr(instance, key, value)
        await self.session.flush()
        return instance

    async def delete(self, instance: T) -> None:
        """Delete a loaded record."""
        await self.session.delete(instance)
        await self.session.flush()
