"""Position management service."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.database import commit_or_raise
from hr_api.exceptions import InvalidReferenceError, PositionNotFoundError
from hr_api.models.dto.position import PositionCreate, PositionResponse
from hr_api.models.orm.position import PositionORM
from hr_api.repositories.department_repository import DepartmentRepository
from hr_api.repositories.position_repository import PositionRepository

logger = logging.getLogger(__name__)


class PositionService:
    """Service for position CRUD."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.position_repo = PositionRepository(session)
        self.department_repo = DepartmentRepository(session)

    async def list_positions(self, department_id: int | None = None) -> list[PositionResponse]:
        """List positions, optionally only those of one department."""
        rows = await self.position_repo.get_all_with_counts(department_id=department_id)
        return [self._to_response(p, count) for p, count in rows]

    async def get_position(self, position_id: int) -> PositionResponse:
        """Get a position by ID.

        Raises:
            PositionNotFoundError: If the position does not exist
        """
        row = await self.position_repo.get_with_count(position_id)
        if row is None:
            raise PositionNotFoundError(position_id)
        return self._to_response(*row)

    async def create_position(self, data: PositionCreate) -> PositionResponse:
        """Create a position.

        Raises:
            InvalidReferenceError: If the department does not exist
        """
        await self._validate_department(data.department_id)
        position = await self.position_repo.create(**data.model_dump())
        await commit_or_raise(self.session)
        logger.info(f"Created position {position.id}")
        return await self.get_position(position.id)

    async def update_position(self, position_id: int, data: PositionCreate) -> PositionResponse:
        """Replace a position's title and department.

        Raises:
            PositionNotFoundError: If the position does not exist
            InvalidReferenceError: If the department does not exist
        """
        position = await self.position_repo.get(position_id)
        if position is None:
            raise PositionNotFoundError(position_id)

        await self._validate_department(data.department_id)
        await self.position_repo.update(position, **data.model_dump())
        await commit_or_raise(self.session)
        logger.info(f"Updated position {position.id}")
        return await self.get_position(position.id)

    async def delete_position(self, position_id: int) -> None:
        """Delete a position. Holders keep their record without a position.

        Raises:
            PositionNotFoundError: If the position does not exist
        """
        position = await self.position_repo.get(position_id)
        if position is None:
            raise PositionNotFoundError(position_id)

        await self.position_repo.delete(position)
        await commit_or_raise(self.session)
        logger.info(f"Deleted position {position_id}")

    async def _validate_department(self, department_id: int) -> None:
        if not await self.department_repo.exists(department_id):
            raise InvalidReferenceError("Department", department_id)

    @staticmethod
    def _to_response(position: PositionORM, employee_count: int) -> PositionResponse:
        return PositionResponse(
            id=position.id,
            title=position.title,
            department_id=position.department_id,
            department_name=position.department.name if position.department else "",
            employee_count=employee_count,
        )
