"""Position repository."""

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from hr_api.models.orm.employee import EmployeeORM
from hr_api.models.orm.position import PositionORM
from hr_api.repositories.base import BaseRepository


class PositionRepository(BaseRepository[PositionORM]):
    """Repository for position operations."""

    model = PositionORM

    def _with_counts(self):
        employee_count = (
            select(func.count(EmployeeORM.id))
            .where(EmployeeORM.position_id == PositionORM.id)
            .correlate(PositionORM)
            .scalar_subquery()
        )
        return select(PositionORM, employee_count).options(
            selectinload(PositionORM.department)
        )

    async def get_with_count(self, position_id: int) -> tuple[PositionORM, int] | None:
        """Get a position with its department loaded and its employee count.

        Args:
            position_id: Position ID

        Returns:
            Tuple of (position, employee_count) or None if not found
        """
        result = await self.session.execute(
            self._with_counts()
            .where(PositionORM.id == position_id)
            .execution_options(populate_existing=True)
        )
        row = result.one_or_none()
        if row is None:
            return None
        return row[0], row[1]

    async def get_all_with_counts(
        self, department_id: int | None = None
    ) -> list[tuple[PositionORM, int]]:
        """Get positions ordered by department and title.

        Args:
            department_id: Only positions of this department

        Returns:
            List of (position, employee_count) tuples
        """
        query = self._with_counts()
        if department_id is not None:
            query = query.where(PositionORM.department_id == department_id)
        result = await self.session.execute(
            query.order_by(PositionORM.department_id, PositionORM.title, PositionORM.id)
        )
        return [(row[0], row[1]) for row in result.all()]
