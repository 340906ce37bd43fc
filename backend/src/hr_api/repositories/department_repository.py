"""Department repository."""

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from hr_api.models.orm.department import DepartmentORM
from hr_api.models.orm.employee import EmployeeORM
from hr_api.repositories.base import BaseRepository


class DepartmentRepository(BaseRepository[DepartmentORM]):
    """Repository for department operations."""

    model = DepartmentORM

    def _with_counts(self):
        employee_count = (
            select(func.count(EmployeeORM.id))
            .where(EmployeeORM.department_id == DepartmentORM.id)
            .correlate(DepartmentORM)
            .scalar_subquery()
        )
        return select(DepartmentORM, employee_count).options(
            selectinload(DepartmentORM.manager)
        )

    async def get_with_count(self, department_id: int) -> tuple[DepartmentORM, int] | None:
        """Get a department with its manager loaded and its employee count.

        Args:
            department_id: Department ID

        Returns:
            Tuple of (department, employee_count) or None if not found
        """
        result = await self.session.execute(
            self._with_counts()
            .where(DepartmentORM.id == department_id)
            .execution_options(populate_existing=True)
        )
        row = result.one_or_none()
        if row is None:
            return None
        return row[0], row[1]

    async def get_all_with_counts(self) -> list[tuple[DepartmentORM, int]]:
        """Get all departments ordered by name, each with its employee count."""
        result = await self.session.execute(
            self._with_counts().order_by(DepartmentORM.name, DepartmentORM.id)
        )
        return [(row[0], row[1]) for row in result.all()]

    async def get_by_manager(self, employee_id: int) -> list[DepartmentORM]:
        """Get departments managed by an employee."""
        result = await self.session.execute(
            select(DepartmentORM).where(DepartmentORM.manager_id == employee_id)
        )
        return list(result.scalars().all())
