"""Employee repository."""

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from hr_api.models.orm.employee import EmployeeORM
from hr_api.repositories.base import BaseRepository
from hr_api.utils.validation import escape_like_wildcards


class EmployeeRepository(BaseRepository[EmployeeORM]):
    """Repository for employee operations."""

    model = EmployeeORM

    async def get_with_relations(self, employee_id: int) -> EmployeeORM | None:
        """Get an employee with department and position loaded.

        Args:
            employee_id: Employee ID

        Returns:
            EmployeeORM or None if not found
        """
        result = await self.session.execute(
            select(EmployeeORM)
            .where(EmployeeORM.id == employee_id)
            .options(
                selectinload(EmployeeORM.department),
                selectinload(EmployeeORM.position),
            )
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> EmployeeORM | None:
        """Get employee by email.

        Args:
            email: Employee email address

        Returns:
            EmployeeORM or None if not found
        """
        result = await self.session.execute(
            select(EmployeeORM).where(func.lower(EmployeeORM.email) == email.lower())
        )
        return result.scalar_one_or_none()

    async def get_all_with_filters(
        self,
        status: str | None = None,
        department_id: int | None = None,
        search: str | None = None,
        offset: int = 0,
        limit: int = 100,
    ) -> tuple[list[EmployeeORM], int]:
        """Get employees with optional filters, ordered by name.

        Args:
            status: Filter by status
            department_id: Filter by department
            search: Search in name or email
            offset: Pagination offset
            limit: Pagination limit

        Returns:
            Tuple of (employees, total_count)
        """
        query = select(EmployeeORM)
        count_query = select(func.count()).select_from(EmployeeORM)

        if status:
            query = query.where(EmployeeORM.status == status)
            count_query = count_query.where(EmployeeORM.status == status)

        if department_id is not None:
            query = query.where(EmployeeORM.department_id == department_id)
            count_query = count_query.where(EmployeeORM.department_id == department_id)

        if search:
            pattern = f"%{escape_like_wildcards(search)}%"
            search_filter = EmployeeORM.full_name.ilike(
                pattern, escape="\\"
            ) | EmployeeORM.email.ilike(pattern, escape="\\")
            query = query.where(search_filter)
            count_query = count_query.where(search_filter)

        total = (await self.session.execute(count_query)).scalar_one()

        result = await self.session.execute(
            query.options(
                selectinload(EmployeeORM.department),
                selectinload(EmployeeORM.position),
            )
            .order_by(EmployeeORM.full_name, EmployeeORM.id)
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all()), total
