"""Department management service."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.database import commit_or_raise
from hr_api.exceptions import DepartmentNotFoundError, InvalidReferenceError
from hr_api.models.dto.department import DepartmentCreate, DepartmentResponse
from hr_api.models.orm.department import DepartmentORM
from hr_api.repositories.department_repository import DepartmentRepository
from hr_api.repositories.employee_repository import EmployeeRepository

logger = logging.getLogger(__name__)


class DepartmentService:
    """Service for department CRUD."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.department_repo = DepartmentRepository(session)
        self.employee_repo = EmployeeRepository(session)

    async def list_departments(self) -> list[DepartmentResponse]:
        """List all departments with manager name and headcount."""
        rows = await self.department_repo.get_all_with_counts()
        return [self._to_response(d, count) for d, count in rows]

    async def get_department(self, department_id: int) -> DepartmentResponse:
        """Get a department by ID.

        Raises:
            DepartmentNotFoundError: If the department does not exist
        """
        row = await self.department_repo.get_with_count(department_id)
        if row is None:
            raise DepartmentNotFoundError(department_id)
        return self._to_response(*row)

    async def create_department(self, data: DepartmentCreate) -> DepartmentResponse:
        """Create a department.

        Raises:
            InvalidReferenceError: If the manager does not exist
        """
        await self._validate_manager(data.manager_id)
        department = await self.department_repo.create(**data.model_dump())
        await commit_or_raise(self.session)
        logger.info(f"Created department {department.id}")
        return await self.get_department(department.id)

    async def update_department(
        self, department_id: int, data: DepartmentCreate
    ) -> DepartmentResponse:
        """Replace a department's name and manager.

        Raises:
            DepartmentNotFoundError: If the department does not exist
            InvalidReferenceError: If the manager does not exist
        """
        department = await self.department_repo.get(department_id)
        if department is None:
            raise DepartmentNotFoundError(department_id)

        await self._validate_manager(data.manager_id)
        await self.department_repo.update(department, **data.model_dump())
        await commit_or_raise(self.session)
        logger.info(f"Updated department {department.id}")
        return await self.get_department(department.id)

    async def delete_department(self, department_id: int) -> None:
        """Delete a department and its positions. Members lose their department.

        Raises:
            DepartmentNotFoundError: If the department does not exist
        """
        department = await self.department_repo.get(department_id)
        if department is None:
            raise DepartmentNotFoundError(department_id)

        await self.department_repo.delete(department)
        await commit_or_raise(self.session)
        logger.info(f"Deleted department {department_id}")

    async def _validate_manager(self, manager_id: int | None) -> None:
        if manager_id is not None and not await self.employee_repo.exists(manager_id):
            raise InvalidReferenceError("Manager", manager_id)

    @staticmethod
    def _to_response(department: DepartmentORM, employee_count: int) -> DepartmentResponse:
        return DepartmentResponse(
            id=department.id,
            name=department.name,
            manager_id=department.manager_id,
            manager_name=department.manager.full_name if department.manager else None,
            employee_count=employee_count,
        )
