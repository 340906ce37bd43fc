"""Employee management service."""

import logging
from typing import NoReturn

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.database import commit_or_raise, is_unique_violation
from hr_api.exceptions import (
    EmployeeAlreadyExistsError,
    EmployeeIsManagerError,
    EmployeeNotFoundError,
    InvalidReferenceError,
    PersistenceError,
)
from hr_api.models.domain.employee import EmployeeStatus
from hr_api.models.dto.employee import (
    EmployeeCreate,
    EmployeeListResponse,
    EmployeeResponse,
    EmployeeUpdate,
)
from hr_api.models.orm.employee import EmployeeORM
from hr_api.repositories.department_repository import DepartmentRepository
from hr_api.repositories.employee_repository import EmployeeRepository
from hr_api.repositories.position_repository import PositionRepository
from hr_api.services.notification_service import NotificationService
from hr_api.utils.validation import normalize_search

logger = logging.getLogger(__name__)


class EmployeeService:
    """Service for employee records and explicit status changes."""

    def __init__(self, session: AsyncSession, notifications: NotificationService) -> None:
        """Initialize service with database session and publisher."""
        self.session = session
        self.notifications = notifications
        self.employee_repo = EmployeeRepository(session)
        self.department_repo = DepartmentRepository(session)
        self.position_repo = PositionRepository(session)

    async def list_employees(
        self,
        status: EmployeeStatus | None = None,
        department_id: int | None = None,
        search: str | None = None,
        offset: int = 0,
        limit: int = 100,
    ) -> EmployeeListResponse:
        """List employees with optional filters.

        Args:
            status: Filter by status
            department_id: Filter by department
            search: Case-insensitive match on name or email
            offset: Pagination offset
            limit: Pagination limit

        Returns:
            Matching employees and the total count
        """
        employees, total = await self.employee_repo.get_all_with_filters(
            status=status,
            department_id=department_id,
            search=normalize_search(search),
            offset=offset,
            limit=limit,
        )
        return EmployeeListResponse(items=[self._to_response(e) for e in employees], total=total)

    async def get_employee(self, employee_id: int) -> EmployeeResponse:
        """Get an employee by ID.

        Raises:
            EmployeeNotFoundError: If the employee does not exist
        """
        employee = await self.employee_repo.get_with_relations(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        return self._to_response(employee)

    async def create_employee(self, data: EmployeeCreate) -> EmployeeResponse:
        """Create an employee. New employees start as active.

        Raises:
            InvalidReferenceError: If the department or position does not exist
            EmployeeAlreadyExistsError: If the email is already in use
        """
        await self._validate_references(data)
        if await self.employee_repo.get_by_email(data.email):
            raise EmployeeAlreadyExistsError(data.email)

        try:
            employee = await self.employee_repo.create(
                **data.model_dump(),
                status=EmployeeStatus.ACTIVE,
            )
        except IntegrityError as e:
            await self._raise_for_integrity_error(e, data.email)
        await commit_or_raise(self.session)
        logger.info(f"Created employee {employee.id}")

        self.notifications.notify_employee_updated(
            employee.id, employee.full_name, "created", "New employee added"
        )
        return await self.get_employee(employee.id)

    async def update_employee(self, employee_id: int, data: EmployeeUpdate) -> EmployeeResponse:
        """Replace an employee's editable fields.

        Raises:
            EmployeeNotFoundError: If the employee does not exist
            InvalidReferenceError: If the department or position does not exist
            EmployeeAlreadyExistsError: If the email belongs to another employee
        """
        employee = await self.employee_repo.get(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)

        await self._validate_references(data)
        existing = await self.employee_repo.get_by_email(data.email)
        if existing is not None and existing.id != employee.id:
            raise EmployeeAlreadyExistsError(data.email)

        try:
            await self.employee_repo.update(employee, **data.model_dump())
        except IntegrityError as e:
            await self._raise_for_integrity_error(e, data.email)
        await commit_or_raise(self.session)
        logger.info(f"Updated employee {employee.id}")

        self.notifications.notify_employee_updated(
            employee.id, employee.full_name, "updated", "Employee details updated"
        )
        return await self.get_employee(employee.id)

    async def delete_employee(self, employee_id: int) -> None:
        """Delete an employee together with their contracts and leave requests.

        Raises:
            EmployeeNotFoundError: If the employee does not exist
            EmployeeIsManagerError: If the employee still manages a department
        """
        employee = await self.employee_repo.get(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)

        managed = await self.department_repo.get_by_manager(employee_id)
        if managed:
            raise EmployeeIsManagerError(employee_id, [d.id for d in managed])

        name = employee.full_name
        await self.employee_repo.delete(employee)
        await commit_or_raise(self.session)
        logger.info(f"Deleted employee {employee_id}")

        self.notifications.notify_employee_updated(
            employee_id, name, "deleted", "Employee removed"
        )

    async def set_active(self, employee_id: int) -> None:
        """Mark an employee as active."""
        await self._set_status(employee_id, EmployeeStatus.ACTIVE)

    async def set_on_leave(self, employee_id: int) -> None:
        """Mark an employee as on leave."""
        await self._set_status(employee_id, EmployeeStatus.ON_LEAVE)

    async def _set_status(self, employee_id: int, status: EmployeeStatus) -> None:
        employee = await self.employee_repo.get(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)

        employee.status = status
        await commit_or_raise(self.session)
        logger.info(f"Employee {employee_id} status set to {status}")

        self.notifications.notify_employee_updated(
            employee.id,
            employee.full_name,
            "status_changed",
            f"Employee status changed to {status}",
        )

    async def _raise_for_integrity_error(self, error: IntegrityError, email: str) -> NoReturn:
        """Translate a rejected insert or update, e.g. a concurrent duplicate email."""
        await self.session.rollback()
        if is_unique_violation(error):
            raise EmployeeAlreadyExistsError(email) from error
        raise PersistenceError() from error

    async def _validate_references(self, data: EmployeeCreate) -> None:
        if data.department_id is not None and not await self.department_repo.exists(
            data.department_id
        ):
            raise InvalidReferenceError("Department", data.department_id)
        if data.position_id is not None and not await self.position_repo.exists(
            data.position_id
        ):
            raise InvalidReferenceError("Position", data.position_id)

    @staticmethod
    def _to_response(employee: EmployeeORM) -> EmployeeResponse:
        return EmployeeResponse(
            id=employee.id,
            full_name=employee.full_name,
            email=employee.email,
            phone=employee.phone,
            avatar_url=employee.avatar_url,
            status=employee.status,
            created_at=employee.created_at,
            department_id=employee.department_id,
            department_name=employee.department.name if employee.department else None,
            position_id=employee.position_id,
            position_title=employee.position.title if employee.position else None,
        )
