"""Centralized dependency injection factories for FastAPI.

The notification hub and publisher are process-wide and live on
``app.state``; every other service is built per request around the
request's database session.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.database import get_db
from hr_api.services.contract_service import ContractService
from hr_api.services.department_service import DepartmentService
from hr_api.services.employee_service import EmployeeService
from hr_api.services.leave_request_service import LeaveRequestService
from hr_api.services.notification_service import NotificationService
from hr_api.services.position_service import PositionService


# =============================================================================
# Process-wide Collaborators
# =============================================================================


def get_notification_service(request: Request) -> NotificationService:
    """Get the application's NotificationService."""
    return request.app.state.notifications


# =============================================================================
# Lifecycle Service Factories
# =============================================================================


def get_contract_service(
    db: AsyncSession = Depends(get_db),
    notifications: NotificationService = Depends(get_notification_service),
) -> ContractService:
    """Get ContractService instance."""
    return ContractService(db, notifications)


def get_leave_request_service(
    db: AsyncSession = Depends(get_db),
    notifications: NotificationService = Depends(get_notification_service),
) -> LeaveRequestService:
    """Get LeaveRequestService instance."""
    return LeaveRequestService(db, notifications)


# =============================================================================
# Organization Service Factories
# =============================================================================


def get_employee_service(
    db: AsyncSession = Depends(get_db),
    notifications: NotificationService = Depends(get_notification_service),
) -> EmployeeService:
    """Get EmployeeService instance."""
    return EmployeeService(db, notifications)


def get_department_service(db: AsyncSession = Depends(get_db)) -> DepartmentService:
    """Get DepartmentService instance."""
    return DepartmentService(db)


def get_position_service(db: AsyncSession = Depends(get_db)) -> PositionService:
    """Get PositionService instance."""
    return PositionService(db)
