"""Repositories package."""

from hr_api.repositories.base import BaseRepository
from hr_api.repositories.contract_repository import ContractRepository
from hr_api.repositories.department_repository import DepartmentRepository
from hr_api.repositories.employee_repository import EmployeeRepository
from hr_api.repositories.leave_request_repository import LeaveRequestRepository
from hr_api.repositories.position_repository import PositionRepository

__all__ = [
    "BaseRepository",
    "ContractRepository",
    "DepartmentRepository",
    "EmployeeRepository",
    "LeaveRequestRepository",
    "PositionRepository",
]
