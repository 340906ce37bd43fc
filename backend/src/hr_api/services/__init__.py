"""Services package."""

from hr_api.services.contract_service import ContractService
from hr_api.services.department_service import DepartmentService
from hr_api.services.employee_service import EmployeeService
from hr_api.services.leave_request_service import LeaveRequestService
from hr_api.services.monitoring_service import MonitoringService, SweepResult
from hr_api.services.notification_hub import NotificationHub
from hr_api.services.notification_service import NotificationService
from hr_api.services.position_service import PositionService

__all__ = [
    "ContractService",
    "DepartmentService",
    "EmployeeService",
    "LeaveRequestService",
    "MonitoringService",
    "NotificationHub",
    "NotificationService",
    "PositionService",
    "SweepResult",
]
