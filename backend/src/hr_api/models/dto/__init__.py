"""Data Transfer Objects package."""

from hr_api.models.dto.contract import ContractCreate, ContractResponse, EndedContract
from hr_api.models.dto.department import DepartmentCreate, DepartmentResponse
from hr_api.models.dto.employee import (
    EmployeeCreate,
    EmployeeListResponse,
    EmployeeResponse,
    EmployeeUpdate,
)
from hr_api.models.dto.leave_request import (
    CompletedLeave,
    LeaveDecision,
    LeaveRequestCreate,
    LeaveRequestResponse,
    LeaveRequestUpdate,
)
from hr_api.models.dto.notification import HubEvent
from hr_api.models.dto.position import PositionCreate, PositionResponse

__all__ = [
    "CompletedLeave",
    "ContractCreate",
    "ContractResponse",
    "DepartmentCreate",
    "DepartmentResponse",
    "EmployeeCreate",
    "EmployeeListResponse",
    "EmployeeResponse",
    "EmployeeUpdate",
    "EndedContract",
    "HubEvent",
    "LeaveDecision",
    "LeaveRequestCreate",
    "LeaveRequestResponse",
    "LeaveRequestUpdate",
    "PositionCreate",
    "PositionResponse",
]
