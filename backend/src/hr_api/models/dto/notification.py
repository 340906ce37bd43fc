"""Real-time notification payloads pushed over the notification hub."""

from datetime import date
from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel

from hr_api.models.domain.contract import EmploymentType
from hr_api.models.domain.leave import LeaveType


class HubEvent(StrEnum):
    """Event names sent to hub clients."""

    CONTRACT_UPDATED = "ContractUpdated"
    CONTRACT_EXPIRING_SOON = "ContractExpiringSoon"
    UPCOMING_LEAVE = "UpcomingLeave"
    LEAVE_REQUEST_UPDATED = "LeaveRequestUpdated"
    EMPLOYEE_UPDATED = "EmployeeUpdated"


class ContractUpdatedPayload(BaseModel):
    """Contract became active or ended."""

    contract_id: int
    employee_id: int
    employee_name: str
    status: str
    end_date: date | None = None
    message: str


class ContractExpiringPayload(BaseModel):
    """Active contract ending within the look-ahead window."""

    contract_id: int
    employee_id: int
    employee_name: str
    employee_email: str
    end_date: date
    days_until_expiry: int
    employment_type: EmploymentType
    base_salary: Decimal


class UpcomingLeavePayload(BaseModel):
    """Approved leave starting within the look-ahead window."""

    leave_request_id: int
    employee_id: int
    employee_name: str
    employee_email: str
    leave_type: LeaveType
    start_date: date
    end_date: date
    days_until_start: int
    reason: str | None = None


class LeaveRequestUpdatedPayload(BaseModel):
    """Leave request changed status."""

    leave_request_id: int
    employee_id: int
    employee_name: str
    status: str
    message: str
    leave_type: LeaveType | None = None
    start_date: date | None = None
    end_date: date | None = None


class EmployeeUpdatedPayload(BaseModel):
    """Employee record created, changed or removed."""

    employee_id: int
    employee_name: str
    change_type: str
    message: str
